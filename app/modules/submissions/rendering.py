"""HTML documents describing a submission: the archived PDF and the email."""

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from jinja2 import Environment, FileSystemLoader, select_autoescape

from infrastructure.i18n import Locale, Translator
from infrastructure.persistence.filters import parse_datetime
from modules.forms.models import Form, FormField
from modules.submissions import ADMIN_PATH

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(enabled_extensions=("html.j2",)),
    trim_blocks=True,
    lstrip_blocks=True,
)


@dataclass
class SubmissionView:
    """What the templates need to know about a stored submission."""

    id: int
    submitted_at: datetime
    data: Dict[str, Any]


def format_value(form_field: FormField, value: Any, yes: str, no: str) -> str:
    if form_field.type == "checkbox":
        return yes if value else no
    if form_field.type == "date":
        return format_date(value)
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)


def format_date(value: Any) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    parsed = parse_datetime(value)
    if isinstance(parsed, datetime):
        return parsed.date().isoformat()
    return str(value)


def display_rows(
    form: Form, data: Dict[str, Any], yes: str = "Yes", no: str = "No"
) -> List[Tuple[str, str]]:
    """(label, display value) of every field with a non-empty value, in form order."""
    rows = []
    for form_field in form.fields:
        value = data.get(form_field.key)
        if value is None or value == "":
            continue
        rows.append((form_field.label, format_value(form_field, value, yes, no)))
    return rows


def admin_link(admin_url: str, submission_id: Any) -> str:
    return f"{admin_url.rstrip('/')}{ADMIN_PATH}/{submission_id}"


def _direction(locale: str) -> str:
    try:
        return "rtl" if Locale.from_string(locale).is_rtl else "ltr"
    except ValueError:
        return "ltr"


def _context(
    form: Form, submission: SubmissionView, translator: Translator, locale: str
) -> Dict[str, Any]:
    def t(key: str, **variables: Any) -> str:
        return translator.translate_message(key, locale, variables)

    return {
        "locale": locale,
        "direction": _direction(locale),
        "form_name": form.name,
        "submission_id": submission.id,
        "submitted_at": submission.submitted_at.strftime("%Y-%m-%d %H:%M UTC"),
        "rows": display_rows(
            form, submission.data, t("submissions.answer_yes"), t("submissions.answer_no")
        ),
        "labels": {
            "heading": t("forms.submission_heading"),
            "form": t("forms.form"),
            "submitted": t("forms.submitted"),
            "submission_id": t("forms.submission_id"),
            "submission_data": t("forms.submission_data"),
            "view_in_admin": t("forms.view_in_admin"),
            "footer": t("forms.automated_footer", name=form.name),
        },
    }


def render_pdf_html(
    form: Form, submission: SubmissionView, translator: Translator, locale: str
) -> str:
    """HTML source of the archived submission PDF."""
    template = _env.get_template("submission_pdf.html.j2")
    return template.render(**_context(form, submission, translator, locale))


def render_email_html(
    form: Form,
    submission: SubmissionView,
    translator: Translator,
    locale: str,
    admin_url: Optional[str],
) -> str:
    """HTML body of the notification email, linking to the admin panel."""
    template = _env.get_template("notification_email.html.j2")
    return template.render(
        admin_link=admin_link(admin_url or "", submission.id),
        **_context(form, submission, translator, locale),
    )
