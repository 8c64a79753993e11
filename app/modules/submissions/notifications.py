"""Submission side effects.

Both operations report their outcome through OperationResult and never
raise, so a failed PDF or email leaves the stored submission intact.
"""

import time
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from infrastructure.i18n import Translator
from infrastructure.logging import get_module_logger
from infrastructure.notifications import Attachment, EmailMessage, Mailer, PdfRenderer
from infrastructure.operations import OperationResult
from infrastructure.persistence import FileStore, StoredFile, StoreError
from modules.forms.models import Form
from modules.submissions.rendering import (
    SubmissionView,
    render_email_html,
    render_pdf_html,
)

logger = get_module_logger()

PDF_CONTENT_TYPE = "application/pdf"


@dataclass
class GeneratedPdf:
    """A rendered submission PDF and the stored file holding it."""

    file: StoredFile
    content: bytes


def pdf_filename(submission_id: int) -> str:
    return f"form-submission-{submission_id}-{int(time.time() * 1000)}.pdf"


async def generate_pdf(
    form: Form,
    submission: SubmissionView,
    renderer: Optional[PdfRenderer],
    file_store: FileStore,
    translator: Translator,
    locale: str,
) -> OperationResult:
    """Render the submission to PDF and store it.

    Returns:
        OperationResult whose data is a GeneratedPdf on success. Skipped
        when no renderer is configured.
    """
    log = logger.bind(form=form.slug, submission_id=submission.id)
    if renderer is None:
        log.info("pdf_generation_skipped", reason="no_renderer")
        return OperationResult.skipped("No PDF renderer configured")

    html = render_pdf_html(form, submission, translator, locale)
    try:
        content = await renderer.render(html)
    except Exception as e:
        log.error("pdf_render_failed", error=str(e))
        return OperationResult.permanent_error(str(e), error_code="PDF_RENDER_FAILED")

    try:
        stored = await file_store.upload(
            content,
            pdf_filename(submission.id),
            PDF_CONTENT_TYPE,
            caption=f"Form Submission: {form.name}",
        )
    except StoreError as e:
        log.error("pdf_upload_failed", error=e.message)
        return OperationResult.transient_error(e.message, error_code="PDF_UPLOAD_FAILED")

    log.info("pdf_generated", file_id=stored.id, size=stored.size)
    return OperationResult.success(
        data=GeneratedPdf(file=stored, content=content), message="PDF stored"
    )


async def send_notification_email(
    form: Form,
    submission: SubmissionView,
    mailer: Optional[Mailer],
    translator: Translator,
    locale: str,
    admin_url: Optional[str] = None,
    pdf: Optional[GeneratedPdf] = None,
) -> OperationResult:
    """Email the submission to the form's notification addresses.

    The PDF is attached when the form has `sendPdf` set and one was generated.
    """
    log = logger.bind(form=form.slug, submission_id=submission.id)
    if not form.notification_emails:
        return OperationResult.skipped("Form has no notification emails")
    if mailer is None:
        log.info("notification_email_skipped", reason="mailer_disabled")
        return OperationResult.skipped("Email delivery is disabled")

    attachments = []
    if form.send_pdf and pdf is not None:
        attachments.append(
            Attachment(
                filename=f"{form.name}.pdf",
                content=pdf.content,
                content_type=PDF_CONTENT_TYPE,
            )
        )

    try:
        message = EmailMessage(
            to=form.notification_emails,
            subject=translator.translate_message(
                "forms.email_subject", locale, {"name": form.name}
            ),
            html_body=render_email_html(form, submission, translator, locale, admin_url),
            attachments=attachments,
        )
    except ValidationError as e:
        log.error("notification_email_invalid", error=str(e))
        return OperationResult.permanent_error(str(e), error_code="INVALID_EMAIL")

    result = await mailer.send(message)
    if result.is_success:
        log.info("notification_email_sent", recipients=len(message.to))
    else:
        log.warning(
            "notification_email_failed",
            status=result.status.value,
            error=result.message,
        )
    return result
