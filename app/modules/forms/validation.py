"""Validation of submission data against a form's field definitions.

Checks, per field:
- required values (uploaded files for file fields)
- email format, numbers and their min/max bounds
- select/radio option membership
- regex patterns, with an optional custom message
- text/textarea length bounds

Keys of the data that match no field are rejected. Messages are localized
through the Translator.
"""

import math
import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

from infrastructure.i18n import Translator
from infrastructure.logging import get_module_logger
from modules.forms.models import Form, FormField, UploadedFile

logger = get_module_logger()

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

LENGTH_CHECKED_TYPES = ("text", "textarea")


@dataclass
class FieldError:
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def is_empty(value: Any) -> bool:
    return value is None or value == ""


def to_number(value: Any) -> Optional[float]:
    """Parse a submitted number, None when the value is not numeric."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return None if math.isnan(number) else number


class SubmissionValidator:
    """Validates submission data in one locale.

    Attributes:
        translator: Translator used for error messages.
        locale: Locale of the messages.
    """

    def __init__(self, translator: Translator, locale: str):
        self.translator = translator
        self.locale = locale

    def validate(
        self,
        form: Form,
        data: Dict[str, Any],
        files: Sequence[UploadedFile] = (),
    ) -> List[FieldError]:
        """Validate `data` and `files` against every field of `form`.

        Returns:
            Field errors, empty when the submission is valid.
        """
        errors: List[FieldError] = []
        uploaded = {upload.field_name for upload in files}

        for form_field in form.fields:
            errors.extend(
                self._validate_field(
                    form_field, data.get(form_field.key), form_field.key in uploaded
                )
            )

        known = {f.key for f in form.fields}
        for key in data:
            if key not in known:
                errors.append(
                    FieldError(key, self._message("forms.unknown_field", key=key))
                )

        if errors:
            logger.info(
                "submission_invalid",
                form=form.slug,
                error_count=len(errors),
                fields=[error.field for error in errors],
            )
        return errors

    def _validate_field(
        self, form_field: FormField, value: Any, has_file: bool
    ) -> List[FieldError]:
        label = form_field.label

        if form_field.required:
            missing = not has_file if form_field.is_file else is_empty(value)
            if missing:
                return [self._error(form_field, "forms.required", label=label)]

        if is_empty(value) or form_field.is_file:
            return []

        errors: List[FieldError] = []
        rules = form_field.validation or {}

        if form_field.type == "email" and not EMAIL_PATTERN.match(str(value)):
            errors.append(self._error(form_field, "forms.invalid_email", label=label))

        if form_field.type == "number":
            number = to_number(value)
            if number is None:
                errors.append(
                    self._error(form_field, "forms.invalid_number", label=label)
                )
            else:
                if rules.get("min") is not None and number < rules["min"]:
                    errors.append(
                        self._error(
                            form_field, "forms.number_min", label=label, min=rules["min"]
                        )
                    )
                if rules.get("max") is not None and number > rules["max"]:
                    errors.append(
                        self._error(
                            form_field, "forms.number_max", label=label, max=rules["max"]
                        )
                    )

        if form_field.type in ("select", "radio"):
            allowed = form_field.allowed_values
            if allowed is not None and value not in allowed:
                errors.append(
                    self._error(form_field, "forms.invalid_option", label=label)
                )

        pattern = rules.get("regex")
        if pattern and form_field.type != "email":
            if not self._matches(form_field, pattern, str(value)):
                message = rules.get("message") or self._message(
                    "forms.invalid_format", label=label
                )
                errors.append(FieldError(form_field.key, message))

        if form_field.type in LENGTH_CHECKED_TYPES:
            length = len(str(value))
            if rules.get("minLength") and length < rules["minLength"]:
                errors.append(
                    self._error(
                        form_field, "forms.min_length", label=label, min=rules["minLength"]
                    )
                )
            if rules.get("maxLength") and length > rules["maxLength"]:
                errors.append(
                    self._error(
                        form_field, "forms.max_length", label=label, max=rules["maxLength"]
                    )
                )

        return errors

    @staticmethod
    def _matches(form_field: FormField, pattern: str, value: str) -> bool:
        try:
            return re.search(pattern, value) is not None
        except re.error as e:
            logger.warning(
                "invalid_field_pattern", field=form_field.key, pattern=pattern, error=str(e)
            )
            return True

    def _error(
        self, form_field: FormField, message_key: str, **variables: Any
    ) -> FieldError:
        return FieldError(form_field.key, self._message(message_key, **variables))

    def _message(self, message_key: str, **variables: Any) -> str:
        return self.translator.translate_message(message_key, self.locale, variables)


def validate_submission(
    form: Form,
    data: Dict[str, Any],
    files: Sequence[UploadedFile],
    translator: Translator,
    locale: str,
) -> List[FieldError]:
    return SubmissionValidator(translator, locale).validate(form, data, files)
