"""Errors raised while serving and submitting forms."""

from typing import Any, Dict, List

from modules.content.domain import ContentError, NotFound


class FormNotFound(NotFound):
    """No active, published form has the slug in the requested or default locale."""


class SubmissionInvalid(ContentError):
    """Submission data failed validation."""

    def __init__(self, message: str, errors: List[Dict[str, Any]]):
        super().__init__(message, details={"errors": errors})
        self.errors = errors

    @property
    def name(self) -> str:
        return "ValidationError"


class RateLimited(ContentError):
    """The client reached the form's per-IP submission limit."""

    status_code = 429

    def __init__(self, message: str, limit: int):
        super().__init__(message, details={"limit": limit})
        self.limit = limit


class UploadFailed(ContentError):
    """A submitted file could not be stored."""

    def __init__(self, message: str, field: str, cause: str):
        super().__init__(message, details={"field": field, "cause": cause})
