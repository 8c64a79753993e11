"""Errors raised by content resolution and mutation."""

from typing import Any, Dict, Optional


class ContentError(Exception):
    """Base error rendered into the API error envelope.

    Attributes:
        message: human-friendly message
        status_code: HTTP status the error maps to
        details: structured details for API callers
    """

    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def name(self) -> str:
        return type(self).__name__


class NotFound(ContentError):
    """No record matched on any resolution tier, in any tried locale."""

    status_code = 404


class DocumentNotFound(NotFound):
    """The identifier resolved to no document in any locale."""


class LocalizationUnavailable(ContentError):
    """A new localization is needed but no localization service is wired in."""

    status_code = 503


class MutationRejected(ContentError):
    """The store rejected a mutation. Carries the locale and the store's cause."""

    def __init__(self, locale: Optional[str], cause: str, message: Optional[str] = None):
        super().__init__(
            message or f"Failed to update {locale or 'document'}: {cause}",
            details={"locale": locale, "cause": cause},
        )
        self.locale = locale
        self.cause = cause


class DeletionFailed(ContentError):
    """Records of the document remain after the forced deletion pass."""

    def __init__(self, document_id: str, remaining: int):
        super().__init__(
            f"Delete operation failed - {remaining} record(s) of document {document_id} still exist",
            details={"documentId": document_id, "remaining": remaining},
        )
        self.document_id = document_id
        self.remaining = remaining
