"""Operation status enumeration."""

from enum import Enum


class OperationStatus(Enum):
    """Outcome of a side-effect operation (PDF generation, email, upload).

    Attributes:
        SUCCESS: Operation completed
        SKIPPED: Operation not attempted (disabled or not configured)
        TRANSIENT_ERROR: Retryable failure (connection refused, timeout)
        PERMANENT_ERROR: Non-retryable failure (rejected message, bad input)
        NOT_FOUND: Referenced resource does not exist
    """

    SUCCESS = "success"
    SKIPPED = "skipped"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    NOT_FOUND = "not_found"
