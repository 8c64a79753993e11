"""Domain models and errors of the content module."""

from modules.content.domain.errors import (
    ContentError,
    DeletionFailed,
    DocumentNotFound,
    LocalizationUnavailable,
    MutationRejected,
    NotFound,
)
from modules.content.domain.models import (
    DeletionMethod,
    DeletionResult,
    DeletionStatus,
    ExternalIdentifier,
    NumericId,
    OpaqueId,
    ResolutionResult,
)

__all__ = [
    "ContentError",
    "DeletionFailed",
    "DocumentNotFound",
    "LocalizationUnavailable",
    "MutationRejected",
    "NotFound",
    "DeletionMethod",
    "DeletionResult",
    "DeletionStatus",
    "ExternalIdentifier",
    "NumericId",
    "OpaqueId",
    "ResolutionResult",
]
