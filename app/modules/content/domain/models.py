"""Domain models for localized content resolution and mutation."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from infrastructure.persistence.models import LocalizedRecord


@dataclass(frozen=True)
class NumericId:
    """Identifier made only of digits, optionally signed (e.g., "42", "-7")."""

    value: int
    raw: str


@dataclass(frozen=True)
class OpaqueId:
    """Any identifier that is not numeric (document ids, slugs)."""

    raw: str


ExternalIdentifier = Union[NumericId, OpaqueId]


@dataclass(frozen=True)
class ResolutionResult:
    """Record found for a request, with the locale it was found in."""

    record: LocalizedRecord
    requested_locale: str
    returned_locale: str

    @property
    def fallback(self) -> bool:
        return self.requested_locale != self.returned_locale


class DeletionStatus(str, Enum):
    """Outcome of a verified deletion.

    Attributes:
        VERIFIED: A post-deletion query found no remaining records.
        UNCONFIRMED: The store accepted the deletion but the verification
            query could not run.
    """

    VERIFIED = "verified"
    UNCONFIRMED = "unconfirmed"


class DeletionMethod(str, Enum):
    """Store call that removed the document."""

    DOCUMENTS = "documents-api"
    FORCED = "query-api"


@dataclass(frozen=True)
class DeletionResult:
    document_id: str
    status: DeletionStatus
    method: DeletionMethod
    record: Optional[LocalizedRecord] = None
    deleted_count: int = 0

    @property
    def verified(self) -> bool:
        return self.status == DeletionStatus.VERIFIED
