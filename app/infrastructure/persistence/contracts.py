"""Contracts of the external collaborators the application consumes.

The document store, the localization service and the file store are owned by
the surrounding platform. Implementations raise StoreError on failure and
return None (or an empty list) when nothing matches.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Union

from infrastructure.persistence.models import LocalizedRecord, StoredFile

# Filter values are either plain values (equality) or operator mappings:
# {"startAt": {"$gte": "2026-01-01"}, "publishedAt": {"$notNull": True}}
Filters = Dict[str, Any]


class StoreError(Exception):
    """Raised when a store operation fails.

    Attributes:
        message: The store's error message, surfaced to API callers.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DocumentStore(ABC):
    """Asynchronous store of localized records, grouped into collections."""

    @abstractmethod
    async def find_by_key(
        self,
        collection: str,
        key: Union[int, str],
        locale: Optional[str],
        populate: Optional[Sequence[str]] = None,
    ) -> Optional[LocalizedRecord]:
        """Find a record by its locale-scoped surrogate key.

        String keys are coerced by the store; a string that is not a key
        yields None.
        """

    @abstractmethod
    async def find_by_document_id(
        self,
        collection: str,
        document_id: str,
        locale: Optional[str],
        populate: Optional[Sequence[str]] = None,
    ) -> Optional[LocalizedRecord]:
        """Find the record of a document in a locale."""

    @abstractmethod
    async def find_many(
        self,
        collection: str,
        filters: Optional[Filters] = None,
        locale: Optional[str] = None,
        limit: Optional[int] = None,
        start: int = 0,
        sort: Optional[Union[str, Sequence[str]]] = None,
        populate: Optional[Sequence[str]] = None,
    ) -> List[LocalizedRecord]:
        """Query records. `locale=None` spans every locale.

        Without `sort`, records come back in store iteration (insertion) order.
        """

    @abstractmethod
    async def count(
        self,
        collection: str,
        filters: Optional[Filters] = None,
        locale: Optional[str] = None,
    ) -> int:
        """Count records matching the filters."""

    @abstractmethod
    async def create(
        self,
        collection: str,
        data: Dict[str, Any],
        locale: Optional[str] = None,
    ) -> LocalizedRecord:
        """Create a new document with a single locale."""

    @abstractmethod
    async def update(
        self,
        collection: str,
        document_id: str,
        locale: Optional[str],
        data: Dict[str, Any],
    ) -> LocalizedRecord:
        """Update the record of a document in a locale.

        Raises:
            StoreError: If the record does not exist or the data is rejected.
        """

    @abstractmethod
    async def update_by_key(
        self, collection: str, key: int, data: Dict[str, Any]
    ) -> LocalizedRecord:
        """Update a record by its surrogate key."""

    @abstractmethod
    async def delete_document(
        self, collection: str, document_id: str
    ) -> List[LocalizedRecord]:
        """Delete every locale of a document, returning the deleted records.

        Deletion may be eventually consistent: records can remain visible to
        queries issued right after the call.
        """

    @abstractmethod
    async def delete_where(self, collection: str, filters: Filters) -> int:
        """Force-delete all records matching the filters, in every locale.

        Returns:
            Number of deleted records.
        """


class LocalizationService(ABC):
    """Creates new locale versions of existing documents."""

    @abstractmethod
    async def create_localization(
        self,
        collection: str,
        document_id: str,
        locale: str,
        data: Dict[str, Any],
    ) -> LocalizedRecord:
        """Create the `locale` version of an existing document.

        Raises:
            StoreError: If the document does not exist or already has a
                version in that locale.
        """


class FileStore(ABC):
    """Stores uploaded and generated files."""

    @abstractmethod
    async def upload(
        self,
        content: bytes,
        filename: str,
        content_type: str,
        caption: Optional[str] = None,
    ) -> StoredFile:
        """Store a file and return its metadata."""

    @abstractmethod
    async def get(self, file_id: int) -> Optional[StoredFile]:
        """Get a stored file's metadata."""
