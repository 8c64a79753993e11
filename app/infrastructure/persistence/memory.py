"""In-memory implementations of the store contracts.

Backs the application when no external platform is wired in (local
development, tests). Records are copied on the way in and out.
"""

import copy
import itertools
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Union

import structlog

from infrastructure.persistence.contracts import (
    DocumentStore,
    FileStore,
    Filters,
    LocalizationService,
    StoreError,
)
from infrastructure.persistence.filters import matches, parse_datetime, sort_items
from infrastructure.persistence.models import LocalizedRecord, StoredFile

logger = structlog.get_logger().bind(component="persistence.memory")


def new_document_id() -> str:
    return uuid.uuid4().hex[:24]


class InMemoryDocumentStore(DocumentStore):
    """DocumentStore keeping records in insertion order per collection.

    `populate` is accepted for contract compatibility; records have no
    relations to expand and are returned as stored.
    """

    def __init__(self):
        self._records: Dict[str, List[LocalizedRecord]] = {}
        self._keys = itertools.count(1)

    def _collection(self, collection: str) -> List[LocalizedRecord]:
        return self._records.setdefault(collection, [])

    @staticmethod
    def _coerce_key(key: Union[int, str]) -> Optional[int]:
        if isinstance(key, int):
            return key
        try:
            return int(str(key).strip())
        except ValueError:
            return None

    async def find_by_key(
        self,
        collection: str,
        key: Union[int, str],
        locale: Optional[str],
        populate: Optional[Sequence[str]] = None,
    ) -> Optional[LocalizedRecord]:
        numeric_key = self._coerce_key(key)
        if numeric_key is None:
            return None
        for record in self._collection(collection):
            if record.id == numeric_key and (locale is None or record.locale == locale):
                return copy.deepcopy(record)
        return None

    async def find_by_document_id(
        self,
        collection: str,
        document_id: str,
        locale: Optional[str],
        populate: Optional[Sequence[str]] = None,
    ) -> Optional[LocalizedRecord]:
        for record in self._collection(collection):
            if record.document_id == document_id and (
                locale is None or record.locale == locale
            ):
                return copy.deepcopy(record)
        return None

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
        selected = self._select(collection, filters, locale)
        if sort:
            by_key = {record.id: record for record in selected}
            ordered = sort_items([record.to_dict() for record in selected], sort)
            selected = [by_key[item["id"]] for item in ordered]
        end = None if limit is None else start + limit
        return [copy.deepcopy(record) for record in selected[start:end]]

    async def count(
        self,
        collection: str,
        filters: Optional[Filters] = None,
        locale: Optional[str] = None,
    ) -> int:
        return len(self._select(collection, filters, locale))

    def _select(
        self, collection: str, filters: Optional[Filters], locale: Optional[str]
    ) -> List[LocalizedRecord]:
        try:
            return [
                record
                for record in self._collection(collection)
                if (locale is None or record.locale == locale)
                and matches(record.to_dict(), filters)
            ]
        except ValueError as e:
            raise StoreError(str(e)) from e

    async def create(
        self,
        collection: str,
        data: Dict[str, Any],
        locale: Optional[str] = None,
    ) -> LocalizedRecord:
        return self.insert(collection, data, locale, new_document_id())

    def insert(
        self,
        collection: str,
        data: Dict[str, Any],
        locale: Optional[str],
        document_id: str,
    ) -> LocalizedRecord:
        """Insert a record for an explicit document id."""
        fields = copy.deepcopy(data)
        for reserved in ("id", "documentId", "locale"):
            fields.pop(reserved, None)
        published_at = fields.pop("publishedAt", datetime.now(timezone.utc))

        record = LocalizedRecord(
            id=next(self._keys),
            document_id=document_id,
            locale=locale,
            fields=fields,
            published_at=parse_datetime(published_at) if published_at else None,
        )
        self._collection(collection).append(record)
        logger.debug(
            "record_created",
            collection=collection,
            id=record.id,
            document_id=document_id,
            locale=locale,
        )
        return copy.deepcopy(record)

    async def update(
        self,
        collection: str,
        document_id: str,
        locale: Optional[str],
        data: Dict[str, Any],
    ) -> LocalizedRecord:
        for record in self._collection(collection):
            if record.document_id == document_id and record.locale == locale:
                return self._apply(record, data)
        raise StoreError(f"Document {document_id} has no {locale} version")

    async def update_by_key(
        self, collection: str, key: int, data: Dict[str, Any]
    ) -> LocalizedRecord:
        for record in self._collection(collection):
            if record.id == key:
                return self._apply(record, data)
        raise StoreError(f"Record {key} not found in {collection}")

    @staticmethod
    def _apply(record: LocalizedRecord, data: Dict[str, Any]) -> LocalizedRecord:
        fields = copy.deepcopy(data)
        for reserved in ("id", "documentId", "locale"):
            fields.pop(reserved, None)
        if "publishedAt" in fields:
            published_at = fields.pop("publishedAt")
            record.published_at = parse_datetime(published_at) if published_at else None
        record.fields.update(fields)
        return copy.deepcopy(record)

    async def delete_document(
        self, collection: str, document_id: str
    ) -> List[LocalizedRecord]:
        records = self._collection(collection)
        deleted = [record for record in records if record.document_id == document_id]
        self._records[collection] = [
            record for record in records if record.document_id != document_id
        ]
        return deleted

    async def delete_where(self, collection: str, filters: Filters) -> int:
        doomed = {record.id for record in self._select(collection, filters, None)}
        self._records[collection] = [
            record for record in self._collection(collection) if record.id not in doomed
        ]
        return len(doomed)


class InMemoryLocalizationService(LocalizationService):
    """Creates localizations inside an InMemoryDocumentStore.

    The new version starts from the fields of an existing version of the
    document, overridden by `data`.
    """

    def __init__(self, store: InMemoryDocumentStore):
        self.store = store

    async def create_localization(
        self,
        collection: str,
        document_id: str,
        locale: str,
        data: Dict[str, Any],
    ) -> LocalizedRecord:
        if await self.store.find_by_document_id(collection, document_id, locale):
            raise StoreError(f"Document {document_id} already has a {locale} version")

        base = await self.store.find_by_document_id(collection, document_id, None)
        if base is None:
            raise StoreError(f"Document {document_id} not found")

        fields = {**base.fields, **data}
        fields.setdefault("publishedAt", base.published_at)
        return self.store.insert(collection, fields, locale, document_id)


class InMemoryFileStore(FileStore):
    """FileStore keeping file contents in memory under /uploads URLs."""

    def __init__(self, base_path: str = "/uploads"):
        self.base_path = base_path.rstrip("/")
        self._files: Dict[int, StoredFile] = {}
        self._contents: Dict[int, bytes] = {}
        self._ids = itertools.count(1)

    async def upload(
        self,
        content: bytes,
        filename: str,
        content_type: str,
        caption: Optional[str] = None,
    ) -> StoredFile:
        file_id = next(self._ids)
        stored = StoredFile(
            id=file_id,
            name=filename,
            url=f"{self.base_path}/{file_id}_{filename}",
            mime=content_type,
            size=len(content),
            caption=caption,
        )
        self._files[file_id] = stored
        self._contents[file_id] = content
        return stored

    async def get(self, file_id: int) -> Optional[StoredFile]:
        return self._files.get(file_id)

    def read(self, file_id: int) -> Optional[bytes]:
        return self._contents.get(file_id)
