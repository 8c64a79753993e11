"""Persistence contracts and in-memory implementations."""

from infrastructure.persistence.contracts import (
    DocumentStore,
    FileStore,
    Filters,
    LocalizationService,
    StoreError,
)
from infrastructure.persistence.memory import (
    InMemoryDocumentStore,
    InMemoryFileStore,
    InMemoryLocalizationService,
)
from infrastructure.persistence.models import LocalizedRecord, StoredFile

__all__ = [
    "DocumentStore",
    "FileStore",
    "Filters",
    "LocalizationService",
    "StoreError",
    "InMemoryDocumentStore",
    "InMemoryFileStore",
    "InMemoryLocalizationService",
    "LocalizedRecord",
    "StoredFile",
]
