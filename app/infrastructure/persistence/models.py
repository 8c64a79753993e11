"""Persistence models shared by the document store contracts."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class LocalizedRecord:
    """One locale's version of a logical document.

    Attributes:
        id: Locale-scoped surrogate key.
        document_id: Identifier shared by every locale of the document.
        locale: Locale code, None for non-localized collections.
        fields: Business attributes (title, slug, startAt, ...).
        published_at: Publication timestamp, None for drafts.
    """

    id: int
    document_id: str
    locale: Optional[str]
    fields: Dict[str, Any] = field(default_factory=dict)
    published_at: Optional[datetime] = None

    @property
    def is_published(self) -> bool:
        return self.published_at is not None

    def get(self, key: str, default: Any = None) -> Any:
        return self.to_dict().get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into the API representation."""
        return {
            "id": self.id,
            "documentId": self.document_id,
            "locale": self.locale,
            "publishedAt": self.published_at,
            **self.fields,
        }


@dataclass
class StoredFile:
    """File held by a FileStore."""

    id: int
    name: str
    url: str
    mime: str
    size: int
    caption: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "url": self.url,
            "mime": self.mime,
            "size": self.size,
            "caption": self.caption,
        }
