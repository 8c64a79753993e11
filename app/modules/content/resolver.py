"""Locale-aware document resolution.

Maps a caller-supplied identifier and a requested locale to a single record,
trying in order: surrogate key / document id (numeric-first or
document-id-first depending on the identifier), then slug. When nothing is
found in the requested locale the whole chain is repeated in the default
locale and the result is flagged as a fallback.
"""

from typing import Any, Awaitable, Callable, Dict, Optional, Sequence

from infrastructure.logging import get_module_logger
from infrastructure.persistence import DocumentStore, Filters, LocalizedRecord, StoreError
from modules.content.domain import (
    ExternalIdentifier,
    NotFound,
    NumericId,
    ResolutionResult,
)
from modules.content.identifiers import classify

logger = get_module_logger()

PUBLISHED = {"publishedAt": {"$notNull": True}}


class DocumentResolver:
    """Resolves identifiers to records of any collection.

    Lookup failures reported by the store are logged and treated as "not
    found" for that tier, so resolution degrades through the remaining tiers.

    Attributes:
        store: DocumentStore to query.
        default_locale: Locale of the fallback pass.
        published_only: Treat unpublished records as absent.
    """

    def __init__(
        self,
        store: DocumentStore,
        default_locale: str,
        published_only: bool = False,
    ):
        self.store = store
        self.default_locale = default_locale
        self.published_only = published_only

    async def resolve(
        self,
        collection: str,
        raw_id: str,
        requested_locale: str,
        populate: Optional[Sequence[str]] = None,
    ) -> ResolutionResult:
        """Resolve an identifier in the requested locale, else the default.

        Args:
            collection: Collection to search (e.g., "events").
            raw_id: Surrogate key, document id or slug.
            requested_locale: Negotiated locale of the request.
            populate: Relations to populate on the returned record.

        Returns:
            ResolutionResult with the record and the locale it came from.

        Raises:
            NotFound: If no tier matches in either locale.
        """
        identifier = classify(raw_id)

        for locale in self._locale_chain(requested_locale):
            record = await self._find_in_locale(collection, identifier, locale, populate)
            if record is not None:
                result = ResolutionResult(
                    record=record,
                    requested_locale=requested_locale,
                    returned_locale=locale,
                )
                logger.info(
                    "document_resolved",
                    collection=collection,
                    id=raw_id,
                    requested_locale=requested_locale,
                    returned_locale=locale,
                    fallback=result.fallback,
                )
                return result

        logger.info(
            "document_not_found",
            collection=collection,
            id=raw_id,
            requested_locale=requested_locale,
        )
        raise NotFound(
            f"No {collection} record found for {raw_id}",
            details={"id": raw_id, "locale": requested_locale},
        )

    async def find_by_slug(
        self,
        collection: str,
        slug: str,
        requested_locale: str,
        filters: Optional[Filters] = None,
        populate: Optional[Sequence[str]] = None,
    ) -> ResolutionResult:
        """Resolve a slug only, with the same default-locale fallback.

        Raises:
            NotFound: If no record with the slug matches `filters`.
        """
        for locale in self._locale_chain(requested_locale):
            record = await self._find_slug(collection, slug, locale, filters, populate)
            if record is not None:
                return ResolutionResult(
                    record=record,
                    requested_locale=requested_locale,
                    returned_locale=locale,
                )

        raise NotFound(
            f"No {collection} record found for slug {slug}",
            details={"slug": slug, "locale": requested_locale},
        )

    def _locale_chain(self, requested_locale: str) -> list:
        if requested_locale == self.default_locale:
            return [requested_locale]
        return [requested_locale, self.default_locale]

    async def _find_in_locale(
        self,
        collection: str,
        identifier: ExternalIdentifier,
        locale: str,
        populate: Optional[Sequence[str]],
    ) -> Optional[LocalizedRecord]:
        if isinstance(identifier, NumericId):
            lookups = [
                ("key", self.store.find_by_key, identifier.value),
                ("document_id", self.store.find_by_document_id, identifier.raw),
            ]
        else:
            lookups = [
                ("document_id", self.store.find_by_document_id, identifier.raw),
                ("key", self.store.find_by_key, identifier.raw),
            ]

        for tier, lookup, value in lookups:
            record = await self._attempt(
                tier, collection, lookup, collection, value, locale, populate
            )
            if record is not None and self._visible(record):
                return record

        return await self._find_slug(collection, identifier.raw, locale, None, populate)

    async def _find_slug(
        self,
        collection: str,
        slug: str,
        locale: str,
        filters: Optional[Filters],
        populate: Optional[Sequence[str]],
    ) -> Optional[LocalizedRecord]:
        query: Dict[str, Any] = {**(filters or {}), "slug": slug}
        if self.published_only:
            query.update(PUBLISHED)

        # Slugs are not unique; the first record in store order wins.
        records = await self._attempt(
            "slug",
            collection,
            self.store.find_many,
            collection,
            filters=query,
            locale=locale,
            limit=1,
            populate=populate,
        )
        return records[0] if records else None

    def _visible(self, record: LocalizedRecord) -> bool:
        return record.is_published or not self.published_only

    @staticmethod
    async def _attempt(
        tier: str,
        collection: str,
        lookup: Callable[..., Awaitable[Any]],
        *args: Any,
        **kwargs: Any,
    ) -> Any:
        try:
            return await lookup(*args, **kwargs)
        except StoreError as e:
            logger.warning(
                "resolution_tier_failed",
                collection=collection,
                tier=tier,
                error=e.message,
            )
            return None
