"""Multi-locale create, update and delete of logical documents.

Updates target one locale of a document and create that locale on demand
from an existing version. Deletes remove every locale of a document and are
verified against the store, with a forced second pass for stores whose
cascading delete leaves records behind.
"""

from typing import Any, Dict, List, Optional, Sequence

from infrastructure.logging import get_module_logger
from infrastructure.persistence import (
    DocumentStore,
    LocalizationService,
    LocalizedRecord,
    StoreError,
)
from modules.content.domain import (
    DeletionFailed,
    DeletionMethod,
    DeletionResult,
    DeletionStatus,
    DocumentNotFound,
    LocalizationUnavailable,
    MutationRejected,
    NotFound,
    OpaqueId,
)
from modules.content.identifiers import classify

logger = get_module_logger()

# Keys never written through update: the locale is addressed, not edited,
# and slugs are shared across locales.
IMMUTABLE_ON_UPDATE = ("locale", "slug")


class MutationCoordinator:
    """Coordinates document mutations across locales.

    Attributes:
        store: DocumentStore holding the records.
        localization_service: Service creating new locale versions, None when
            the platform has no localization support.
        locales: Known locales, in preference order.
        default_locale: Default locale.
    """

    def __init__(
        self,
        store: DocumentStore,
        localization_service: Optional[LocalizationService],
        locales: Sequence[str],
        default_locale: str,
    ):
        self.store = store
        self.localization_service = localization_service
        self.locales = list(locales)
        self.default_locale = default_locale

    async def create(
        self,
        collection: str,
        locale: str,
        fields: Dict[str, Any],
        populate: Optional[Sequence[str]] = None,
    ) -> LocalizedRecord:
        """Create a document in `locale`.

        Raises:
            MutationRejected: If the store rejects the data.
        """
        data = {key: value for key, value in fields.items() if key != "locale"}
        try:
            record = await self.store.create(collection, data, locale)
        except StoreError as e:
            raise MutationRejected(
                locale, e.message, message=f"Failed to create {collection}: {e.message}"
            ) from e

        logger.info(
            "document_created",
            collection=collection,
            document_id=record.document_id,
            locale=locale,
        )
        return await self._reload(collection, record, populate)

    async def update(
        self,
        collection: str,
        raw_id: str,
        locale: str,
        fields: Dict[str, Any],
        populate: Optional[Sequence[str]] = None,
    ) -> LocalizedRecord:
        """Update the `locale` version of a document, creating it if missing.

        `locale` and `slug` keys of `fields` are ignored.

        Args:
            collection: Collection of the document.
            raw_id: Surrogate key (of any locale) or document id.
            locale: Negotiated locale to write.
            fields: Business attributes to write.
            populate: Relations to populate on the returned record.

        Returns:
            The updated or newly created record.

        Raises:
            DocumentNotFound: If the document has no version in any locale.
            LocalizationUnavailable: If a new locale is needed and no
                localization service is available.
            MutationRejected: If the store rejects the write.
        """
        data = {
            key: value for key, value in fields.items() if key not in IMMUTABLE_ON_UPDATE
        }
        document_id = await self.resolve_document_id(collection, raw_id)
        log = logger.bind(collection=collection, document_id=document_id, locale=locale)

        existing = await self._lookup(collection, document_id, locale)
        try:
            if existing is not None:
                record = await self.store.update(collection, document_id, locale, data)
                log.info("document_updated_in_place")
            else:
                record = await self._create_localization(
                    collection, document_id, locale, data
                )
                log.info("localization_created")
        except StoreError as e:
            log.warning("update_rejected", error=e.message)
            raise MutationRejected(locale, e.message) from e

        return await self._reload(collection, record, populate)

    async def delete(self, collection: str, raw_id: str) -> DeletionResult:
        """Delete every locale of a document and verify the deletion.

        Raises:
            NotFound: If no record of the document exists.
            MutationRejected: If the forced deletion pass fails.
            DeletionFailed: If records remain after the forced pass.
        """
        document_id = await self.resolve_document_id(collection, raw_id)
        log = logger.bind(collection=collection, document_id=document_id)

        try:
            snapshot = await self.store.find_many(
                collection, filters={"documentId": document_id}, locale=None, limit=1
            )
        except StoreError as e:
            raise MutationRejected(
                None, e.message, message=f"Failed to delete {raw_id}: {e.message}"
            ) from e
        if not snapshot:
            raise NotFound(
                f"No {collection} record found for {raw_id}", details={"id": raw_id}
            )

        deleted_count = 0
        try:
            deleted_count = len(await self.store.delete_document(collection, document_id))
        except StoreError as e:
            log.warning("cascading_delete_failed", error=e.message)

        remaining = await self._remaining(collection, document_id)
        if remaining == 0:
            log.info("deletion_verified", method=DeletionMethod.DOCUMENTS.value)
            return DeletionResult(
                document_id=document_id,
                status=DeletionStatus.VERIFIED,
                method=DeletionMethod.DOCUMENTS,
                record=snapshot[0],
                deleted_count=deleted_count,
            )

        log.warning("records_remain_after_delete", remaining=remaining)
        try:
            deleted_count += await self.store.delete_where(
                collection, {"documentId": document_id}
            )
        except StoreError as e:
            log.error("forced_delete_failed", error=e.message)
            raise MutationRejected(
                None, e.message, message=f"Failed to delete {raw_id}: {e.message}"
            ) from e

        remaining = await self._remaining(collection, document_id)
        if remaining is None:
            log.warning("deletion_unconfirmed", method=DeletionMethod.FORCED.value)
            status = DeletionStatus.UNCONFIRMED
        elif remaining > 0:
            log.error("deletion_failed", remaining=remaining)
            raise DeletionFailed(document_id, remaining)
        else:
            log.info("deletion_verified", method=DeletionMethod.FORCED.value)
            status = DeletionStatus.VERIFIED

        return DeletionResult(
            document_id=document_id,
            status=status,
            method=DeletionMethod.FORCED,
            record=snapshot[0],
            deleted_count=deleted_count,
        )

    async def resolve_document_id(self, collection: str, raw_id: str) -> str:
        """Map an identifier to a document id, without slug lookup.

        Opaque identifiers are document ids. Numeric identifiers are looked
        up as surrogate keys in every known locale, then across all locales;
        a numeric identifier matching no key is taken as a document id.
        """
        identifier = classify(raw_id)
        if isinstance(identifier, OpaqueId):
            return identifier.raw

        for locale in self.locales:
            try:
                record = await self.store.find_by_key(collection, identifier.value, locale)
            except StoreError as e:
                logger.warning(
                    "key_lookup_failed", collection=collection, locale=locale, error=e.message
                )
                continue
            if record is not None:
                return record.document_id

        try:
            records = await self.store.find_many(
                collection, filters={"id": identifier.value}, locale=None, limit=1
            )
        except StoreError as e:
            logger.warning("key_query_failed", collection=collection, error=e.message)
            records = []
        if records:
            return records[0].document_id

        return identifier.raw

    def search_order(self, locale: str) -> List[str]:
        """Locales to take a base version from, preferring `locale`."""
        if locale == self.default_locale:
            return list(self.locales)
        return [locale] + [code for code in self.locales if code != locale]

    async def _create_localization(
        self, collection: str, document_id: str, locale: str, data: Dict[str, Any]
    ) -> LocalizedRecord:
        if self.localization_service is None:
            raise LocalizationUnavailable(
                "Localization service not available",
                details={"locale": locale},
            )

        base = None
        for candidate in self.search_order(locale):
            base = await self._lookup(collection, document_id, candidate)
            if base is not None:
                break

        if base is None:
            raise DocumentNotFound(
                f"No {collection} document found for {document_id}",
                details={"documentId": document_id, "locale": locale},
            )

        return await self.localization_service.create_localization(
            collection, base.document_id, locale, data
        )

    async def _lookup(
        self, collection: str, document_id: str, locale: str
    ) -> Optional[LocalizedRecord]:
        try:
            return await self.store.find_by_document_id(collection, document_id, locale)
        except StoreError as e:
            logger.warning(
                "document_lookup_failed",
                collection=collection,
                document_id=document_id,
                locale=locale,
                error=e.message,
            )
            return None

    async def _remaining(self, collection: str, document_id: str) -> Optional[int]:
        try:
            return await self.store.count(collection, {"documentId": document_id})
        except StoreError as e:
            logger.warning("deletion_verification_failed", error=e.message)
            return None

    async def _reload(
        self,
        collection: str,
        record: LocalizedRecord,
        populate: Optional[Sequence[str]],
    ) -> LocalizedRecord:
        if not populate:
            return record
        try:
            reloaded = await self.store.find_by_document_id(
                collection, record.document_id, record.locale, populate
            )
        except StoreError as e:
            logger.warning("populate_reload_failed", error=e.message)
            return record
        return reloaded or record
