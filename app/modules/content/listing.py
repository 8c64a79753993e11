"""Paginated listing of a localized collection."""

import math
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel

from infrastructure.configuration.features import ContentSettings
from infrastructure.logging import get_module_logger
from infrastructure.persistence import DocumentStore, Filters

logger = get_module_logger()

PUBLISHED = {"publishedAt": {"$notNull": True}}


class Pagination(BaseModel):
    page: int
    pageSize: int
    pageCount: int
    total: int

    @classmethod
    def build(cls, page: int, page_size: int, total: int) -> "Pagination":
        return cls(
            page=page,
            pageSize=page_size,
            pageCount=math.ceil(total / page_size) if page_size else 0,
            total=total,
        )


class ListResponse(BaseModel):
    data: List[Dict[str, Any]]
    meta: Dict[str, Any]


def effective_page_size(content: ContentSettings, requested: Optional[int]) -> int:
    """Requested page size, or the default, capped at EVENTS_MAX_PAGE_SIZE."""
    return min(requested or content.EVENTS_PAGE_SIZE, content.EVENTS_MAX_PAGE_SIZE)


async def list_records(
    store: DocumentStore,
    collection: str,
    locale: str,
    filters: Optional[Filters] = None,
    page: int = 1,
    page_size: int = 25,
    sort: Optional[str] = None,
    populate: Optional[Sequence[str]] = None,
    published_only: bool = False,
) -> ListResponse:
    """List one page of a collection's records in `locale`.

    Args:
        store: DocumentStore to query.
        collection: Collection to list.
        locale: Locale of the records.
        filters: Store filters, combined with the publication filter.
        page: 1-based page number.
        page_size: Records per page.
        sort: Sort expression, e.g. "startAt:asc"; store order when None.
        populate: Relations to populate.
        published_only: Leave drafts out.

    Returns:
        ListResponse with the records and `meta.pagination`.
    """
    query: Filters = dict(filters or {})
    if published_only:
        query.update(PUBLISHED)
    start = (page - 1) * page_size

    records = await store.find_many(
        collection,
        filters=query,
        locale=locale,
        limit=page_size,
        start=start,
        sort=sort,
        populate=populate,
    )
    total = await store.count(collection, filters=query, locale=locale)

    logger.info(
        "records_listed",
        collection=collection,
        locale=locale,
        page=page,
        page_size=page_size,
        total=total,
    )
    return ListResponse(
        data=[record.to_dict() for record in records],
        meta={"pagination": Pagination.build(page, page_size, total).model_dump()},
    )
