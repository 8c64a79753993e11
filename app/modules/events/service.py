"""Events listing."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from infrastructure.persistence import DocumentStore, Filters
from modules.content.listing import ListResponse, list_records
from modules.events import COLLECTION
from modules.events.schemas import EventListQuery


def build_filters(
    query: EventListQuery,
    published_only: bool = False,
    now: Optional[datetime] = None,
) -> Filters:
    """Translate listing parameters into store filters on `startAt`.

    `upcoming` replaces the lower bound with the current time.
    """
    start_at: Dict[str, Any] = {}
    if query.date_from is not None:
        start_at["$gte"] = query.date_from
    if query.date_to is not None:
        start_at["$lte"] = query.date_to
    if query.upcoming:
        start_at["$gte"] = now or datetime.now(timezone.utc)

    filters: Filters = {}
    if start_at:
        filters["startAt"] = start_at
    if published_only:
        filters["publishedAt"] = {"$notNull": True}
    return filters


async def list_events(
    store: DocumentStore,
    query: EventListQuery,
    locale: str,
    published_only: bool = False,
) -> ListResponse:
    """List events of a locale, one page at a time."""
    return await list_records(
        store,
        COLLECTION,
        locale,
        filters=build_filters(query, published_only),
        page=query.page,
        page_size=query.page_size,
        sort=query.sort,
        populate=query.populate,
    )
