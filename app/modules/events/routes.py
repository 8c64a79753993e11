from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Query

from api.dependencies.locale import RequestLocale
from infrastructure.services import DocumentStoreDep, SettingsDep
from modules.content.listing import effective_page_size
from modules.content.router import build_content_router, parse_populate
from modules.events import COLLECTION, DEFAULT_POPULATE, DEFAULT_SORT
from modules.events.schemas import EventListQuery
from modules.events.service import list_events

router = APIRouter(tags=["Events"])


@router.get("/events", name="events_find")
async def find_events(
    locale: RequestLocale,
    store: DocumentStoreDep,
    settings: SettingsDep,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    upcoming: bool = False,
    page: int = Query(default=1, ge=1, alias="pagination[page]"),
    page_size: Optional[int] = Query(default=None, ge=1, alias="pagination[pageSize]"),
    sort: str = DEFAULT_SORT,
    populate: Optional[str] = None,
):
    """List events of the request locale, ordered by start time by default."""
    content = settings.content
    query = EventListQuery(
        date_from=date_from,
        date_to=date_to,
        upcoming=upcoming,
        page=page,
        page_size=effective_page_size(content, page_size),
        sort=sort,
        populate=parse_populate(populate, DEFAULT_POPULATE),
    )
    return await list_events(store, query, locale, content.CONTENT_PUBLISHED_ONLY)


router.include_router(
    build_content_router(
        COLLECTION, "events", tags=["Events"], default_populate=DEFAULT_POPULATE
    )
)
