"""Query and response schemas of the events listing."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class EventListQuery(BaseModel):
    """Filters and pagination of `GET /events`.

    Attributes:
        date_from: Only events starting at or after this instant
        date_to: Only events starting at or before this instant
        upcoming: Only events starting from now on (overrides date_from)
        page: 1-based page number
        page_size: Records per page
        sort: Sort expression, e.g. "startAt:asc" or "title:desc,startAt:asc"
        populate: Relations to populate
    """

    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    upcoming: bool = False
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=25, ge=1)
    sort: str = "startAt:asc"
    populate: List[str] = Field(default_factory=lambda: ["cover"])

