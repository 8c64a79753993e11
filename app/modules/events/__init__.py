"""Events collection: listing with date filters and pagination."""

COLLECTION = "events"
DEFAULT_POPULATE = ("cover",)
DEFAULT_SORT = "startAt:asc"
