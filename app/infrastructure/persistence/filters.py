"""Evaluation of store filters and sort expressions against plain dicts."""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "$eq": lambda a, b: a == b,
    "$ne": lambda a, b: a != b,
    "$gt": lambda a, b: a is not None and a > b,
    "$gte": lambda a, b: a is not None and a >= b,
    "$lt": lambda a, b: a is not None and a < b,
    "$lte": lambda a, b: a is not None and a <= b,
    "$in": lambda a, b: a in b,
}


def parse_datetime(value: Any) -> Any:
    """Parse ISO 8601 strings into aware datetimes, leave anything else as is."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return value


def _coerce(actual: Any, expected: Any) -> Tuple[Any, Any]:
    if isinstance(actual, datetime) or isinstance(expected, datetime):
        return parse_datetime(actual), parse_datetime(expected)
    return actual, expected


def _matches_condition(actual: Any, condition: Any) -> bool:
    if not isinstance(condition, dict):
        return actual == condition

    for operator, expected in condition.items():
        if operator == "$notNull":
            if (actual is not None) != bool(expected):
                return False
            continue
        if operator == "$null":
            if (actual is None) != bool(expected):
                return False
            continue
        if operator not in OPERATORS:
            raise ValueError(f"Unsupported filter operator: {operator}")
        left, right = _coerce(actual, expected)
        try:
            if not OPERATORS[operator](left, right):
                return False
        except TypeError:
            return False
    return True


def matches(item: Dict[str, Any], filters: Optional[Dict[str, Any]]) -> bool:
    """Whether every filter holds for `item`.

    Raises:
        ValueError: On an unknown operator.
    """
    if not filters:
        return True
    return all(_matches_condition(item.get(key), cond) for key, cond in filters.items())


def parse_sort(sort: Optional[Union[str, Sequence[str]]]) -> List[Tuple[str, bool]]:
    """Parse "startAt:asc" / ["title", "startAt:desc"] into (field, descending) pairs."""
    if not sort:
        return []
    entries = [sort] if isinstance(sort, str) else list(sort)
    parsed = []
    for entry in entries:
        for part in entry.split(","):
            name, _, direction = part.strip().partition(":")
            if name:
                parsed.append((name, direction.strip().lower() == "desc"))
    return parsed


def sort_items(
    items: List[Dict[str, Any]], sort: Optional[Union[str, Sequence[str]]]
) -> List[Dict[str, Any]]:
    """Stable multi-key sort. Missing values sort last in either direction."""
    for name, descending in reversed(parse_sort(sort)):
        present = [item for item in items if item.get(name) is not None]
        missing = [item for item in items if item.get(name) is None]
        present.sort(key=lambda item: parse_datetime(item[name]), reverse=descending)
        items = present + missing
    return items
