"""
Client list engine.

Turns a user's records plus the list view's search/filter/sort settings
into the sequence that is displayed:

1. Search: case-insensitive substring match on the kind's text fields
2. Type filter: exact match on the record's `type`
3. Sort: numeric, string, condition rank, or chronological

`render` is a pure function. It never mutates its input and equal inputs
always give equal outputs. Sorting is stable in both directions, so
records with equal keys keep the order they arrived in.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Literal

logger = logging.getLogger(__name__)

SortDirection = Literal["asc", "desc"]

CONDITION_RANK: dict[str, int] = {
    "Mint": 1,
    "Near Mint": 2,
    "Excellent": 3,
    "Good": 4,
    "Fair": 5,
    "Poor": 6,
    # Wishlist only; a buyer accepting any condition sorts after every grade
    "Any": 7,
}

# Text fields searched per record kind
SEARCH_FIELDS: dict[str, tuple[str, ...]] = {
    "card": ("name", "set"),
    "wishlist": ("name", "set"),
    "trade": ("card_name", "set", "looking_for"),
    "note": ("content",),
}

NUMERIC_FIELDS = frozenset({"price", "max_price", "priority"})
STRING_FIELDS = frozenset({"name", "card_name"})
CONDITION_FIELD = "condition"
DEFAULT_SORT_FIELD = "created_at"

# UI field names -> attribute names
_FIELD_ALIASES: dict[str, str] = {
    "maxPrice": "max_price",
    "cardName": "card_name",
    "createdAt": "created_at",
    "lookingFor": "looking_for",
}


@dataclass(frozen=True)
class ListParams:
    """Search, filter and sort settings of one list view."""

    search_term: str = ""
    filter_type: str = ""
    sort_field: str = DEFAULT_SORT_FIELD
    sort_direction: SortDirection = "desc"

    def toggled(self, field: str) -> "ListParams":
        """
        Settings after the user clicks a sort column.

        Clicking the active column flips the direction; clicking another
        column sorts by it ascending.
        """
        field = normalize_field(field)
        if field == normalize_field(self.sort_field):
            direction: SortDirection = "asc" if self.sort_direction == "desc" else "desc"
            return replace(self, sort_direction=direction)
        return replace(self, sort_field=field, sort_direction="asc")


def default_params(kind: str) -> ListParams:
    """Initial list settings: wishlist by priority, everything else newest first."""
    if kind == "wishlist":
        return ListParams(sort_field="priority", sort_direction="asc")
    return ListParams()


def normalize_field(field: str) -> str:
    return _FIELD_ALIASES.get(field, field)


_JSON_NAMES = {attr: ui for ui, attr in _FIELD_ALIASES.items()}


def _value(record: Any, field: str) -> Any:
    # Records arrive either as models or as raw camelCase JSON objects
    if isinstance(record, dict):
        if field in record:
            return record[field]
        return record.get(_JSON_NAMES.get(field, field))
    return getattr(record, field, None)


def _kind(record: Any) -> str:
    kind = _value(record, "kind")
    return kind if isinstance(kind, str) else "card"


def matches_search(record: Any, search_term: str) -> bool:
    if not search_term:
        return True
    needle = search_term.lower()
    for field in SEARCH_FIELDS.get(_kind(record), ()):
        value = _value(record, field)
        if isinstance(value, str) and needle in value.lower():
            return True
    return False


def matches_type(record: Any, filter_type: str) -> bool:
    return not filter_type or _value(record, "type") == filter_type


def filter_records(
    records: Iterable[Any], search_term: str = "", filter_type: str = ""
) -> list[Any]:
    """Apply the search and type filters. Idempotent."""
    return [
        record
        for record in records
        if matches_search(record, search_term) and matches_type(record, filter_type)
    ]


def _numeric_key(field: str) -> Callable[[Any], float]:
    def key(record: Any) -> float:
        value = _value(record, field)
        return float(value) if value is not None else 0.0

    return key


def _string_key(field: str) -> Callable[[Any], tuple[str, str]]:
    def key(record: Any) -> tuple[str, str]:
        value = _value(record, field) or ""
        return (value.casefold(), value)

    return key


def _condition_key(record: Any) -> int:
    return CONDITION_RANK.get(_value(record, CONDITION_FIELD), len(CONDITION_RANK) + 1)


def _timestamp(value: Any) -> float:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp()
    if isinstance(value, str):
        return _timestamp(datetime.fromisoformat(value))
    return 0.0


def _created_key(record: Any) -> float:
    return _timestamp(_value(record, "created_at"))


def sort_key(sort_field: str) -> Callable[[Any], Any]:
    """
    Comparator key for a sort field.

    Unknown fields fall back to the creation timestamp.
    """
    field = normalize_field(sort_field)
    if field in NUMERIC_FIELDS:
        return _numeric_key(field)
    if field in STRING_FIELDS:
        return _string_key(field)
    if field == CONDITION_FIELD:
        return _condition_key
    if field != DEFAULT_SORT_FIELD:
        logger.debug("Unknown sort field %r, sorting by creation time", sort_field)
    return _created_key


def sort_records(
    records: Iterable[Any],
    sort_field: str = DEFAULT_SORT_FIELD,
    sort_direction: SortDirection = "desc",
) -> list[Any]:
    return sorted(records, key=sort_key(sort_field), reverse=sort_direction == "desc")


def render(records: Sequence[Any], params: ListParams | None = None) -> list[Any]:
    """Filter then sort `records` for display."""
    params = params or ListParams()
    visible = filter_records(records, params.search_term, params.filter_type)
    return sort_records(visible, params.sort_field, params.sort_direction)
