"""Collection filters used by list endpoints.

Items may be records or plain mappings. A filter value of ``"ALL"`` or the
empty string means "no filter" and hands the input back untouched.
"""

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from greatsage.utils.mapping import read_field

T = TypeVar("T")

NO_FILTER = ("ALL", "")


def _is_disabled(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value in NO_FILTER)


def filter_by_user_id(items: Sequence[T], user_id: int) -> list[T]:
    """Keep items owned by ``user_id``."""
    return [item for item in items if read_field(item, "user_id") == user_id]


def filter_by_search(items: Sequence[T], query: str | None, fields: Sequence[str]) -> Sequence[T]:
    """Case-insensitive substring match across ``fields``.

    A blank query returns ``items`` itself.
    """
    if not query or not query.strip():
        return items

    needle = query.strip().lower()

    def matches(item: T) -> bool:
        for field in fields:
            value = read_field(item, field)
            if value is None:
                continue
            # Enum members search by their value, not "TaskStatus.DONE"
            text = getattr(value, "value", value)
            if needle in str(text).lower():
                return True
        return False

    return [item for item in items if matches(item)]


def filter_by_field(items: Sequence[T], field: str, value: Any) -> Sequence[T]:
    """Keep items whose ``field`` equals ``value``."""
    if isinstance(value, str) and value in NO_FILTER:
        return items
    return [item for item in items if read_field(item, field) == value]


def combine_filters(items: Sequence[T], filters: Mapping[str, Any]) -> Sequence[T]:
    """Apply every enabled field filter in turn (logical AND)."""
    result = items
    for field, value in filters.items():
        if not _is_disabled(value):
            result = filter_by_field(result, field, value)
    return result


def apply_filters(
    items: Sequence[T],
    query: str | None,
    fields: Sequence[str],
    field_filters: Mapping[str, Any],
) -> Sequence[T]:
    """Search first, then narrow by field filters."""
    result = filter_by_search(items, query, fields)
    return combine_filters(result, field_filters)


def clear_filters(items: Sequence[T]) -> list[T]:
    """Return a fresh copy of the unfiltered items."""
    return list(items)
