"""Ordering helpers for tasks, projects, study items and schedules.

Every function is stable and returns a new list; inputs are never mutated.
"""

from collections.abc import Iterable, Sequence
from datetime import date, datetime, time
from typing import Any, TypeVar

from greatsage.utils.mapping import read_field

T = TypeVar("T")

# Higher number = higher priority
PRIORITY_ORDER = {
    "URGENT": 4,
    "HIGH": 3,
    "MEDIUM": 2,
    "LOW": 1,
}

PROJECT_STATUS_ORDER = {
    "ACTIVE": 1,
    "ON_HOLD": 2,
    "COMPLETED": 3,
    "ARCHIVED": 4,
}

STUDY_STATUS_ORDER = {
    "ACTIVE": 1,
    "COMPLETED": 2,
    "DROPPED": 3,
}

DAYS_IN_WEEK = 7


def _plain(value: Any) -> Any:
    return getattr(value, "value", value)


def to_timestamp(value: date | datetime | None) -> float:
    """Seconds since the epoch; ``None`` counts as the epoch itself."""
    if value is None:
        return 0.0
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    return value.timestamp()


def sort_by_priority(tasks: Iterable[T]) -> list[T]:
    """Order by priority (URGENT first), then due date ascending, undated last."""

    def key(task: T) -> tuple[int, bool, float]:
        due = read_field(task, "due_date")
        return (
            -PRIORITY_ORDER[_plain(read_field(task, "priority"))],
            due is None,
            to_timestamp(due),
        )

    return sorted(tasks, key=key)


def sort_by_status(projects: Iterable[T]) -> list[T]:
    """Order projects ACTIVE, ON_HOLD, COMPLETED, ARCHIVED."""
    return sorted(
        projects,
        key=lambda p: PROJECT_STATUS_ORDER[_plain(read_field(p, "status"))],
    )


def sort_study_items_by_status(items: Iterable[T]) -> list[T]:
    """Order study items ACTIVE, COMPLETED, DROPPED."""
    return sorted(
        items,
        key=lambda i: STUDY_STATUS_ORDER[_plain(read_field(i, "status"))],
    )


def sort_by_date(items: Iterable[T], field: str = "created_at") -> list[T]:
    """Most recent first by ``field``; items without a value go last."""
    return sorted(
        items,
        key=lambda item: to_timestamp(read_field(item, field)),
        reverse=True,
    )


def sort_by_time(schedules: Iterable[T]) -> list[T]:
    """Order by ``start_time``. Zero-padded HH:mm compares correctly as text."""
    return sorted(schedules, key=lambda s: read_field(s, "start_time"))


def group_and_sort_schedules_by_day(schedules: Sequence[T]) -> dict[int, list[T]]:
    """Bucket schedules by ``day_of_week`` (0 = Sunday), each bucket time-ordered.

    All seven days are present, empty or not.
    """
    grouped: dict[int, list[T]] = {day: [] for day in range(DAYS_IN_WEEK)}
    for schedule in schedules:
        grouped[read_field(schedule, "day_of_week")].append(schedule)
    return {day: sort_by_time(items) for day, items in grouped.items()}
