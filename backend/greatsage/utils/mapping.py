"""Mapping between stored rows and in-memory records.

A row is either an ORM object or a mapping keyed by snake_case column name
(for example ``result.mappings()`` of a Core select). Every record field is
read from the row by name; missing and NULL values fall back to the record
default, and the record schema coerces numbers and dates.
"""

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel

from greatsage.schemas import (
    BookmarkRecord,
    HabitLogRecord,
    HabitRecord,
    ProjectRecord,
    QuickNoteRecord,
    StudyItemRecord,
    StudyLogRecord,
    StudyScheduleRecord,
    TaskRecord,
    UserRecord,
)

R = TypeVar("R", bound=BaseModel)


def read_field(item: Any, field: str) -> Any:
    """Read ``field`` from a mapping or an object, ``None`` when absent."""
    if isinstance(item, Mapping):
        return item.get(field)
    return getattr(item, field, None)


def map_row(record_cls: type[R], row: Any) -> R:
    """Build a ``record_cls`` from a stored row."""
    data: dict[str, Any] = {}
    for name in record_cls.model_fields:
        value = read_field(row, name)
        if value is not None:
            data[name] = value
    return record_cls.model_validate(data)


def map_rows(record_cls: type[R], rows: Iterable[Any]) -> list[R]:
    return [map_row(record_cls, row) for row in rows]


def map_user_row(row: Any) -> UserRecord:
    return map_row(UserRecord, row)


def map_task_row(row: Any) -> TaskRecord:
    return map_row(TaskRecord, row)


def map_project_row(row: Any) -> ProjectRecord:
    return map_row(ProjectRecord, row)


def map_study_item_row(row: Any) -> StudyItemRecord:
    return map_row(StudyItemRecord, row)


def map_study_schedule_row(row: Any) -> StudyScheduleRecord:
    return map_row(StudyScheduleRecord, row)


def map_study_log_row(row: Any) -> StudyLogRecord:
    return map_row(StudyLogRecord, row)


def map_habit_row(row: Any) -> HabitRecord:
    return map_row(HabitRecord, row)


def map_habit_log_row(row: Any) -> HabitLogRecord:
    return map_row(HabitLogRecord, row)


def map_quick_note_row(row: Any) -> QuickNoteRecord:
    return map_row(QuickNoteRecord, row)


def map_bookmark_row(row: Any) -> BookmarkRecord:
    return map_row(BookmarkRecord, row)
