"""Habits API endpoints."""

from datetime import date

from fastapi import APIRouter, HTTPException, Query, status

from greatsage.api.deps import CurrentUserId
from greatsage.db.session import DBSession
from greatsage.schemas import (
    HabitCreate,
    HabitLogCreate,
    HabitLogRecord,
    HabitRecord,
    HabitUpdate,
    HabitWithStreak,
)
from greatsage.services.habits import HabitService

router = APIRouter()


def _not_found(what: str = "Habit") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{what} not found",
    )


@router.get("/", response_model=list[HabitWithStreak])
async def list_habits(
    current_user_id: CurrentUserId,
    db: DBSession,
    active_only: bool = Query(False, alias="activeOnly"),
) -> list[HabitWithStreak]:
    """Habits with current and longest streaks."""
    return await HabitService(db).list_with_streaks(current_user_id, active_only=active_only)


@router.post("/", response_model=HabitRecord, status_code=status.HTTP_201_CREATED)
async def create_habit(
    data: HabitCreate,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> HabitRecord:
    return await HabitService(db).create(current_user_id, data)


@router.patch("/{habit_id}", response_model=HabitRecord)
async def update_habit(
    habit_id: int,
    updates: HabitUpdate,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> HabitRecord:
    habit = await HabitService(db).update(current_user_id, habit_id, updates)
    if not habit:
        raise _not_found()
    return habit


@router.delete("/{habit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_habit(habit_id: int, current_user_id: CurrentUserId, db: DBSession) -> None:
    if not await HabitService(db).delete(current_user_id, habit_id):
        raise _not_found()


@router.get("/{habit_id}/logs", response_model=list[HabitLogRecord])
async def list_habit_logs(
    habit_id: int,
    current_user_id: CurrentUserId,
    db: DBSession,
    start: date | None = None,
    end: date | None = None,
) -> list[HabitLogRecord]:
    """Logs of one habit, most recent first."""
    service = HabitService(db)
    if not await service.get(current_user_id, habit_id):
        raise _not_found()
    return await service.list_logs(current_user_id, habit_id=habit_id, start=start, end=end)


@router.post(
    "/{habit_id}/logs",
    response_model=HabitLogRecord,
    status_code=status.HTTP_201_CREATED,
)
async def log_habit(
    habit_id: int,
    data: HabitLogCreate,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> HabitLogRecord:
    """Mark a habit as done for a day (today by default)."""
    log = await HabitService(db).log_day(current_user_id, habit_id, data)
    if not log:
        raise _not_found()
    return log


@router.delete("/{habit_id}/logs/{log_date}", status_code=status.HTTP_204_NO_CONTENT)
async def unlog_habit(
    habit_id: int,
    log_date: date,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> None:
    if not await HabitService(db).unlog_day(current_user_id, habit_id, log_date):
        raise _not_found("Habit log")
