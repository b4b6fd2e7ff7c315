"""Habit service: habits, daily logs and streaks."""

from collections import defaultdict
from datetime import date

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from greatsage.db.patch import build_update
from greatsage.models.habit import Habit, HabitLog
from greatsage.schemas import (
    HabitCreate,
    HabitLogCreate,
    HabitLogRecord,
    HabitRecord,
    HabitUpdate,
    HabitWithStreak,
)
from greatsage.utils.calculations import calculate_longest_streak, calculate_streak
from greatsage.utils.mapping import map_habit_log_row, map_habit_row, map_rows
from greatsage.utils.sorting import sort_by_date

logger = structlog.get_logger()


def with_streaks(
    habit: HabitRecord, logs: list[HabitLogRecord], today: date
) -> HabitWithStreak:
    """Attach current/longest streak and today's state to a habit."""
    return HabitWithStreak(
        **habit.model_dump(),
        current_streak=calculate_streak(logs, today=today),
        longest_streak=calculate_longest_streak(logs),
        today_completed=any(log.log_date == today for log in logs),
    )


class HabitService:
    """Service for habits and habit logs."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_model(self, user_id: int, habit_id: int) -> Habit | None:
        result = await self.db.execute(
            select(Habit)
            .where(Habit.id == habit_id, Habit.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_habits(self, user_id: int, active_only: bool = False) -> list[HabitRecord]:
        query = select(Habit).where(Habit.user_id == user_id).order_by(Habit.id)
        if active_only:
            query = query.where(Habit.is_active == True)  # noqa: E712

        result = await self.db.execute(query)
        return map_rows(HabitRecord, result.scalars().all())

    async def list_with_streaks(
        self,
        user_id: int,
        active_only: bool = False,
        today: date | None = None,
    ) -> list[HabitWithStreak]:
        today = today or date.today()
        habits = await self.list_habits(user_id, active_only=active_only)

        logs_by_habit: dict[int, list[HabitLogRecord]] = defaultdict(list)
        for log in await self.list_logs(user_id):
            logs_by_habit[log.habit_id].append(log)

        return [with_streaks(h, logs_by_habit[h.id], today) for h in habits]

    async def get(self, user_id: int, habit_id: int) -> HabitRecord | None:
        habit = await self._get_model(user_id, habit_id)
        return map_habit_row(habit) if habit else None

    async def create(self, user_id: int, data: HabitCreate) -> HabitRecord:
        habit = Habit(user_id=user_id, is_active=True, **data.model_dump())
        self.db.add(habit)
        await self.db.commit()
        await self.db.refresh(habit)

        logger.info("habit_created", habit_id=habit.id)
        return map_habit_row(habit)

    async def update(self, user_id: int, habit_id: int, updates: HabitUpdate) -> HabitRecord | None:
        result = await self.db.execute(
            build_update(Habit, habit_id, updates, user_id=user_id)
        )
        await self.db.commit()
        if result.rowcount == 0:
            return None

        logger.info("habit_updated", habit_id=habit_id)
        return await self.get(user_id, habit_id)

    async def delete(self, user_id: int, habit_id: int) -> bool:
        """Delete a habit and all of its logs."""
        await self.db.execute(
            delete(HabitLog).where(HabitLog.habit_id == habit_id, HabitLog.user_id == user_id)
        )
        result = await self.db.execute(
            delete(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
        )
        await self.db.commit()

        deleted = result.rowcount > 0
        if deleted:
            logger.info("habit_deleted", habit_id=habit_id)
        return deleted

    # =========================================================================
    # Logs
    # =========================================================================

    async def list_logs(
        self,
        user_id: int,
        habit_id: int | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[HabitLogRecord]:
        """Habit logs, most recent day first, optionally within [start, end]."""
        query = select(HabitLog).where(HabitLog.user_id == user_id)
        if habit_id is not None:
            query = query.where(HabitLog.habit_id == habit_id)
        if start is not None:
            query = query.where(HabitLog.log_date >= start)
        if end is not None:
            query = query.where(HabitLog.log_date <= end)

        result = await self.db.execute(query)
        return sort_by_date(map_rows(HabitLogRecord, result.scalars().all()), "log_date")

    async def log_day(
        self, user_id: int, habit_id: int, data: HabitLogCreate
    ) -> HabitLogRecord | None:
        """Mark a habit done on a day; logging the same day again updates it.

        Returns None when the habit is not the user's.
        """
        if not await self._get_model(user_id, habit_id):
            return None

        log_date = data.log_date or date.today()
        result = await self.db.execute(
            select(HabitLog)
            .where(HabitLog.habit_id == habit_id, HabitLog.log_date == log_date)
            .execution_options(populate_existing=True)
        )
        log = result.scalar_one_or_none()

        if log:
            log.value = data.value
            log.note = data.note
        else:
            log = HabitLog(
                user_id=user_id,
                habit_id=habit_id,
                log_date=log_date,
                value=data.value,
                note=data.note,
            )
            self.db.add(log)

        await self.db.commit()
        await self.db.refresh(log)

        logger.info("habit_logged", habit_id=habit_id, log_date=str(log_date))
        return map_habit_log_row(log)

    async def unlog_day(self, user_id: int, habit_id: int, log_date: date) -> bool:
        result = await self.db.execute(
            delete(HabitLog).where(
                HabitLog.habit_id == habit_id,
                HabitLog.user_id == user_id,
                HabitLog.log_date == log_date,
            )
        )
        await self.db.commit()

        deleted = result.rowcount > 0
        if deleted:
            logger.info("habit_unlogged", habit_id=habit_id, log_date=str(log_date))
        return deleted
