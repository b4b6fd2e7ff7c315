"""Study service: study items, weekly schedules and study logs."""

from datetime import date, datetime

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from greatsage.db.patch import build_update
from greatsage.models.study import StudyItem, StudyLog, StudySchedule
from greatsage.schemas import (
    StudyItemCreate,
    StudyItemRecord,
    StudyItemStatus,
    StudyItemUpdate,
    StudyLogCreate,
    StudyLogRecord,
    StudyScheduleCreate,
    StudyScheduleRecord,
    StudyScheduleUpdate,
    StudySummary,
)
from greatsage.utils.calculations import (
    aggregate_study_hours,
    calculate_study_hours_in_period,
    calculate_total_hours,
    get_current_week_range,
)
from greatsage.utils.mapping import (
    map_rows,
    map_study_item_row,
    map_study_log_row,
    map_study_schedule_row,
)
from greatsage.utils.sorting import (
    group_and_sort_schedules_by_day,
    sort_by_date,
    sort_by_time,
    sort_study_items_by_status,
)

logger = structlog.get_logger()


class StudyService:
    """Service for study items, their schedules and logged sessions."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # =========================================================================
    # Study items
    # =========================================================================

    async def list_items(self, user_id: int) -> list[StudyItemRecord]:
        """Study items, ACTIVE first, newest first within a status."""
        result = await self.db.execute(
            select(StudyItem).where(StudyItem.user_id == user_id)
        )
        items = sort_by_date(map_rows(StudyItemRecord, result.scalars().all()))
        return sort_study_items_by_status(items)

    async def get_item(self, user_id: int, item_id: int) -> StudyItemRecord | None:
        result = await self.db.execute(
            select(StudyItem)
            .where(StudyItem.id == item_id, StudyItem.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        item = result.scalar_one_or_none()
        return map_study_item_row(item) if item else None

    async def create_item(self, user_id: int, data: StudyItemCreate) -> StudyItemRecord:
        item = StudyItem(
            user_id=user_id,
            status=StudyItemStatus.ACTIVE.value,
            **data.model_dump(),
        )
        self.db.add(item)
        await self.db.commit()
        await self.db.refresh(item)

        logger.info("study_item_created", study_item_id=item.id)
        return map_study_item_row(item)

    async def update_item(
        self, user_id: int, item_id: int, updates: StudyItemUpdate
    ) -> StudyItemRecord | None:
        result = await self.db.execute(
            build_update(StudyItem, item_id, updates, user_id=user_id)
        )
        await self.db.commit()
        if result.rowcount == 0:
            return None

        logger.info("study_item_updated", study_item_id=item_id)
        return await self.get_item(user_id, item_id)

    async def delete_item(self, user_id: int, item_id: int) -> bool:
        """Delete a study item with its schedules and logs."""
        for model in (StudySchedule, StudyLog):
            await self.db.execute(
                delete(model).where(
                    model.study_item_id == item_id, model.user_id == user_id
                )
            )
        result = await self.db.execute(
            delete(StudyItem).where(StudyItem.id == item_id, StudyItem.user_id == user_id)
        )
        await self.db.commit()

        deleted = result.rowcount > 0
        if deleted:
            logger.info("study_item_deleted", study_item_id=item_id)
        return deleted

    # =========================================================================
    # Schedules
    # =========================================================================

    async def list_schedules(
        self, user_id: int, active_only: bool = False
    ) -> list[StudyScheduleRecord]:
        query = select(StudySchedule).where(StudySchedule.user_id == user_id)
        if active_only:
            query = query.where(StudySchedule.is_active == True)  # noqa: E712

        result = await self.db.execute(query)
        return map_rows(StudyScheduleRecord, result.scalars().all())

    async def get_weekly_schedule(
        self, user_id: int, active_only: bool = False
    ) -> dict[int, list[StudyScheduleRecord]]:
        """Schedules bucketed by weekday (0 = Sunday), time-ordered per day."""
        schedules = await self.list_schedules(user_id, active_only=active_only)
        return group_and_sort_schedules_by_day(schedules)

    async def get_sessions_for_day(
        self, user_id: int, day: date | None = None
    ) -> list[StudyScheduleRecord]:
        """Active slots falling on ``day``'s weekday, in time order."""
        day = day or date.today()
        day_of_week = (day.weekday() + 1) % 7
        schedules = await self.list_schedules(user_id, active_only=True)
        return sort_by_time([s for s in schedules if s.day_of_week == day_of_week])

    async def get_schedule(self, user_id: int, schedule_id: int) -> StudyScheduleRecord | None:
        result = await self.db.execute(
            select(StudySchedule)
            .where(StudySchedule.id == schedule_id, StudySchedule.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        schedule = result.scalar_one_or_none()
        return map_study_schedule_row(schedule) if schedule else None

    async def create_schedule(
        self, user_id: int, data: StudyScheduleCreate
    ) -> StudyScheduleRecord | None:
        """Create a slot. Returns None when the study item is not the user's."""
        if not await self.get_item(user_id, data.study_item_id):
            return None

        schedule = StudySchedule(user_id=user_id, **data.model_dump())
        self.db.add(schedule)
        await self.db.commit()
        await self.db.refresh(schedule)

        logger.info(
            "study_schedule_created",
            schedule_id=schedule.id,
            study_item_id=schedule.study_item_id,
            day_of_week=schedule.day_of_week,
        )
        return map_study_schedule_row(schedule)

    async def update_schedule(
        self, user_id: int, schedule_id: int, updates: StudyScheduleUpdate
    ) -> StudyScheduleRecord | None:
        result = await self.db.execute(
            build_update(StudySchedule, schedule_id, updates, user_id=user_id)
        )
        await self.db.commit()
        if result.rowcount == 0:
            return None

        logger.info("study_schedule_updated", schedule_id=schedule_id)
        return await self.get_schedule(user_id, schedule_id)

    async def delete_schedule(self, user_id: int, schedule_id: int) -> bool:
        result = await self.db.execute(
            delete(StudySchedule).where(
                StudySchedule.id == schedule_id, StudySchedule.user_id == user_id
            )
        )
        await self.db.commit()

        deleted = result.rowcount > 0
        if deleted:
            logger.info("study_schedule_deleted", schedule_id=schedule_id)
        return deleted

    # =========================================================================
    # Logs
    # =========================================================================

    async def list_logs(
        self, user_id: int, study_item_id: int | None = None
    ) -> list[StudyLogRecord]:
        """Logged sessions, most recent study day first."""
        query = select(StudyLog).where(StudyLog.user_id == user_id)
        if study_item_id is not None:
            query = query.where(StudyLog.study_item_id == study_item_id)

        result = await self.db.execute(query)
        return sort_by_date(map_rows(StudyLogRecord, result.scalars().all()), "study_date")

    async def create_log(self, user_id: int, data: StudyLogCreate) -> StudyLogRecord | None:
        """Log a session. Returns None when the study item is not the user's."""
        if not await self.get_item(user_id, data.study_item_id):
            return None

        log = StudyLog(user_id=user_id, **data.model_dump())
        self.db.add(log)
        await self.db.commit()
        await self.db.refresh(log)

        logger.info(
            "study_logged",
            study_log_id=log.id,
            study_item_id=log.study_item_id,
            duration_hours=log.duration_hours,
        )
        return map_study_log_row(log)

    async def delete_log(self, user_id: int, log_id: int) -> bool:
        result = await self.db.execute(
            delete(StudyLog).where(StudyLog.id == log_id, StudyLog.user_id == user_id)
        )
        await self.db.commit()

        deleted = result.rowcount > 0
        if deleted:
            logger.info("study_log_deleted", study_log_id=log_id)
        return deleted

    async def hours_this_week(self, user_id: int, now: datetime | None = None) -> float:
        week = get_current_week_range(now)
        logs = await self.list_logs(user_id)
        return calculate_study_hours_in_period(logs, week.start, week.end)

    async def get_summary(self, user_id: int, now: datetime | None = None) -> StudySummary:
        """Targets against hours actually logged."""
        items = await self.list_items(user_id)
        logs = await self.list_logs(user_id)
        week = get_current_week_range(now)

        return StudySummary(
            active_items=sum(1 for i in items if i.status == StudyItemStatus.ACTIVE),
            target_hours_per_week=calculate_total_hours(items),
            hours_this_week=calculate_study_hours_in_period(logs, week.start, week.end),
            total_hours_logged=aggregate_study_hours(logs),
        )
