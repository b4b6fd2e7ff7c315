"""Task service: CRUD plus the completed_at invariant."""

from datetime import date, datetime, timedelta, timezone

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from greatsage.db.patch import build_update
from greatsage.models.project import Task
from greatsage.schemas import TaskCreate, TaskRecord, TaskStatus, TaskUpdate
from greatsage.utils.calculations import as_utc, get_current_week_range
from greatsage.utils.mapping import map_rows, map_task_row
from greatsage.utils.sorting import sort_by_priority

logger = structlog.get_logger()


def completed_at_for(status: str, previous_status: str | None = None,
                     previous_completed_at: datetime | None = None) -> datetime | None:
    """Value of completed_at after moving a task to ``status``.

    A task already DONE keeps its original completion time.
    """
    if status != TaskStatus.DONE.value:
        return None
    if previous_status == TaskStatus.DONE.value and previous_completed_at is not None:
        return previous_completed_at
    return datetime.now(timezone.utc)


class TaskService:
    """Service for a user's tasks."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_model(self, user_id: int, task_id: int) -> Task | None:
        result = await self.db.execute(
            select(Task)
            .where(Task.id == task_id, Task.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: int) -> list[TaskRecord]:
        """All tasks of a user, most urgent first."""
        result = await self.db.execute(select(Task).where(Task.user_id == user_id))
        return sort_by_priority(map_rows(TaskRecord, result.scalars().all()))

    async def list_for_project(self, user_id: int, project_id: int) -> list[TaskRecord]:
        result = await self.db.execute(
            select(Task).where(Task.user_id == user_id, Task.project_id == project_id)
        )
        return sort_by_priority(map_rows(TaskRecord, result.scalars().all()))

    async def get_today_tasks(self, user_id: int, today: date | None = None) -> list[TaskRecord]:
        """Open tasks due on the local calendar day ``today``."""
        today = today or date.today()
        start = as_utc(today)
        end = as_utc(today + timedelta(days=1))

        result = await self.db.execute(
            select(Task).where(
                Task.user_id == user_id,
                Task.due_date >= start,
                Task.due_date < end,
                Task.status != TaskStatus.DONE.value,
            )
        )
        return sort_by_priority(map_rows(TaskRecord, result.scalars().all()))

    async def count_completed_this_week(
        self, user_id: int, now: datetime | None = None
    ) -> int:
        week = get_current_week_range(now)
        result = await self.db.execute(
            select(func.count(Task.id)).where(
                Task.user_id == user_id,
                Task.status == TaskStatus.DONE.value,
                Task.completed_at >= as_utc(week.start),
                Task.completed_at <= as_utc(week.end),
            )
        )
        return result.scalar() or 0

    async def get(self, user_id: int, task_id: int) -> TaskRecord | None:
        task = await self._get_model(user_id, task_id)
        return map_task_row(task) if task else None

    async def create(self, user_id: int, data: TaskCreate) -> TaskRecord:
        """Create a task in TODO."""
        values = data.model_dump()
        if values["due_date"] is not None:
            values["due_date"] = as_utc(values["due_date"])

        task = Task(
            user_id=user_id,
            status=TaskStatus.TODO.value,
            completed_at=None,
            **values,
        )
        self.db.add(task)
        await self.db.commit()
        await self.db.refresh(task)

        logger.info("task_created", task_id=task.id, project_id=task.project_id)
        return map_task_row(task)

    async def update(self, user_id: int, task_id: int, updates: TaskUpdate) -> TaskRecord | None:
        """Apply a partial update, keeping completed_at in step with status."""
        task = await self._get_model(user_id, task_id)
        if not task:
            return None

        extra = {}
        if updates.due_date is not None:
            extra["due_date"] = as_utc(updates.due_date)
        if "status" in updates.model_fields_set and updates.status is not None:
            extra["completed_at"] = completed_at_for(
                updates.status, task.status, task.completed_at
            )

        await self.db.execute(build_update(Task, task_id, updates, user_id=user_id, **extra))
        await self.db.commit()

        logger.info(
            "task_updated",
            task_id=task_id,
            fields=sorted(updates.model_fields_set),
        )
        return await self.get(user_id, task_id)

    async def update_status(self, user_id: int, task_id: int, status: str) -> TaskRecord | None:
        """Move a task to ``status``."""
        task = await self._get_model(user_id, task_id)
        if not task:
            return None

        old_status = task.status
        task.completed_at = completed_at_for(status, task.status, task.completed_at)
        task.status = status
        await self.db.commit()

        logger.info(
            "task_status_changed",
            task_id=task_id,
            old_status=old_status,
            new_status=status,
        )
        return await self.get(user_id, task_id)

    async def delete(self, user_id: int, task_id: int) -> bool:
        result = await self.db.execute(
            delete(Task).where(Task.id == task_id, Task.user_id == user_id)
        )
        await self.db.commit()

        deleted = result.rowcount > 0
        if deleted:
            logger.info("task_deleted", task_id=task_id)
        return deleted
