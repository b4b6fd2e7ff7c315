"""Project service: CRUD and task-progress statistics."""

from datetime import datetime

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from greatsage.config import get_settings
from greatsage.db.patch import build_update
from greatsage.models.project import Project
from greatsage.schemas import (
    ProjectCreate,
    ProjectDetail,
    ProjectRecord,
    ProjectStatus,
    ProjectUpdate,
    ProjectWithStats,
    TaskRecord,
)
from greatsage.utils.calculations import calculate_completed_hours, calculate_project_progress
from greatsage.utils.mapping import map_project_row, map_rows
from greatsage.utils.sorting import sort_by_priority

logger = structlog.get_logger()


class ProjectService:
    """Service for a user's projects."""

    def __init__(self, db: AsyncSession, now: datetime | None = None):
        self.db = db
        self.now = now
        self.settings = get_settings()

    def _to_record(self, row) -> ProjectRecord:
        """Map a row, reporting completed hours per the configured mode."""
        project = map_project_row(row)
        if self.settings.project_hours_mode == "elapsed":
            project.completed_hours = calculate_completed_hours(
                project.start_date,
                project.end_date,
                now=self.now,
                hours_per_day=self.settings.working_hours_per_day,
            )
        return project

    def _with_stats(self, project: Project) -> ProjectWithStats:
        tasks = map_rows(TaskRecord, project.tasks)
        progress = calculate_project_progress(tasks)
        return ProjectWithStats(
            **self._to_record(project).model_dump(),
            **progress.model_dump(),
        )

    async def _get_model(self, user_id: int, project_id: int) -> Project | None:
        result = await self.db.execute(
            select(Project)
            .where(Project.id == project_id, Project.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: int) -> list[ProjectRecord]:
        """Projects of a user, newest first, without their tasks."""
        result = await self.db.execute(
            select(Project.__table__)
            .where(Project.user_id == user_id)
            .order_by(Project.created_at.desc(), Project.id.desc())
        )
        return [self._to_record(row) for row in result.mappings().all()]

    async def list_with_stats(self, user_id: int) -> list[ProjectWithStats]:
        result = await self.db.execute(
            select(Project)
            .where(Project.user_id == user_id)
            .order_by(Project.created_at.desc(), Project.id.desc())
            .execution_options(populate_existing=True)
        )
        return [self._with_stats(p) for p in result.scalars().all()]

    async def get(self, user_id: int, project_id: int) -> ProjectRecord | None:
        project = await self._get_model(user_id, project_id)
        return self._to_record(project) if project else None

    async def get_with_stats(self, user_id: int, project_id: int) -> ProjectDetail | None:
        """A project with its progress and tasks, most urgent first."""
        project = await self._get_model(user_id, project_id)
        if not project:
            return None

        stats = self._with_stats(project)
        tasks = sort_by_priority(map_rows(TaskRecord, project.tasks))
        return ProjectDetail(**stats.model_dump(), tasks=tasks)

    async def count_active(self, user_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Project.id)).where(
                Project.user_id == user_id,
                Project.status == ProjectStatus.ACTIVE.value,
            )
        )
        return result.scalar() or 0

    async def create(self, user_id: int, data: ProjectCreate) -> ProjectRecord:
        """Create an ACTIVE project with no completed hours."""
        project = Project(
            user_id=user_id,
            status=ProjectStatus.ACTIVE.value,
            completed_hours=0,
            **data.model_dump(),
        )
        self.db.add(project)
        await self.db.commit()
        await self.db.refresh(project)

        logger.info("project_created", project_id=project.id)
        return self._to_record(project)

    async def update(
        self, user_id: int, project_id: int, updates: ProjectUpdate
    ) -> ProjectRecord | None:
        result = await self.db.execute(
            build_update(Project, project_id, updates, user_id=user_id)
        )
        await self.db.commit()
        if result.rowcount == 0:
            return None

        logger.info(
            "project_updated",
            project_id=project_id,
            fields=sorted(updates.model_fields_set),
        )
        return await self.get(user_id, project_id)

    async def delete(self, user_id: int, project_id: int) -> bool:
        """Delete a project; its tasks stay and lose the project link."""
        project = await self._get_model(user_id, project_id)
        if not project:
            return False

        await self.db.delete(project)
        await self.db.commit()

        logger.info("project_deleted", project_id=project_id)
        return True
