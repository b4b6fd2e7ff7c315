"""Dashboard service: weekly numbers and today's agenda."""

from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from greatsage.schemas import DashboardStats
from greatsage.services.habits import HabitService
from greatsage.services.projects import ProjectService
from greatsage.services.study import StudyService
from greatsage.services.tasks import TaskService
from greatsage.utils.calculations import calculate_completion_rate, get_current_week_range
from greatsage.utils.formatting import (
    format_date,
    format_date_range,
    format_duration,
    format_number,
    format_percentage,
)

logger = structlog.get_logger()

DAYS_IN_WEEK = 7


class DashboardService:
    """Assembles the dashboard from the other services."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_stats(self, user_id: int, now: datetime | None = None) -> DashboardStats:
        now = now or datetime.now()
        today = now.date()
        week = get_current_week_range(now)

        tasks = TaskService(self.db)
        projects = ProjectService(self.db, now=now)
        study = StudyService(self.db)
        habits = HabitService(self.db)

        tasks_completed = await tasks.count_completed_this_week(user_id, now=now)
        study_hours = await study.hours_this_week(user_id, now=now)

        active_habits = await habits.list_with_streaks(user_id, active_only=True, today=today)
        active_ids = {h.id for h in active_habits}
        week_logs = [
            log
            for log in await habits.list_logs(
                user_id, start=week.start.date(), end=week.end.date()
            )
            if log.habit_id in active_ids
        ]
        completion_rate = calculate_completion_rate(
            week_logs, len(active_habits), DAYS_IN_WEEK
        )

        stats = DashboardStats(
            tasks_completed_this_week=tasks_completed,
            study_hours_this_week=study_hours,
            habit_completion_rate=completion_rate,
            active_projects_count=await projects.count_active(user_id),
            today_tasks=await tasks.get_today_tasks(user_id, today=today),
            today_habits=active_habits,
            upcoming_study_sessions=await study.get_sessions_for_day(user_id, today),
            labels={
                "today": format_date(today, "long"),
                "week": format_date_range(week.start, week.end),
                "studyHours": format_duration(study_hours),
                "studyHoursValue": format_number(study_hours),
                "habitCompletionRate": format_percentage(completion_rate),
            },
        )

        logger.debug(
            "dashboard_computed",
            user_id=user_id,
            tasks_completed=tasks_completed,
            study_hours=study_hours,
            habit_completion_rate=completion_rate,
        )
        return stats
