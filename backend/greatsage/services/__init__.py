"""Business logic services."""

from greatsage.services.dashboard import DashboardService
from greatsage.services.habits import HabitService
from greatsage.services.notes import BookmarkService, NoteService
from greatsage.services.projects import ProjectService
from greatsage.services.study import StudyService
from greatsage.services.tasks import TaskService

__all__ = [
    "BookmarkService",
    "DashboardService",
    "HabitService",
    "NoteService",
    "ProjectService",
    "StudyService",
    "TaskService",
]
