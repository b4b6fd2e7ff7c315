"""SQLAlchemy models package."""

from greatsage.models.user import User
from greatsage.models.project import Project, Task
from greatsage.models.study import StudyItem, StudyLog, StudySchedule
from greatsage.models.habit import Habit, HabitLog
from greatsage.models.note import Bookmark, QuickNote

__all__ = [
    "Bookmark",
    "Habit",
    "HabitLog",
    "Project",
    "QuickNote",
    "StudyItem",
    "StudyLog",
    "StudySchedule",
    "Task",
    "User",
]
