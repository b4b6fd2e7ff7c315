"""Pydantic records and request payloads.

Records are the in-memory shape every service returns and every metrics
helper consumes. Attributes are snake_case; the JSON form uses camelCase
aliases so API clients see ``dueDate``, ``completedAt`` and so on.
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


# =============================================================================
# Enums
# =============================================================================


class TaskType(str, Enum):
    """Kinds of task."""
    DAILY = "DAILY"
    MAIN = "MAIN"
    OTHER = "OTHER"


class TaskStatus(str, Enum):
    """Task lifecycle states."""
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    CANCELLED = "CANCELLED"


class TaskPriority(str, Enum):
    """Task priorities, lowest first."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class ProjectStatus(str, Enum):
    """Project lifecycle states."""
    ACTIVE = "ACTIVE"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"


class StudyItemType(str, Enum):
    """Kinds of study item."""
    SUBJECT = "SUBJECT"
    COURSE = "COURSE"
    SELF = "SELF"


class StudyItemStatus(str, Enum):
    """Study item lifecycle states."""
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    DROPPED = "DROPPED"


class BookmarkSourceType(str, Enum):
    """Where a bookmarked link points."""
    YOUTUBE = "YOUTUBE"
    SPOTIFY = "SPOTIFY"
    ARTICLE = "ARTICLE"
    TUTORIAL = "TUTORIAL"
    OTHER = "OTHER"


TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class CamelModel(BaseModel):
    """Base for every schema: camelCase JSON, snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _zero_if_missing(value: Any) -> Any:
    return 0 if value is None else value


# =============================================================================
# Records
# =============================================================================


class UserRecord(CamelModel):
    """A user."""
    id: int
    email: str
    name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TaskRecord(CamelModel):
    """A task."""
    id: int
    user_id: int
    project_id: int | None = None
    title: str
    description: str | None = None
    type: TaskType = TaskType.OTHER
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    completed_at: datetime | None = None
    result: str | None = None
    requested_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("due_date", "completed_at", mode="after")
    @classmethod
    def naive_times_are_utc(cls, v: datetime | None) -> datetime | None:
        # SQLite hands back stored UTC wall time without an offset
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class ProjectRecord(CamelModel):
    """A project without its tasks."""
    id: int
    user_id: int
    name: str
    description: str | None = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    start_date: date | None = None
    end_date: date | None = None
    target_hours: float = 0
    completed_hours: float = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("target_hours", "completed_hours", mode="before")
    @classmethod
    def zero_missing_hours(cls, v: Any) -> Any:
        return _zero_if_missing(v)


class StudyItemRecord(CamelModel):
    """A study item."""
    id: int
    user_id: int
    name: str
    type: StudyItemType = StudyItemType.SELF
    platform: str | None = None
    url: str | None = None
    status: StudyItemStatus = StudyItemStatus.ACTIVE
    target_hours_per_week: float | None = None
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class StudyScheduleRecord(CamelModel):
    """A weekly study slot."""
    id: int
    user_id: int
    study_item_id: int
    day_of_week: int = Field(ge=0, le=6)
    start_time: str
    end_time: str
    note: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


class StudyLogRecord(CamelModel):
    """A logged study session."""
    id: int
    user_id: int
    study_item_id: int
    study_date: date
    duration_hours: float = 0
    topic: str | None = None
    note: str | None = None
    created_at: datetime | None = None

    @field_validator("duration_hours", mode="before")
    @classmethod
    def zero_missing_duration(cls, v: Any) -> Any:
        return _zero_if_missing(v)


class HabitRecord(CamelModel):
    """A habit."""
    id: int
    user_id: int
    name: str
    description: str | None = None
    target_value: float | None = None
    unit: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


class HabitLogRecord(CamelModel):
    """A day a habit was done."""
    id: int
    user_id: int
    habit_id: int
    log_date: date
    value: float | None = None
    note: str | None = None
    created_at: datetime | None = None


class QuickNoteRecord(CamelModel):
    """A quick note."""
    id: int
    user_id: int
    title: str | None = None
    content: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BookmarkRecord(CamelModel):
    """A bookmark."""
    id: int
    user_id: int
    title: str
    url: str
    source_type: BookmarkSourceType = BookmarkSourceType.OTHER
    category: str | None = None
    note: str | None = None
    created_at: datetime | None = None


# =============================================================================
# Derived records
# =============================================================================


class ProjectProgress(CamelModel):
    """Completed-task share of a project."""
    total_tasks: int = 0
    completed_tasks: int = 0
    progress_percentage: int = 0


class ProjectWithStats(ProjectRecord):
    """A project with its task progress."""
    total_tasks: int = 0
    completed_tasks: int = 0
    progress_percentage: int = 0


class ProjectDetail(ProjectWithStats):
    """A project with progress and its tasks in priority order."""
    tasks: list[TaskRecord] = Field(default_factory=list)


class HabitWithStreak(HabitRecord):
    """A habit with its streaks."""
    current_streak: int = 0
    longest_streak: int = 0
    today_completed: bool = False


class WeekRange(CamelModel):
    """Sunday 00:00 to Saturday 23:59:59.999 of one week."""
    start: datetime
    end: datetime


class DaySchedule(CamelModel):
    """Study slots of one weekday, ordered by start time."""
    day_of_week: int
    day_name: str
    schedules: list[StudyScheduleRecord] = Field(default_factory=list)


class StudySummary(CamelModel):
    """Weekly study totals."""
    active_items: int
    target_hours_per_week: float
    hours_this_week: float
    total_hours_logged: float


class DashboardStats(CamelModel):
    """Numbers and lists shown on the dashboard."""
    tasks_completed_this_week: int
    study_hours_this_week: float
    habit_completion_rate: int
    active_projects_count: int
    today_tasks: list[TaskRecord] = Field(default_factory=list)
    today_habits: list[HabitWithStreak] = Field(default_factory=list)
    upcoming_study_sessions: list[StudyScheduleRecord] = Field(default_factory=list)
    labels: dict[str, str] = Field(default_factory=dict)


# =============================================================================
# Payloads
# =============================================================================


class PatchModel(CamelModel):
    """Base for partial updates; enum members are stored as plain strings.

    Fields named in ``NOT_NULL`` back NOT NULL columns: they may be omitted
    from a patch but not sent as null.
    """

    NOT_NULL: ClassVar[frozenset[str]] = frozenset()

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        nulls = sorted(
            name for name in self.model_fields_set
            if name in self.NOT_NULL and getattr(self, name) is None
        )
        if nulls:
            raise ValueError(f"{', '.join(nulls)} cannot be null")
        return self


class TaskCreate(PatchModel):
    """Create a task."""
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    type: TaskType = TaskType.OTHER
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    project_id: int | None = None
    result: str | None = None
    requested_by: str | None = Field(None, max_length=255)


class TaskUpdate(PatchModel):
    """Update a task. Omitted fields are left untouched."""
    NOT_NULL = frozenset({"title", "type", "status", "priority"})

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    type: TaskType | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    project_id: int | None = None
    result: str | None = None
    requested_by: str | None = Field(None, max_length=255)


class TaskStatusUpdate(PatchModel):
    """Change only the status of a task."""
    status: TaskStatus


class ProjectCreate(PatchModel):
    """Create a project."""
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    target_hours: float = Field(default=0, ge=0)
    start_date: date | None = None
    end_date: date | None = None


class ProjectUpdate(PatchModel):
    """Update a project."""
    NOT_NULL = frozenset({"name", "status", "target_hours", "completed_hours"})

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    status: ProjectStatus | None = None
    target_hours: float | None = Field(None, ge=0)
    completed_hours: float | None = Field(None, ge=0)
    start_date: date | None = None
    end_date: date | None = None


class StudyItemCreate(PatchModel):
    """Create a study item."""
    name: str = Field(..., min_length=1, max_length=255)
    type: StudyItemType = StudyItemType.SELF
    platform: str | None = None
    url: str | None = None
    target_hours_per_week: float | None = Field(None, ge=0)
    description: str | None = None


class StudyItemUpdate(PatchModel):
    """Update a study item."""
    NOT_NULL = frozenset({"name", "type", "status"})

    name: str | None = Field(None, min_length=1, max_length=255)
    type: StudyItemType | None = None
    platform: str | None = None
    url: str | None = None
    status: StudyItemStatus | None = None
    target_hours_per_week: float | None = Field(None, ge=0)
    description: str | None = None


class StudyScheduleCreate(PatchModel):
    """Create a weekly study slot."""
    study_item_id: int
    day_of_week: int = Field(..., ge=0, le=6)
    start_time: str = Field(..., pattern=TIME_PATTERN)
    end_time: str = Field(..., pattern=TIME_PATTERN)
    note: str | None = None
    is_active: bool = True


class StudyScheduleUpdate(PatchModel):
    """Update a weekly study slot."""
    NOT_NULL = frozenset({"day_of_week", "start_time", "end_time", "is_active"})

    day_of_week: int | None = Field(None, ge=0, le=6)
    start_time: str | None = Field(None, pattern=TIME_PATTERN)
    end_time: str | None = Field(None, pattern=TIME_PATTERN)
    note: str | None = None
    is_active: bool | None = None


class StudyLogCreate(PatchModel):
    """Log a study session."""
    study_item_id: int
    study_date: date
    duration_hours: float = Field(..., gt=0)
    topic: str | None = Field(None, max_length=255)
    note: str | None = None


class HabitCreate(PatchModel):
    """Create a habit."""
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    target_value: float | None = None
    unit: str | None = Field(None, max_length=50)


class HabitUpdate(PatchModel):
    """Update a habit."""
    NOT_NULL = frozenset({"name", "is_active"})

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    target_value: float | None = None
    unit: str | None = Field(None, max_length=50)
    is_active: bool | None = None


class HabitLogCreate(PatchModel):
    """Mark a habit as done on a day (today when omitted)."""
    log_date: date | None = None
    value: float | None = None
    note: str | None = None


class QuickNoteCreate(PatchModel):
    """Create a quick note."""
    title: str | None = Field(None, max_length=255)
    content: str = Field(..., min_length=1)


class QuickNoteUpdate(PatchModel):
    """Update a quick note."""
    NOT_NULL = frozenset({"content"})

    title: str | None = Field(None, max_length=255)
    content: str | None = Field(None, min_length=1)


class BookmarkCreate(PatchModel):
    """Create a bookmark."""
    title: str = Field(..., min_length=1, max_length=255)
    url: str = Field(..., min_length=1, max_length=2048)
    source_type: BookmarkSourceType = BookmarkSourceType.OTHER
    category: str | None = Field(None, max_length=100)
    note: str | None = None


class BookmarkUpdate(PatchModel):
    """Update a bookmark."""
    NOT_NULL = frozenset({"title", "url", "source_type"})

    title: str | None = Field(None, min_length=1, max_length=255)
    url: str | None = Field(None, min_length=1, max_length=2048)
    source_type: BookmarkSourceType | None = None
    category: str | None = Field(None, max_length=100)
    note: str | None = None
