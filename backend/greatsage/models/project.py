"""Project and Task models."""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from greatsage.db.base import BaseModel


class Project(BaseModel):
    """A personal project grouping tasks."""

    __tablename__ = "projects"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="ACTIVE"
    )  # ACTIVE, ON_HOLD, COMPLETED, ARCHIVED

    # Timeline
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Effort
    target_hours: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    completed_hours: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    tasks: Mapped[list["Task"]] = relationship(
        "Task", back_populates="project", lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Project {self.name}>"


class Task(BaseModel):
    """A unit of work, optionally attached to a project."""

    __tablename__ = "tasks"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    project_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("projects.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(
        String(20), nullable=False, default="OTHER"
    )  # DAILY, MAIN, OTHER
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="TODO"
    )  # TODO, IN_PROGRESS, DONE, CANCELLED
    priority: Mapped[str] = mapped_column(
        String(20), nullable=False, default="MEDIUM"
    )  # LOW, MEDIUM, HIGH, URGENT

    due_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    # Set exactly while status is DONE
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Outcome notes and who asked for the task
    result: Mapped[str | None] = mapped_column(Text, nullable=True)
    requested_by: Mapped[str | None] = mapped_column(String(255), nullable=True)

    project: Mapped["Project | None"] = relationship("Project", back_populates="tasks")

    def __repr__(self) -> str:
        return f"<Task {self.status} {self.title}>"
