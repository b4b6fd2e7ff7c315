"""Study tracking models: items, weekly schedules and logged sessions."""

from datetime import date

from sqlalchemy import Boolean, Date, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from greatsage.db.base import Base, BaseModel, CreatedAtMixin, IntegerIDMixin


class StudyItem(BaseModel):
    """A subject, course or self-study topic."""

    __tablename__ = "study_items"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(
        String(20), nullable=False, default="SELF"
    )  # SUBJECT, COURSE, SELF
    platform: Mapped[str | None] = mapped_column(String(255), nullable=True)
    url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="ACTIVE"
    )  # ACTIVE, COMPLETED, DROPPED
    target_hours_per_week: Mapped[float | None] = mapped_column(Float, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<StudyItem {self.name}>"


class StudySchedule(BaseModel):
    """A recurring weekly study slot."""

    __tablename__ = "study_schedules"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    study_item_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("study_items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)  # 0 = Sunday
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)  # HH:mm
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class StudyLog(Base, IntegerIDMixin, CreatedAtMixin):
    """A completed study session."""

    __tablename__ = "study_logs"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    study_item_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("study_items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    study_date: Mapped[date] = mapped_column(Date, nullable=False)
    duration_hours: Mapped[float] = mapped_column(Float, nullable=False)
    topic: Mapped[str | None] = mapped_column(String(255), nullable=True)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
