"""Quick notes and bookmarks."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from greatsage.db.base import Base, BaseModel, CreatedAtMixin, IntegerIDMixin


class QuickNote(BaseModel):
    """A short free-form note."""

    __tablename__ = "quick_notes"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)


class Bookmark(Base, IntegerIDMixin, CreatedAtMixin):
    """A saved link."""

    __tablename__ = "bookmarks"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    source_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default="OTHER"
    )  # YOUTUBE, SPOTIFY, ARTICLE, TUTORIAL, OTHER
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
