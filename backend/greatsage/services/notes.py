"""Quick note and bookmark services."""

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from greatsage.db.patch import build_update
from greatsage.models.note import Bookmark, QuickNote
from greatsage.schemas import (
    BookmarkCreate,
    BookmarkRecord,
    BookmarkUpdate,
    QuickNoteCreate,
    QuickNoteRecord,
    QuickNoteUpdate,
)
from greatsage.utils.filtering import apply_filters, filter_by_search
from greatsage.utils.mapping import map_bookmark_row, map_quick_note_row, map_rows
from greatsage.utils.sorting import sort_by_date

logger = structlog.get_logger()

NOTE_SEARCH_FIELDS = ("title", "content")
BOOKMARK_SEARCH_FIELDS = ("title", "url", "category", "note")


class NoteService:
    """Service for quick notes."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_notes(self, user_id: int, search: str | None = None) -> list[QuickNoteRecord]:
        """Notes, last edited first, optionally searched by title/content."""
        result = await self.db.execute(select(QuickNote).where(QuickNote.user_id == user_id))
        notes = sort_by_date(map_rows(QuickNoteRecord, result.scalars().all()), "updated_at")
        return list(filter_by_search(notes, search, NOTE_SEARCH_FIELDS))

    async def get(self, user_id: int, note_id: int) -> QuickNoteRecord | None:
        result = await self.db.execute(
            select(QuickNote)
            .where(QuickNote.id == note_id, QuickNote.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        note = result.scalar_one_or_none()
        return map_quick_note_row(note) if note else None

    async def create(self, user_id: int, data: QuickNoteCreate) -> QuickNoteRecord:
        note = QuickNote(user_id=user_id, **data.model_dump())
        self.db.add(note)
        await self.db.commit()
        await self.db.refresh(note)

        logger.info("note_created", note_id=note.id)
        return map_quick_note_row(note)

    async def update(
        self, user_id: int, note_id: int, updates: QuickNoteUpdate
    ) -> QuickNoteRecord | None:
        result = await self.db.execute(
            build_update(QuickNote, note_id, updates, user_id=user_id)
        )
        await self.db.commit()
        if result.rowcount == 0:
            return None

        logger.info("note_updated", note_id=note_id)
        return await self.get(user_id, note_id)

    async def delete(self, user_id: int, note_id: int) -> bool:
        result = await self.db.execute(
            delete(QuickNote).where(QuickNote.id == note_id, QuickNote.user_id == user_id)
        )
        await self.db.commit()

        deleted = result.rowcount > 0
        if deleted:
            logger.info("note_deleted", note_id=note_id)
        return deleted


class BookmarkService:
    """Service for bookmarks."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_bookmarks(
        self,
        user_id: int,
        search: str | None = None,
        source_type: str = "ALL",
        category: str = "ALL",
    ) -> list[BookmarkRecord]:
        """Bookmarks, newest first, narrowed by search and filters."""
        result = await self.db.execute(select(Bookmark).where(Bookmark.user_id == user_id))
        bookmarks = sort_by_date(map_rows(BookmarkRecord, result.scalars().all()))
        return list(
            apply_filters(
                bookmarks,
                search,
                BOOKMARK_SEARCH_FIELDS,
                {"source_type": source_type, "category": category},
            )
        )

    async def get(self, user_id: int, bookmark_id: int) -> BookmarkRecord | None:
        result = await self.db.execute(
            select(Bookmark)
            .where(Bookmark.id == bookmark_id, Bookmark.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        bookmark = result.scalar_one_or_none()
        return map_bookmark_row(bookmark) if bookmark else None

    async def create(self, user_id: int, data: BookmarkCreate) -> BookmarkRecord:
        bookmark = Bookmark(user_id=user_id, **data.model_dump())
        self.db.add(bookmark)
        await self.db.commit()
        await self.db.refresh(bookmark)

        logger.info("bookmark_created", bookmark_id=bookmark.id, source_type=bookmark.source_type)
        return map_bookmark_row(bookmark)

    async def update(
        self, user_id: int, bookmark_id: int, updates: BookmarkUpdate
    ) -> BookmarkRecord | None:
        # Bookmarks carry no updated_at, so an empty patch has nothing to write
        if not updates.model_fields_set:
            return await self.get(user_id, bookmark_id)

        result = await self.db.execute(
            build_update(Bookmark, bookmark_id, updates, user_id=user_id)
        )
        await self.db.commit()
        if result.rowcount == 0:
            return None

        logger.info("bookmark_updated", bookmark_id=bookmark_id)
        return await self.get(user_id, bookmark_id)

    async def delete(self, user_id: int, bookmark_id: int) -> bool:
        result = await self.db.execute(
            delete(Bookmark).where(Bookmark.id == bookmark_id, Bookmark.user_id == user_id)
        )
        await self.db.commit()

        deleted = result.rowcount > 0
        if deleted:
            logger.info("bookmark_deleted", bookmark_id=bookmark_id)
        return deleted
