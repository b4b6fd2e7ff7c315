"""Quick notes and bookmarks API endpoints."""

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import computed_field

from greatsage.api.deps import CurrentUserId
from greatsage.db.session import DBSession
from greatsage.schemas import (
    BookmarkCreate,
    BookmarkRecord,
    BookmarkUpdate,
    QuickNoteCreate,
    QuickNoteRecord,
    QuickNoteUpdate,
)
from greatsage.services.notes import BookmarkService, NoteService
from greatsage.utils.formatting import truncate_text

notes_router = APIRouter()
bookmarks_router = APIRouter()

PREVIEW_LENGTH = 120


class QuickNoteResponse(QuickNoteRecord):
    """Quick note with a shortened preview for list views."""

    @computed_field
    @property
    def preview(self) -> str:
        return truncate_text(self.content, PREVIEW_LENGTH)


def _not_found(what: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{what} not found",
    )


# =========================================================================
# Quick notes
# =========================================================================


@notes_router.get("/", response_model=list[QuickNoteResponse])
async def list_notes(
    current_user_id: CurrentUserId,
    db: DBSession,
    search: str | None = Query(None, max_length=100),
) -> list[QuickNoteResponse]:
    notes = await NoteService(db).list_notes(current_user_id, search=search)
    return [QuickNoteResponse(**n.model_dump()) for n in notes]


@notes_router.post("/", response_model=QuickNoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    data: QuickNoteCreate,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> QuickNoteResponse:
    note = await NoteService(db).create(current_user_id, data)
    return QuickNoteResponse(**note.model_dump())


@notes_router.patch("/{note_id}", response_model=QuickNoteResponse)
async def update_note(
    note_id: int,
    updates: QuickNoteUpdate,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> QuickNoteResponse:
    note = await NoteService(db).update(current_user_id, note_id, updates)
    if not note:
        raise _not_found("Note")
    return QuickNoteResponse(**note.model_dump())


@notes_router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(note_id: int, current_user_id: CurrentUserId, db: DBSession) -> None:
    if not await NoteService(db).delete(current_user_id, note_id):
        raise _not_found("Note")


# =========================================================================
# Bookmarks
# =========================================================================


@bookmarks_router.get("/", response_model=list[BookmarkRecord])
async def list_bookmarks(
    current_user_id: CurrentUserId,
    db: DBSession,
    search: str | None = Query(None, max_length=100),
    source_type: str = Query("ALL", alias="sourceType"),
    category: str = Query("ALL"),
) -> list[BookmarkRecord]:
    return await BookmarkService(db).list_bookmarks(
        current_user_id,
        search=search,
        source_type=source_type,
        category=category,
    )


@bookmarks_router.post("/", response_model=BookmarkRecord, status_code=status.HTTP_201_CREATED)
async def create_bookmark(
    data: BookmarkCreate,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> BookmarkRecord:
    return await BookmarkService(db).create(current_user_id, data)


@bookmarks_router.patch("/{bookmark_id}", response_model=BookmarkRecord)
async def update_bookmark(
    bookmark_id: int,
    updates: BookmarkUpdate,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> BookmarkRecord:
    bookmark = await BookmarkService(db).update(current_user_id, bookmark_id, updates)
    if not bookmark:
        raise _not_found("Bookmark")
    return bookmark


@bookmarks_router.delete("/{bookmark_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bookmark(
    bookmark_id: int,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> None:
    if not await BookmarkService(db).delete(current_user_id, bookmark_id):
        raise _not_found("Bookmark")
