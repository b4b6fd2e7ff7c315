"""Projects API endpoints."""

from fastapi import APIRouter, HTTPException, Query, status

from greatsage.api.deps import CurrentUserId
from greatsage.db.session import DBSession
from greatsage.schemas import (
    ProjectCreate,
    ProjectDetail,
    ProjectRecord,
    ProjectUpdate,
    ProjectWithStats,
)
from greatsage.services.projects import ProjectService
from greatsage.utils.filtering import apply_filters
from greatsage.utils.sorting import sort_by_status

router = APIRouter()

PROJECT_SEARCH_FIELDS = ("name", "description")


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Project not found",
    )


@router.get("/", response_model=list[ProjectWithStats])
async def list_projects(
    current_user_id: CurrentUserId,
    db: DBSession,
    search: str | None = Query(None, max_length=100),
    status_filter: str = Query("ALL", alias="status"),
) -> list[ProjectWithStats]:
    """Projects with progress, ACTIVE first, newest first within a status."""
    projects = await ProjectService(db).list_with_stats(current_user_id)
    filtered = apply_filters(
        projects, search, PROJECT_SEARCH_FIELDS, {"status": status_filter}
    )
    return sort_by_status(filtered)


@router.post("/", response_model=ProjectRecord, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> ProjectRecord:
    """Create a new project."""
    return await ProjectService(db).create(current_user_id, project_data)


@router.get("/{project_id}", response_model=ProjectDetail)
async def get_project(
    project_id: int,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> ProjectDetail:
    """Get a project with its progress and tasks."""
    project = await ProjectService(db).get_with_stats(current_user_id, project_id)
    if not project:
        raise _not_found()
    return project


@router.patch("/{project_id}", response_model=ProjectRecord)
async def update_project(
    project_id: int,
    updates: ProjectUpdate,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> ProjectRecord:
    project = await ProjectService(db).update(current_user_id, project_id, updates)
    if not project:
        raise _not_found()
    return project


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: int,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> None:
    """Delete a project. Its tasks are kept without a project."""
    if not await ProjectService(db).delete(current_user_id, project_id):
        raise _not_found()
