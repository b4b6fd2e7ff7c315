"""Tasks API endpoints."""

import structlog
from fastapi import APIRouter, HTTPException, Query, status

from greatsage.api.deps import CurrentUserId
from greatsage.db.session import DBSession
from greatsage.schemas import TaskCreate, TaskRecord, TaskStatusUpdate, TaskUpdate
from greatsage.services.projects import ProjectService
from greatsage.services.tasks import TaskService
from greatsage.utils.filtering import apply_filters

router = APIRouter()
logger = structlog.get_logger()

TASK_SEARCH_FIELDS = ("title", "description", "result", "requested_by")


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Task not found",
    )


async def _check_project(db: DBSession, user_id: int, project_id: int | None) -> None:
    if project_id is None:
        return
    if not await ProjectService(db).get(user_id, project_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        )


@router.get("/", response_model=list[TaskRecord])
async def list_tasks(
    current_user_id: CurrentUserId,
    db: DBSession,
    search: str | None = Query(None, max_length=100),
    status_filter: str = Query("ALL", alias="status"),
    priority: str = Query("ALL"),
    task_type: str = Query("ALL", alias="type"),
    project_id: int | None = Query(None, alias="projectId"),
) -> list[TaskRecord]:
    """List tasks, most urgent first, with search and filters."""
    tasks = await TaskService(db).list_for_user(current_user_id)
    return list(
        apply_filters(
            tasks,
            search,
            TASK_SEARCH_FIELDS,
            {
                "status": status_filter,
                "priority": priority,
                "type": task_type,
                "project_id": project_id,
            },
        )
    )


@router.get("/today", response_model=list[TaskRecord])
async def list_today_tasks(current_user_id: CurrentUserId, db: DBSession) -> list[TaskRecord]:
    """Open tasks due today."""
    return await TaskService(db).get_today_tasks(current_user_id)


@router.post("/", response_model=TaskRecord, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> TaskRecord:
    """Create a new task."""
    await _check_project(db, current_user_id, task_data.project_id)
    return await TaskService(db).create(current_user_id, task_data)


@router.get("/{task_id}", response_model=TaskRecord)
async def get_task(task_id: int, current_user_id: CurrentUserId, db: DBSession) -> TaskRecord:
    task = await TaskService(db).get(current_user_id, task_id)
    if not task:
        raise _not_found()
    return task


@router.patch("/{task_id}", response_model=TaskRecord)
async def update_task(
    task_id: int,
    updates: TaskUpdate,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> TaskRecord:
    """Update a task."""
    if "project_id" in updates.model_fields_set:
        await _check_project(db, current_user_id, updates.project_id)

    task = await TaskService(db).update(current_user_id, task_id, updates)
    if not task:
        raise _not_found()
    return task


@router.post("/{task_id}/status", response_model=TaskRecord)
async def update_task_status(
    task_id: int,
    body: TaskStatusUpdate,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> TaskRecord:
    """Move a task to another status."""
    task = await TaskService(db).update_status(current_user_id, task_id, body.status)
    if not task:
        raise _not_found()
    return task


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: int, current_user_id: CurrentUserId, db: DBSession) -> None:
    if not await TaskService(db).delete(current_user_id, task_id):
        raise _not_found()
