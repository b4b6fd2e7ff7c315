"""Study API endpoints: items, weekly schedule, logs and summary."""

from fastapi import APIRouter, HTTPException, Query, status

from greatsage.api.deps import CurrentUserId
from greatsage.config import get_settings
from greatsage.db.session import DBSession
from greatsage.schemas import (
    DaySchedule,
    StudyItemCreate,
    StudyItemRecord,
    StudyItemUpdate,
    StudyLogCreate,
    StudyLogRecord,
    StudyScheduleCreate,
    StudyScheduleRecord,
    StudyScheduleUpdate,
    StudySummary,
)
from greatsage.services.study import StudyService
from greatsage.utils.filtering import apply_filters
from greatsage.utils.formatting import format_time, get_day_name

router = APIRouter()

STUDY_ITEM_SEARCH_FIELDS = ("name", "platform", "description")


def _not_found(what: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{what} not found",
    )


# =========================================================================
# Study items
# =========================================================================


@router.get("/items", response_model=list[StudyItemRecord])
async def list_study_items(
    current_user_id: CurrentUserId,
    db: DBSession,
    search: str | None = Query(None, max_length=100),
    status_filter: str = Query("ALL", alias="status"),
    item_type: str = Query("ALL", alias="type"),
) -> list[StudyItemRecord]:
    """Study items, ACTIVE first."""
    items = await StudyService(db).list_items(current_user_id)
    return list(
        apply_filters(
            items,
            search,
            STUDY_ITEM_SEARCH_FIELDS,
            {"status": status_filter, "type": item_type},
        )
    )


@router.post("/items", response_model=StudyItemRecord, status_code=status.HTTP_201_CREATED)
async def create_study_item(
    data: StudyItemCreate,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> StudyItemRecord:
    return await StudyService(db).create_item(current_user_id, data)


@router.patch("/items/{item_id}", response_model=StudyItemRecord)
async def update_study_item(
    item_id: int,
    updates: StudyItemUpdate,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> StudyItemRecord:
    item = await StudyService(db).update_item(current_user_id, item_id, updates)
    if not item:
        raise _not_found("Study item")
    return item


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_study_item(item_id: int, current_user_id: CurrentUserId, db: DBSession) -> None:
    if not await StudyService(db).delete_item(current_user_id, item_id):
        raise _not_found("Study item")


# =========================================================================
# Schedules
# =========================================================================


@router.get("/schedules/weekly", response_model=list[DaySchedule])
async def get_weekly_schedule(
    current_user_id: CurrentUserId,
    db: DBSession,
    active_only: bool = Query(False, alias="activeOnly"),
) -> list[DaySchedule]:
    """Seven days (Sunday first), each with its slots in time order."""
    grouped = await StudyService(db).get_weekly_schedule(
        current_user_id, active_only=active_only
    )
    return [
        DaySchedule(day_of_week=day, day_name=get_day_name(day), schedules=schedules)
        for day, schedules in grouped.items()
    ]


@router.get("/schedules/labels")
async def get_schedule_labels(
    current_user_id: CurrentUserId,
    db: DBSession,
) -> dict[int, list[str]]:
    """Human-readable "start - end" labels per weekday."""
    use_24_hour = get_settings().use_24_hour_time
    grouped = await StudyService(db).get_weekly_schedule(current_user_id, active_only=True)
    return {
        day: [
            f"{format_time(s.start_time, use_24_hour)} - {format_time(s.end_time, use_24_hour)}"
            for s in schedules
        ]
        for day, schedules in grouped.items()
    }


@router.post(
    "/schedules",
    response_model=StudyScheduleRecord,
    status_code=status.HTTP_201_CREATED,
)
async def create_study_schedule(
    data: StudyScheduleCreate,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> StudyScheduleRecord:
    schedule = await StudyService(db).create_schedule(current_user_id, data)
    if not schedule:
        raise _not_found("Study item")
    return schedule


@router.patch("/schedules/{schedule_id}", response_model=StudyScheduleRecord)
async def update_study_schedule(
    schedule_id: int,
    updates: StudyScheduleUpdate,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> StudyScheduleRecord:
    schedule = await StudyService(db).update_schedule(current_user_id, schedule_id, updates)
    if not schedule:
        raise _not_found("Schedule")
    return schedule


@router.delete("/schedules/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_study_schedule(
    schedule_id: int,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> None:
    if not await StudyService(db).delete_schedule(current_user_id, schedule_id):
        raise _not_found("Schedule")


# =========================================================================
# Logs
# =========================================================================


@router.get("/logs", response_model=list[StudyLogRecord])
async def list_study_logs(
    current_user_id: CurrentUserId,
    db: DBSession,
    study_item_id: int | None = Query(None, alias="studyItemId"),
) -> list[StudyLogRecord]:
    """Logged sessions, most recent first."""
    return await StudyService(db).list_logs(current_user_id, study_item_id=study_item_id)


@router.post("/logs", response_model=StudyLogRecord, status_code=status.HTTP_201_CREATED)
async def create_study_log(
    data: StudyLogCreate,
    current_user_id: CurrentUserId,
    db: DBSession,
) -> StudyLogRecord:
    log = await StudyService(db).create_log(current_user_id, data)
    if not log:
        raise _not_found("Study item")
    return log


@router.delete("/logs/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_study_log(log_id: int, current_user_id: CurrentUserId, db: DBSession) -> None:
    if not await StudyService(db).delete_log(current_user_id, log_id):
        raise _not_found("Study log")


@router.get("/summary", response_model=StudySummary)
async def get_study_summary(current_user_id: CurrentUserId, db: DBSession) -> StudySummary:
    """Weekly target hours against hours logged."""
    return await StudyService(db).get_summary(current_user_id)
