"""Tests for the study service."""

from datetime import date, datetime

from greatsage.schemas import (
    StudyItemCreate,
    StudyItemStatus,
    StudyItemUpdate,
    StudyLogCreate,
    StudyScheduleCreate,
    StudyScheduleUpdate,
)
from greatsage.services.study import StudyService

from factories import OTHER_USER_ID, USER_ID


async def _item(service, name="Calculus", **kwargs):
    return await service.create_item(USER_ID, StudyItemCreate(name=name, **kwargs))


def _slot(item_id, day, start, end="23:00", **kwargs):
    return StudyScheduleCreate(
        study_item_id=item_id, day_of_week=day, start_time=start, end_time=end, **kwargs
    )


async def test_create_item_is_active(db):
    item = await _item(StudyService(db), type="COURSE", platform="Coursera")

    assert item.status is StudyItemStatus.ACTIVE
    assert item.platform == "Coursera"


async def test_list_items_puts_active_first(db):
    service = StudyService(db)
    dropped = await _item(service, "Latin")
    await _item(service, "Python")
    await service.update_item(USER_ID, dropped.id, StudyItemUpdate(status="DROPPED"))

    items = await service.list_items(USER_ID)

    assert [i.name for i in items] == ["Python", "Latin"]


async def test_schedule_requires_owned_item(db):
    service = StudyService(db)
    theirs = await service.create_item(OTHER_USER_ID, StudyItemCreate(name="Theirs"))

    assert await service.create_schedule(USER_ID, _slot(theirs.id, 1, "08:00")) is None
    assert await service.create_log(
        USER_ID, StudyLogCreate(study_item_id=theirs.id, study_date=date(2026, 10, 18), duration_hours=1)
    ) is None


async def test_weekly_schedule_groups_by_day(db):
    service = StudyService(db)
    item = await _item(service)
    await service.create_schedule(USER_ID, _slot(item.id, 2, "18:00"))
    await service.create_schedule(USER_ID, _slot(item.id, 2, "07:30"))
    await service.create_schedule(USER_ID, _slot(item.id, 5, "09:00"))

    weekly = await service.get_weekly_schedule(USER_ID)

    assert sorted(weekly) == list(range(7))
    assert [s.start_time for s in weekly[2]] == ["07:30", "18:00"]
    assert len(weekly[5]) == 1
    assert weekly[0] == []


async def test_sessions_for_day_only_active_slots_in_order(db):
    service = StudyService(db)
    item = await _item(service)
    await service.create_schedule(USER_ID, _slot(item.id, 0, "20:00"))
    await service.create_schedule(USER_ID, _slot(item.id, 0, "06:00"))
    await service.create_schedule(USER_ID, _slot(item.id, 0, "12:00", is_active=False))
    await service.create_schedule(USER_ID, _slot(item.id, 1, "06:00"))

    # 2026-10-18 is a Sunday
    sessions = await service.get_sessions_for_day(USER_ID, date(2026, 10, 18))

    assert [s.start_time for s in sessions] == ["06:00", "20:00"]


async def test_update_and_delete_schedule(db):
    service = StudyService(db)
    item = await _item(service)
    slot = await service.create_schedule(USER_ID, _slot(item.id, 3, "10:00"))

    updated = await service.update_schedule(
        USER_ID, slot.id, StudyScheduleUpdate(start_time="11:00", is_active=False)
    )

    assert updated.start_time == "11:00"
    assert updated.is_active is False
    assert updated.day_of_week == 3
    assert await service.delete_schedule(USER_ID, slot.id) is True
    assert await service.get_schedule(USER_ID, slot.id) is None


async def test_hours_this_week_and_summary(db):
    service = StudyService(db)
    item = await _item(service, target_hours_per_week=5)
    old = await _item(service, "Old", target_hours_per_week=10)
    await service.update_item(USER_ID, old.id, StudyItemUpdate(status="COMPLETED"))

    for day, hours in ((17, 1.0), (18, 1.5), (21, 2.0)):
        await service.create_log(
            USER_ID,
            StudyLogCreate(study_item_id=item.id, study_date=date(2026, 10, day), duration_hours=hours),
        )
    now = datetime(2026, 10, 21, 12, 0)

    assert await service.hours_this_week(USER_ID, now=now) == 3.5

    summary = await service.get_summary(USER_ID, now=now)
    assert summary.active_items == 1
    assert summary.target_hours_per_week == 5
    assert summary.hours_this_week == 3.5
    assert summary.total_hours_logged == 4.5


async def test_list_logs_newest_first(db):
    service = StudyService(db)
    item = await _item(service)
    for day in (3, 9, 5):
        await service.create_log(
            USER_ID,
            StudyLogCreate(study_item_id=item.id, study_date=date(2026, 10, day), duration_hours=1),
        )

    logs = await service.list_logs(USER_ID)

    assert [log.study_date.day for log in logs] == [9, 5, 3]


async def test_delete_item_removes_schedules_and_logs(db):
    service = StudyService(db)
    item = await _item(service)
    await service.create_schedule(USER_ID, _slot(item.id, 1, "08:00"))
    log = await service.create_log(
        USER_ID, StudyLogCreate(study_item_id=item.id, study_date=date(2026, 10, 1), duration_hours=1)
    )

    assert await service.delete_item(USER_ID, item.id) is True
    assert await service.list_schedules(USER_ID) == []
    assert await service.list_logs(USER_ID) == []
    assert await service.delete_log(USER_ID, log.id) is False
