"""Tests for the task service."""

from datetime import date, datetime, timezone

from greatsage.models import Task
from greatsage.schemas import TaskCreate, TaskStatus, TaskUpdate
from greatsage.services.tasks import TaskService, completed_at_for

from factories import OTHER_USER_ID, USER_ID


def test_completed_at_for_done_sets_timestamp():
    assert completed_at_for("DONE", "TODO", None) is not None


def test_completed_at_for_keeps_original_when_already_done():
    original = datetime(2026, 10, 1, 8, tzinfo=timezone.utc)

    assert completed_at_for("DONE", "DONE", original) == original


def test_completed_at_for_clears_when_not_done():
    original = datetime(2026, 10, 1, 8, tzinfo=timezone.utc)

    assert completed_at_for("TODO", "DONE", original) is None
    assert completed_at_for("CANCELLED", "DONE", original) is None


async def test_create_starts_in_todo(db):
    task = await TaskService(db).create(USER_ID, TaskCreate(title="Read paper", priority="HIGH"))

    assert task.id is not None
    assert task.status is TaskStatus.TODO
    assert task.completed_at is None
    assert task.created_at is not None


async def test_completed_at_follows_status(db):
    service = TaskService(db)
    task = await service.create(USER_ID, TaskCreate(title="Write tests"))

    done = await service.update_status(USER_ID, task.id, "DONE")
    assert done.status is TaskStatus.DONE
    assert done.completed_at is not None

    again = await service.update(USER_ID, task.id, TaskUpdate(status="DONE"))
    assert again.completed_at == done.completed_at

    renamed = await service.update(USER_ID, task.id, TaskUpdate(title="Write more tests"))
    assert renamed.title == "Write more tests"
    assert renamed.completed_at == done.completed_at

    reopened = await service.update(USER_ID, task.id, TaskUpdate(status="IN_PROGRESS"))
    assert reopened.status is TaskStatus.IN_PROGRESS
    assert reopened.completed_at is None


async def test_update_clears_field_sent_as_null(db):
    service = TaskService(db)
    task = await service.create(
        USER_ID, TaskCreate(title="Call", due_date=datetime(2026, 10, 20, 9))
    )

    updated = await service.update(USER_ID, task.id, TaskUpdate(due_date=None))

    assert updated.due_date is None
    assert updated.title == "Call"


async def test_list_for_user_is_priority_ordered_and_scoped(db):
    service = TaskService(db)
    await service.create(USER_ID, TaskCreate(title="low", priority="LOW"))
    await service.create(USER_ID, TaskCreate(title="urgent", priority="URGENT"))
    await service.create(USER_ID, TaskCreate(title="high", priority="HIGH"))
    await service.create(OTHER_USER_ID, TaskCreate(title="theirs", priority="URGENT"))

    tasks = await service.list_for_user(USER_ID)

    assert [t.title for t in tasks] == ["urgent", "high", "low"]


async def test_other_users_tasks_are_invisible(db):
    service = TaskService(db)
    task = await service.create(OTHER_USER_ID, TaskCreate(title="private"))

    assert await service.get(USER_ID, task.id) is None
    assert await service.update(USER_ID, task.id, TaskUpdate(title="x")) is None
    assert await service.update_status(USER_ID, task.id, "DONE") is None
    assert await service.delete(USER_ID, task.id) is False
    assert (await service.get(OTHER_USER_ID, task.id)).title == "private"


async def test_today_tasks_exclude_done_and_other_days(db):
    service = TaskService(db)
    today = date(2026, 10, 18)
    await service.create(USER_ID, TaskCreate(title="morning", due_date=datetime(2026, 10, 18, 9)))
    await service.create(
        USER_ID, TaskCreate(title="evening", priority="URGENT", due_date=datetime(2026, 10, 18, 20))
    )
    await service.create(USER_ID, TaskCreate(title="tomorrow", due_date=datetime(2026, 10, 19, 9)))
    finished = await service.create(
        USER_ID, TaskCreate(title="finished", due_date=datetime(2026, 10, 18, 10))
    )
    await service.update_status(USER_ID, finished.id, "DONE")

    tasks = await service.get_today_tasks(USER_ID, today=today)

    assert [t.title for t in tasks] == ["evening", "morning"]


async def test_count_completed_this_week(db):
    service = TaskService(db)
    first = await service.create(USER_ID, TaskCreate(title="a"))
    await service.create(USER_ID, TaskCreate(title="b"))
    await service.update_status(USER_ID, first.id, "DONE")

    now = datetime.now()

    assert await service.count_completed_this_week(USER_ID, now=now) == 1
    assert await service.count_completed_this_week(USER_ID, now=datetime(2020, 1, 1)) == 0


async def test_delete(db):
    service = TaskService(db)
    task = await service.create(USER_ID, TaskCreate(title="gone"))

    assert await service.delete(USER_ID, task.id) is True
    assert await service.get(USER_ID, task.id) is None
    assert await service.delete(USER_ID, task.id) is False


async def test_due_date_is_stored_in_utc(db, saigon_time):
    task = await TaskService(db).create(
        USER_ID, TaskCreate(title="standup", due_date=datetime(2026, 10, 18, 9))
    )

    assert task.due_date == datetime(2026, 10, 18, 2, tzinfo=timezone.utc)


async def test_completed_this_week_in_local_zone(db, saigon_time):
    # 01:00 on Sunday 18 October in UTC+7, the first hour of the local week
    db.add(Task(
        user_id=USER_ID,
        title="late night",
        status="DONE",
        completed_at=datetime(2026, 10, 17, 18, 0, tzinfo=timezone.utc),
    ))
    await db.commit()
    service = TaskService(db)

    assert await service.count_completed_this_week(USER_ID, now=datetime(2026, 10, 18, 9)) == 1
    assert await service.count_completed_this_week(USER_ID, now=datetime(2026, 10, 17, 9)) == 0


async def test_today_tasks_in_local_zone(db, saigon_time):
    service = TaskService(db)
    for title, hour in (("early", 1), ("late", 23)):
        await service.create(USER_ID, TaskCreate(title=title, due_date=datetime(2026, 10, 18, hour, 30)))
    await service.create(USER_ID, TaskCreate(title="next day", due_date=datetime(2026, 10, 19, 0, 30)))

    tasks = await service.get_today_tasks(USER_ID, today=date(2026, 10, 18))

    assert sorted(t.title for t in tasks) == ["early", "late"]
