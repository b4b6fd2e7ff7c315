"""Record builders for pure-function tests."""

from datetime import date, datetime

from greatsage.schemas import HabitLogRecord, StudyScheduleRecord, TaskRecord

USER_ID = 1
OTHER_USER_ID = 2


def make_task(task_id: int, priority: str = "MEDIUM", due: datetime | None = None,
              status: str = "TODO", **kwargs) -> TaskRecord:
    return TaskRecord(
        id=task_id,
        user_id=USER_ID,
        title=f"Task {task_id}",
        priority=priority,
        status=status,
        due_date=due,
        **kwargs,
    )


def make_habit_log(log_id: int, log_date: date, habit_id: int = 1) -> HabitLogRecord:
    return HabitLogRecord(id=log_id, user_id=USER_ID, habit_id=habit_id, log_date=log_date)


def make_schedule(schedule_id: int, day_of_week: int, start_time: str) -> StudyScheduleRecord:
    return StudyScheduleRecord(
        id=schedule_id,
        user_id=USER_ID,
        study_item_id=1,
        day_of_week=day_of_week,
        start_time=start_time,
        end_time="23:59",
    )
