"""Aggregate statistics over tasks, study logs and habit logs.

All functions are pure. Those that depend on the current moment take an
optional ``now``/``today`` so callers and tests can pin the clock.
"""

import math
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from greatsage.schemas import ProjectProgress, WeekRange
from greatsage.utils.mapping import read_field

SECONDS_PER_DAY = 60 * 60 * 24


def round_half_up(value: float, digits: int = 0) -> float:
    """Round .5 away from zero for positives, as dashboards expect (not banker's)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _plain(value: Any) -> Any:
    return getattr(value, "value", value)


def as_date(value: date | datetime) -> date:
    """Calendar day of ``value`` with the time of day dropped."""
    if isinstance(value, datetime):
        return value.date()
    return value


def as_datetime(value: date | datetime) -> datetime:
    """Naive local datetime for ``value``; plain dates become midnight."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    return datetime.combine(value, time.min)


def as_utc(value: date | datetime) -> datetime:
    """Aware UTC datetime for ``value``; naive values are taken as local time."""
    return as_datetime(value).astimezone(timezone.utc)


def calculate_project_progress(tasks: Sequence[Any]) -> ProjectProgress:
    """Share of a project's tasks whose status is DONE, as a whole percent."""
    total_tasks = len(tasks)
    if total_tasks == 0:
        return ProjectProgress(total_tasks=0, completed_tasks=0, progress_percentage=0)

    completed_tasks = sum(
        1 for task in tasks if _plain(read_field(task, "status")) == "DONE"
    )
    progress_percentage = int(round_half_up(completed_tasks / total_tasks * 100))

    return ProjectProgress(
        total_tasks=total_tasks,
        completed_tasks=completed_tasks,
        progress_percentage=progress_percentage,
    )


def calculate_total_hours(study_items: Sequence[Any]) -> float:
    """Weekly target hours summed over ACTIVE study items."""
    return sum(
        (read_field(item, "target_hours_per_week") or 0)
        for item in study_items
        if _plain(read_field(item, "status")) == "ACTIVE"
    )


def aggregate_study_hours(study_logs: Sequence[Any]) -> float:
    return sum(read_field(log, "duration_hours") for log in study_logs)


def calculate_study_hours_in_period(
    study_logs: Sequence[Any],
    start: date | datetime,
    end: date | datetime,
) -> float:
    """Hours logged with ``start <= study_date <= end``."""
    lower = as_datetime(start)
    upper = as_datetime(end)
    in_period = [
        log
        for log in study_logs
        if lower <= as_datetime(read_field(log, "study_date")) <= upper
    ]
    return aggregate_study_hours(in_period)


def calculate_streak(habit_logs: Sequence[Any], today: date | None = None) -> int:
    """Consecutive days with a log, counting back from ``today``.

    Logs are walked newest first. A log on the expected day extends the
    streak; a log older than the expected day ends it; anything else (a
    future-dated log or a second log on an already counted day) is skipped.
    """
    if not habit_logs:
        return 0

    ordered = sorted(
        habit_logs,
        key=lambda log: as_datetime(read_field(log, "log_date")),
        reverse=True,
    )
    today = today or date.today()

    streak = 0
    for log in ordered:
        log_day = as_date(read_field(log, "log_date"))
        expected = today - timedelta(days=streak)
        if log_day == expected:
            streak += 1
        elif log_day < expected:
            break

    return streak


def calculate_longest_streak(habit_logs: Sequence[Any]) -> int:
    """Longest run of consecutive logged days. Same-day duplicates do not count twice."""
    if not habit_logs:
        return 0

    days = sorted(as_date(read_field(log, "log_date")) for log in habit_logs)

    longest = 0
    current = 1
    for previous, day in zip(days, days[1:]):
        gap = (day - previous).days
        if gap == 1:
            current += 1
        elif gap > 1:
            longest = max(longest, current)
            current = 1

    return max(longest, current)


def calculate_completion_rate(
    habit_logs: Sequence[Any],
    total_habits: int,
    days: int,
) -> int:
    """Logged habit-days as a percentage of ``total_habits * days``."""
    if total_habits == 0 or days == 0:
        return 0

    expected = total_habits * days
    return int(round_half_up(len(habit_logs) / expected * 100))


def get_current_week_range(now: datetime | None = None) -> WeekRange:
    """Sunday 00:00:00.000 through Saturday 23:59:59.999 around ``now``."""
    now = as_datetime(now or datetime.now())
    # datetime.weekday() is Monday=0; shift so Sunday=0
    day_of_week = (now.weekday() + 1) % 7

    start = datetime.combine(now.date() - timedelta(days=day_of_week), time.min)
    end = datetime.combine(start.date() + timedelta(days=6), time(23, 59, 59, 999000))

    return WeekRange(start=start, end=end)


def calculate_completed_hours(
    start_date: date | datetime | None,
    end_date: date | datetime | None,
    now: datetime | None = None,
    hours_per_day: int = 8,
) -> float:
    """Working hours elapsed on a project, to one decimal place.

    Counts ``hours_per_day`` per elapsed day from ``start_date`` up to now,
    or up to ``end_date`` once it has passed. A missing or future start
    yields 0.
    """
    if start_date is None:
        return 0

    now = as_datetime(now or datetime.now())
    start = as_datetime(start_date)

    if now < start:
        return 0

    end_point = now
    if end_date is not None:
        end = as_datetime(end_date)
        if now > end:
            end_point = end

    days_elapsed = (end_point - start).total_seconds() / SECONDS_PER_DAY
    hours_elapsed = days_elapsed * hours_per_day

    return max(0, round_half_up(hours_elapsed, 1))
