"""Display formatting in the application's Vietnamese locale.

Month names and duration units come from the CLDR ``vi`` locale via Babel.
Relative distances use the same buckets and qualifiers ("khoảng", "hơn",
"gần") as the web client's date library, so both sides read alike.
"""

import math
from datetime import date, datetime, timedelta
from typing import Literal

from babel.dates import format_date as babel_format_date
from babel.units import format_unit

from greatsage.utils.calculations import as_datetime, round_half_up

LOCALE = "vi"

DateStyle = Literal["short", "medium", "long", "relative"]

DATE_PATTERNS = {
    "short": "dd/MM/yyyy",
    "medium": "dd MMM yyyy",
    "long": "dd MMMM yyyy",
}

MINUTES_IN_DAY = 60 * 24
MINUTES_IN_MONTH = MINUTES_IN_DAY * 30

DAY_NAMES = [
    "Chủ nhật",
    "Thứ hai",
    "Thứ ba",
    "Thứ tư",
    "Thứ năm",
    "Thứ sáu",
    "Thứ bảy",
]
DAY_NAMES_SHORT = ["CN", "T2", "T3", "T4", "T5", "T6", "T7"]


def _parse(value: date | datetime | str) -> date | datetime:
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    return value


def format_time(value: str, use_24_hour: bool = True) -> str:
    """Render an ``HH:mm`` string as 24-hour or 12-hour time."""
    if not value:
        return ""

    hours, minutes = (int(part) for part in value.split(":")[:2])

    if use_24_hour:
        return f"{hours:02d}:{minutes:02d}"

    period = "PM" if hours >= 12 else "AM"
    display_hours = hours % 12 or 12
    return f"{display_hours}:{minutes:02d} {period}"


def _units(count: int, unit: str) -> str:
    return format_unit(count, f"duration-{unit}", length="long", locale=LOCALE)


def _whole_months_between(earlier: datetime, later: datetime) -> int:
    months = (later.year - earlier.year) * 12 + later.month - earlier.month
    if (later.day, later.time()) < (earlier.day, earlier.time()):
        months -= 1
    return months


def _distance_words(earlier: datetime, later: datetime) -> str:
    """Approximate distance between two moments, e.g. "khoảng 2 giờ"."""
    minutes = round_half_up((later - earlier).total_seconds() / 60)

    if minutes < 2:
        return f"dưới {_units(1, 'minute')}" if minutes == 0 else _units(1, "minute")
    if minutes < 45:
        return _units(int(minutes), "minute")
    if minutes < 90:
        return f"khoảng {_units(1, 'hour')}"
    if minutes < MINUTES_IN_DAY:
        return f"khoảng {_units(int(round_half_up(minutes / 60)), 'hour')}"
    if minutes < 2520:
        return _units(1, "day")
    if minutes < MINUTES_IN_MONTH:
        return _units(int(round_half_up(minutes / MINUTES_IN_DAY)), "day")
    if minutes < 2 * MINUTES_IN_MONTH:
        return f"khoảng {_units(int(round_half_up(minutes / MINUTES_IN_MONTH)), 'month')}"

    months = _whole_months_between(earlier, later)
    if months < 12:
        return _units(max(1, int(round_half_up(minutes / MINUTES_IN_MONTH))), "month")

    years = math.floor(months / 12)
    remainder = months % 12
    if remainder < 3:
        return f"khoảng {_units(years, 'year')}"
    if remainder < 9:
        return f"hơn {_units(years, 'year')}"
    return f"gần {_units(years + 1, 'year')}"


def format_date(
    value: date | datetime | str,
    style: DateStyle = "medium",
    now: datetime | None = None,
) -> str:
    """Format a date.

    ``short`` gives 18/10/2026, ``medium`` 18 thg 10 2026, ``long``
    18 tháng 10 2026. ``relative`` names today, tomorrow and yesterday and
    otherwise describes the distance ("3 ngày trước", "2 tháng nữa").
    Aware datetimes are shown in local time.
    """
    moment = as_datetime(_parse(value))
    day = moment.date()

    if style == "relative":
        now = as_datetime(now or datetime.now())
        today = now.date()
        if day == today:
            return "Hôm nay"
        if day == today + timedelta(days=1):
            return "Ngày mai"
        if day == today - timedelta(days=1):
            return "Hôm qua"
        if moment > now:
            return f"{_distance_words(now, moment)} nữa"
        return f"{_distance_words(moment, now)} trước"

    pattern = DATE_PATTERNS.get(style, DATE_PATTERNS["short"])
    return babel_format_date(day, pattern, locale=LOCALE)


def format_duration(hours: float) -> str:
    """Render hours as "45 phút", "1 giờ" or "2 giờ 30 phút"."""
    if hours < 1:
        return _units(int(round_half_up(hours * 60)), "minute")

    if hours == 1:
        return _units(1, "hour")

    whole_hours = math.floor(hours)
    minutes = int(round_half_up((hours - whole_hours) * 60))

    if minutes == 0:
        return _units(whole_hours, "hour")

    return f"{_units(whole_hours, 'hour')} {_units(minutes, 'minute')}"


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """Shorten ``text`` to ``max_length`` characters including ``suffix``."""
    if not text or len(text) <= max_length:
        return text

    return text[: max_length - len(suffix)] + suffix


def format_number(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}"


def format_percentage(value: float, decimals: int = 0) -> str:
    return f"{value:.{decimals}f}%"


def get_day_name(day_of_week: int, short: bool = False) -> str:
    """Name of a weekday, 0 = Sunday. Unknown numbers give ""."""
    names = DAY_NAMES_SHORT if short else DAY_NAMES
    if 0 <= day_of_week < len(names):
        return names[day_of_week]
    return ""


def format_date_range(start: date | datetime, end: date | datetime) -> str:
    return f"{format_date(start, 'short')} - {format_date(end, 'short')}"
