"""Tests for display formatting."""

from datetime import date, datetime

import pytest

from greatsage.utils.formatting import (
    format_date,
    format_date_range,
    format_duration,
    format_number,
    format_percentage,
    format_time,
    get_day_name,
    truncate_text,
)

NOW = datetime(2026, 10, 18, 10, 0)


@pytest.mark.parametrize(
    "value,use_24_hour,expected",
    [
        ("14:05", True, "14:05"),
        ("14:05", False, "2:05 PM"),
        ("00:30", False, "12:30 AM"),
        ("12:00", False, "12:00 PM"),
        ("7:5", True, "07:05"),
        ("", True, ""),
    ],
)
def test_format_time(value, use_24_hour, expected):
    assert format_time(value, use_24_hour) == expected


class TestFormatDate:
    def test_fixed_styles(self):
        day = date(2026, 3, 5)

        assert format_date(day, "short") == "05/03/2026"
        assert format_date(day, "medium") == "05 thg 3 2026"
        assert format_date(day, "long") == "05 tháng 3 2026"

    def test_default_is_medium(self):
        assert format_date(date(2026, 10, 18)) == "18 thg 10 2026"

    def test_parses_iso_strings(self):
        assert format_date("2026-10-18T08:00:00", "short") == "18/10/2026"

    def test_relative_named_days(self):
        assert format_date(date(2026, 10, 18), "relative", now=NOW) == "Hôm nay"
        assert format_date(date(2026, 10, 19), "relative", now=NOW) == "Ngày mai"
        assert format_date(date(2026, 10, 17), "relative", now=NOW) == "Hôm qua"

    def test_relative_distance(self):
        assert format_date(date(2026, 10, 15), "relative", now=NOW) == "3 ngày trước"
        assert format_date(date(2026, 12, 18), "relative", now=NOW) == "2 tháng nữa"

    @pytest.mark.parametrize(
        "moment,expected",
        [
            (datetime(2026, 9, 10, 12), "khoảng 1 tháng trước"),
            (datetime(2025, 10, 18, 12), "khoảng 1 năm trước"),
            (datetime(2025, 7, 18, 12), "hơn 1 năm trước"),
            (datetime(2024, 12, 18, 12), "gần 2 năm trước"),
            (datetime(2029, 1, 18, 12), "hơn 2 năm nữa"),
        ],
    )
    def test_relative_long_distances(self, moment, expected):
        assert format_date(moment, "relative", now=datetime(2026, 10, 18, 12)) == expected


@pytest.mark.parametrize(
    "hours,expected",
    [(0.75, "45 phút"), (1, "1 giờ"), (2.5, "2 giờ 30 phút"), (3, "3 giờ"), (0, "0 phút")],
)
def test_format_duration(hours, expected):
    assert format_duration(hours) == expected


def test_truncate_text():
    assert truncate_text("hello world", 8) == "hello..."
    assert truncate_text("short", 8) == "short"
    assert truncate_text("", 3) == ""


def test_number_and_percentage():
    assert format_number(3.14159) == "3.1"
    assert format_number(2, 2) == "2.00"
    assert format_percentage(42) == "42%"


def test_get_day_name():
    assert get_day_name(0) == "Chủ nhật"
    assert get_day_name(1) == "Thứ hai"
    assert get_day_name(6, short=True) == "T7"
    assert get_day_name(7) == ""
    assert get_day_name(-1) == ""


def test_format_date_range():
    assert format_date_range(date(2026, 10, 18), date(2026, 10, 24)) == "18/10/2026 - 24/10/2026"
