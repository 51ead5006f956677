"""Schedule parsing helpers."""

from datetime import datetime, time

import pytest

from dosewatch.scheduling.schedule import (
    ScheduleSpec,
    format_minutes,
    parse_days_of_week,
    parse_time_of_day,
    weekday_index,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("08:00", 480),
        ("8:05", 485),
        ("23:59:00", 1439),
        (time(6, 30), 390),
        ("24:00", None),
        ("12:60", None),
        ("noon", None),
        (800, None),
    ],
)
def test_parse_time_of_day(value, expected) -> None:
    assert parse_time_of_day(value) == expected


def test_format_minutes_wraps() -> None:
    assert format_minutes(-20) == "23:40"
    assert format_minutes(1440 + 5) == "00:05"


def test_parse_days_of_week() -> None:
    assert parse_days_of_week([3, 1, 1]) == frozenset({1, 3})
    assert parse_days_of_week([]) is None
    assert parse_days_of_week("135") is None
    assert parse_days_of_week([0, 7]) is None


def test_weekday_index_starts_on_sunday() -> None:
    assert weekday_index(datetime(2025, 6, 1)) == 0
    assert weekday_index(datetime(2025, 6, 7)) == 6


def test_spec_next_weekday_after() -> None:
    spec = ScheduleSpec.from_fields("9:00", [1, 5])
    assert spec is not None
    assert spec.time_of_day == "09:00"
    assert spec.next_weekday_after(1) == 5
    assert spec.next_weekday_after(5) == 1
    assert ScheduleSpec.from_fields("09:00", [2]).next_weekday_after(2) == 2
