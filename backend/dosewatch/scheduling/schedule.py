"""Recurring medication schedule shape.

Times are minute-resolution wall-clock values (``HH:MM``, 24 hour) and weekdays
are numbered 0=Sunday through 6=Saturday. Nothing here is timezone aware.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, time
from typing import Any

MINUTES_PER_DAY = 24 * 60

WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

# Accepts "9:05", "09:05" and the "09:05:00" form SQL TIME columns produce.
_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2}(?:\.\d+)?)?$")


def parse_time_of_day(value: Any) -> int | None:
    """Return minutes since midnight for ``value`` or ``None`` if malformed."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    if not isinstance(value, str):
        return None
    match = _TIME_PATTERN.match(value.strip())
    if match is None:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes


def format_minutes(minutes: int) -> str:
    """Render minutes since midnight as ``HH:MM``, wrapping across midnight."""
    hours, mins = divmod(minutes % MINUTES_PER_DAY, 60)
    return f"{hours:02d}:{mins:02d}"


def normalize_time_of_day(value: Any) -> str | None:
    minutes = parse_time_of_day(value)
    if minutes is None:
        return None
    return format_minutes(minutes)


def parse_days_of_week(value: Any) -> frozenset[int] | None:
    """Return the weekday set, or ``None`` when absent, empty or out of range."""
    if value is None or isinstance(value, (str, bytes)):
        return None
    try:
        days = frozenset(int(day) for day in value)
    except (TypeError, ValueError):
        return None
    if not days or any(day < 0 or day > 6 for day in days):
        return None
    return days


def weekday_index(moment: datetime) -> int:
    """Weekday of ``moment`` with Sunday as 0."""
    return (moment.weekday() + 1) % 7


@dataclass(frozen=True)
class ScheduleSpec:
    """A validated time of day repeated on a non-empty set of weekdays."""

    time_of_day: str
    days_of_week: frozenset[int]

    @classmethod
    def from_fields(cls, time_of_day: Any, days_of_week: Any) -> ScheduleSpec | None:
        normalized = normalize_time_of_day(time_of_day)
        days = parse_days_of_week(days_of_week)
        if normalized is None or days is None:
            return None
        return cls(time_of_day=normalized, days_of_week=days)

    @property
    def minutes(self) -> int:
        # time_of_day is normalized on construction
        return parse_time_of_day(self.time_of_day)  # type: ignore[return-value]

    def occurs_on(self, weekday: int) -> bool:
        return weekday in self.days_of_week

    def next_weekday_after(self, weekday: int) -> int:
        """First scheduled weekday strictly after ``weekday``, wrapping weekly."""
        for offset in range(1, 8):
            candidate = (weekday + offset) % 7
            if candidate in self.days_of_week:
                return candidate
        raise ValueError("schedule has no weekdays")  # unreachable: days non-empty


__all__ = [
    "MINUTES_PER_DAY",
    "ScheduleSpec",
    "WEEKDAY_NAMES",
    "format_minutes",
    "normalize_time_of_day",
    "parse_days_of_week",
    "parse_time_of_day",
    "weekday_index",
]
