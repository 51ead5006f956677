"""Dose-window evaluation.

Given one medication schedule, the dependant's recent confirmation history and
the current time, decide whether the dose can be taken now, whether it is
overdue and when it is next due.

All functions are pure and never raise: a missing or malformed schedule
degrades to "not takeable, not overdue, no schedule". Comparisons happen on the
local wall clock. Aware datetimes are converted to the process' local zone;
naive datetimes are assumed to be local already. Nothing looks across midnight,
so a 00:10 dose opens its early window at 00:00 even though
``available_time("00:10")`` reports 23:40.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from dosewatch.scheduling.schedule import (
    WEEKDAY_NAMES,
    ScheduleSpec,
    format_minutes,
    normalize_time_of_day,
    parse_time_of_day,
    weekday_index,
)

EARLY_WINDOW_MINUTES = 30
OVERDUE_GRACE_MINUTES = 30
NO_SCHEDULE = "No schedule"


@dataclass(frozen=True)
class DoseStatus:
    """Evaluator output for one schedule at one instant."""

    taken_today: bool
    scheduled_today: bool
    can_take: bool
    is_overdue: bool
    too_early: bool
    next_dose: str
    available_time: str


def _local_naive(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def _coerce_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return _local_naive(value)
    if isinstance(value, str):
        try:
            return _local_naive(datetime.fromisoformat(value))
        except ValueError:
            return None
    return None


def _field(entry: Any, name: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def _same_id(left: Any, right: Any) -> bool:
    if left is None or right is None:
        return False
    return str(left) == str(right)


def _minute_of_day(moment: datetime) -> int:
    return moment.hour * 60 + moment.minute


def taken_today(
    medication_id: Any,
    time_of_day: Any,
    history: Iterable[Any],
    now: datetime,
) -> bool:
    """True when a carer-confirmed dose for this time was taken since midnight."""
    target = normalize_time_of_day(time_of_day)
    if target is None:
        return False
    midnight = _local_naive(now).replace(hour=0, minute=0, second=0, microsecond=0)
    for entry in history or ():
        if not _same_id(_field(entry, "medication_id"), medication_id):
            continue
        if not _field(entry, "confirmed_by_carer"):
            continue
        if normalize_time_of_day(_field(entry, "time_of_day")) != target:
            continue
        taken_at = _coerce_datetime(_field(entry, "taken_at"))
        if taken_at is not None and taken_at >= midnight:
            return True
    return False


def can_take(
    medication_id: Any,
    time_of_day: Any,
    days_of_week: Any,
    history: Iterable[Any],
    now: datetime,
) -> bool:
    """True from 30 minutes before the nominal time until the end of the day."""
    spec = ScheduleSpec.from_fields(time_of_day, days_of_week)
    if spec is None:
        return False
    if taken_today(medication_id, spec.time_of_day, history, now):
        return False
    local_now = _local_naive(now)
    if not spec.occurs_on(weekday_index(local_now)):
        return False
    return _minute_of_day(local_now) >= spec.minutes - EARLY_WINDOW_MINUTES


def is_overdue(
    medication_id: Any,
    time_of_day: Any,
    days_of_week: Any,
    history: Iterable[Any],
    now: datetime,
) -> bool:
    """True once 30 minutes past the nominal time with no confirmed dose today."""
    spec = ScheduleSpec.from_fields(time_of_day, days_of_week)
    if spec is None:
        return False
    if taken_today(medication_id, spec.time_of_day, history, now):
        return False
    local_now = _local_naive(now)
    if not spec.occurs_on(weekday_index(local_now)):
        return False
    return _minute_of_day(local_now) > spec.minutes + OVERDUE_GRACE_MINUTES


def next_dose(
    medication_id: Any,
    time_of_day: Any,
    days_of_week: Any,
    history: Iterable[Any],
    now: datetime,
) -> str:
    """Describe the next dose as ``"Today at HH:MM"`` or ``"<Weekday> at HH:MM"``."""
    spec = ScheduleSpec.from_fields(time_of_day, days_of_week)
    if spec is None:
        return NO_SCHEDULE
    local_now = _local_naive(now)
    today = weekday_index(local_now)
    if (
        not taken_today(medication_id, spec.time_of_day, history, now)
        and spec.occurs_on(today)
        and _minute_of_day(local_now) < spec.minutes
    ):
        return f"Today at {spec.time_of_day}"
    return f"{WEEKDAY_NAMES[spec.next_weekday_after(today)]} at {spec.time_of_day}"


def available_time(time_of_day: Any) -> str:
    """Start of the early window for display, wrapping before midnight."""
    minutes = parse_time_of_day(time_of_day)
    if minutes is None:
        return ""
    return format_minutes(minutes - EARLY_WINDOW_MINUTES)


def evaluate(
    medication_id: Any,
    time_of_day: Any,
    days_of_week: Any,
    history: Iterable[Any],
    now: datetime,
) -> DoseStatus:
    """Bundle every evaluator answer for one schedule."""
    history = list(history or ())
    spec = ScheduleSpec.from_fields(time_of_day, days_of_week)
    scheduled_today = spec is not None and spec.occurs_on(
        weekday_index(_local_naive(now))
    )
    taken = taken_today(medication_id, time_of_day, history, now)
    takeable = can_take(medication_id, time_of_day, days_of_week, history, now)
    overdue = is_overdue(medication_id, time_of_day, days_of_week, history, now)
    return DoseStatus(
        taken_today=taken,
        scheduled_today=scheduled_today,
        can_take=takeable,
        is_overdue=overdue,
        too_early=scheduled_today and not taken and not takeable,
        next_dose=next_dose(medication_id, time_of_day, days_of_week, history, now),
        available_time=available_time(time_of_day),
    )


__all__ = [
    "DoseStatus",
    "EARLY_WINDOW_MINUTES",
    "NO_SCHEDULE",
    "OVERDUE_GRACE_MINUTES",
    "available_time",
    "can_take",
    "evaluate",
    "is_overdue",
    "next_dose",
    "taken_today",
]
