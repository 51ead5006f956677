"""Pure schedule model and dose-window evaluation."""

from dosewatch.scheduling.evaluator import (
    DoseStatus,
    available_time,
    can_take,
    evaluate,
    is_overdue,
    next_dose,
    taken_today,
)
from dosewatch.scheduling.schedule import ScheduleSpec

__all__ = [
    "DoseStatus",
    "ScheduleSpec",
    "available_time",
    "can_take",
    "evaluate",
    "is_overdue",
    "next_dose",
    "taken_today",
]
