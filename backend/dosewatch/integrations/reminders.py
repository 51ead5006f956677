"""Reminder delivery collaborator.

The push transport lives outside this service. ``ReminderDelivery`` is the
narrow interface Notification Sync drives; ``InMemoryReminderDelivery`` keeps
the scheduled set in process and logs each action, which is what runs until a
real transport is wired in.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import time
from functools import lru_cache
from typing import Any, Protocol

from dosewatch.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

PayloadPredicate = Callable[[dict[str, Any]], bool]


@dataclass(frozen=True)
class ForegroundDisplay:
    """How a reminder is presented while the app is in the foreground."""

    show_alert: bool = True
    play_sound: bool = True
    set_badge: bool = False


@dataclass(frozen=True)
class ScheduledReminder:
    id: str
    weekday: int
    hour: int
    minute: int
    repeats: bool
    payload: dict[str, Any] = field(default_factory=dict)


class ReminderDelivery(Protocol):
    async def schedule(
        self, *, at: time, weekday: int, repeats: bool, payload: dict[str, Any]
    ) -> str: ...

    async def cancel_all(self, predicate: PayloadPredicate) -> int: ...

    async def list_scheduled(
        self, predicate: PayloadPredicate | None = None
    ) -> list[ScheduledReminder]: ...


class InMemoryReminderDelivery:
    """Process-local reminder store."""

    def __init__(self, display: ForegroundDisplay | None = None) -> None:
        self.display = display or ForegroundDisplay()
        self._reminders: dict[str, ScheduledReminder] = {}

    async def schedule(
        self, *, at: time, weekday: int, repeats: bool, payload: dict[str, Any]
    ) -> str:
        if not 0 <= weekday <= 6:
            raise ValueError(f"weekday out of range: {weekday}")
        reminder = ScheduledReminder(
            id=uuid.uuid4().hex,
            weekday=weekday,
            hour=at.hour,
            minute=at.minute,
            repeats=repeats,
            payload=dict(payload),
        )
        self._reminders[reminder.id] = reminder
        logger.debug(
            "Scheduled reminder %s for weekday %s at %02d:%02d",
            reminder.id,
            weekday,
            at.hour,
            at.minute,
        )
        return reminder.id

    async def cancel_all(self, predicate: PayloadPredicate) -> int:
        doomed = [rid for rid, r in self._reminders.items() if predicate(r.payload)]
        for reminder_id in doomed:
            del self._reminders[reminder_id]
        logger.debug("Cancelled %s reminders", len(doomed))
        return len(doomed)

    async def list_scheduled(
        self, predicate: PayloadPredicate | None = None
    ) -> list[ScheduledReminder]:
        reminders = [
            r
            for r in self._reminders.values()
            if predicate is None or predicate(r.payload)
        ]
        return sorted(reminders, key=lambda r: (r.weekday, r.hour, r.minute, r.id))


@lru_cache
def _delivery_for(display: ForegroundDisplay) -> InMemoryReminderDelivery:
    return InMemoryReminderDelivery(display)


def _display_from(settings: Settings) -> ForegroundDisplay:
    return ForegroundDisplay(
        show_alert=settings.reminder_show_alert,
        play_sound=settings.reminder_play_sound,
        set_badge=settings.reminder_set_badge,
    )


def init_reminder_delivery(settings: Settings | None = None) -> ReminderDelivery:
    """Configure foreground display once for the process and return the delivery."""
    display = _display_from(settings or get_settings())
    delivery = _delivery_for(display)
    logger.info("Reminder delivery initialised (%s)", display)
    return delivery


def get_reminder_delivery() -> ReminderDelivery:
    """FastAPI dependency returning the process reminder delivery."""
    return _delivery_for(_display_from(get_settings()))


__all__ = [
    "ForegroundDisplay",
    "InMemoryReminderDelivery",
    "ReminderDelivery",
    "ScheduledReminder",
    "get_reminder_delivery",
    "init_reminder_delivery",
]
