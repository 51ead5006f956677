"""Keep a dependant's device reminders in line with their medication schedules.

The policy is cancel-all-then-reschedule: every medication reminder for the
dependant is cancelled and one weekly repeating reminder is scheduled per
active schedule and weekday. Re-running with unchanged schedules yields the
same net set of reminders. The two phases are not atomic; a failure between
them leaves the dependant without reminders until the next sync.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import time
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from dosewatch.core.config import get_settings
from dosewatch.db.session import get_sessionmaker
from dosewatch.integrations.reminders import ReminderDelivery
from dosewatch.models import Medication, NotificationType
from dosewatch.scheduling.schedule import (
    MINUTES_PER_DAY,
    ScheduleSpec,
    parse_time_of_day,
)
from dosewatch.services import medication_service

logger = logging.getLogger(__name__)

REMINDER_TYPE = NotificationType.MEDICATION_REMINDER.value
DEFAULT_LEAD_MINUTES = 5


@dataclass
class SyncResult:
    cancelled: int = 0
    reminder_ids: list[str] = field(default_factory=list)


def reminder_slot(
    time_of_day: Any, weekday: int, lead_minutes: int = DEFAULT_LEAD_MINUTES
) -> tuple[int, int, int] | None:
    """Return ``(weekday, hour, minute)`` a reminder fires for a dose.

    Firing ``lead_minutes`` early can cross midnight, in which case the
    reminder moves to the previous weekday.
    """
    minutes = parse_time_of_day(time_of_day)
    if minutes is None or not 0 <= weekday <= 6:
        return None
    day_shift, fire_at = divmod(minutes - lead_minutes, MINUTES_PER_DAY)
    hour, minute = divmod(fire_at, 60)
    return (weekday + day_shift) % 7, hour, minute


def is_reminder_for(dependant_id: uuid.UUID):
    """Predicate selecting the dependant's medication reminders by payload."""
    target = str(dependant_id)

    def _matches(payload: dict[str, Any]) -> bool:
        return payload.get("type") == REMINDER_TYPE and payload.get("dependant_id") == target

    return _matches


async def sync_reminders(
    delivery: ReminderDelivery,
    *,
    dependant_id: uuid.UUID,
    medications: Iterable[Medication],
    lead_minutes: int | None = None,
) -> SyncResult:
    """Cancel the dependant's reminders, then schedule one per active dose slot."""
    if lead_minutes is None:
        lead_minutes = get_settings().reminder_lead_minutes
    result = SyncResult()
    result.cancelled = await delivery.cancel_all(is_reminder_for(dependant_id))

    for medication in medications:
        for schedule in medication.schedules:
            if not schedule.active:
                continue
            spec = ScheduleSpec.from_fields(schedule.time_of_day, schedule.days_of_week)
            if spec is None:
                logger.warning("Skipping malformed schedule %s", schedule.id)
                continue
            for day in sorted(spec.days_of_week):
                slot = reminder_slot(spec.time_of_day, day, lead_minutes)
                if slot is None:
                    continue
                weekday, hour, minute = slot
                reminder_id = await delivery.schedule(
                    at=time(hour, minute),
                    weekday=weekday,
                    repeats=True,
                    payload={
                        "type": REMINDER_TYPE,
                        "dependant_id": str(dependant_id),
                        "medication_id": str(medication.id),
                        "medication_name": medication.name,
                        "schedule_id": str(schedule.id),
                        "scheduled_time": spec.time_of_day,
                        "title": "Medication Reminder",
                        "body": f"Time to take your {medication.name} in {lead_minutes} minutes!",
                    },
                )
                result.reminder_ids.append(reminder_id)

    logger.info(
        "Reminder sync for dependant %s: cancelled %s, scheduled %s",
        dependant_id,
        result.cancelled,
        len(result.reminder_ids),
    )
    return result


async def resync_for_dependant(
    session: AsyncSession,
    delivery: ReminderDelivery,
    *,
    dependant_id: uuid.UUID,
) -> SyncResult:
    medications = await medication_service.list_medications_for_dependant(
        session, dependant_id=dependant_id
    )
    return await sync_reminders(
        delivery, dependant_id=dependant_id, medications=medications
    )


async def resync_in_background(
    delivery: ReminderDelivery, dependant_id: uuid.UUID
) -> None:
    """Background-task entry point that opens its own session."""
    try:
        async with get_sessionmaker()() as session:
            await resync_for_dependant(session, delivery, dependant_id=dependant_id)
    except Exception:  # pragma: no cover - reminders are best effort
        logger.exception("Reminder sync failed for dependant %s", dependant_id)
