"""Reminder sync tests."""

from __future__ import annotations

import uuid
from types import SimpleNamespace

import pytest

from dosewatch.db.session import get_sessionmaker
from dosewatch.integrations.reminders import InMemoryReminderDelivery
from dosewatch.schemas.medication import ScheduleIn
from dosewatch.services import medication_service, reminder_sync

pytestmark = pytest.mark.asyncio


def _medication(*schedules: SimpleNamespace, name: str = "Aspirin") -> SimpleNamespace:
    return SimpleNamespace(id=uuid.uuid4(), name=name, schedules=list(schedules))


def _schedule(time_of_day: str, days: list[int], *, active: bool = True) -> SimpleNamespace:
    return SimpleNamespace(
        id=uuid.uuid4(), time_of_day=time_of_day, days_of_week=days, active=active
    )


def _slots(reminders) -> list[tuple[int, int, int]]:
    return sorted((r.weekday, r.hour, r.minute) for r in reminders)


@pytest.mark.parametrize(
    ("time_of_day", "weekday", "expected"),
    [
        ("08:00", 1, (1, 7, 55)),
        ("00:02", 0, (6, 23, 57)),
        ("00:05", 3, (3, 0, 0)),
        ("bad", 1, None),
    ],
)
async def test_reminder_slot(time_of_day, weekday, expected) -> None:
    assert reminder_sync.reminder_slot(time_of_day, weekday, 5) == expected


async def test_sync_schedules_one_reminder_per_active_day() -> None:
    delivery = InMemoryReminderDelivery()
    dependant_id = uuid.uuid4()
    medication = _medication(
        _schedule("08:00", [1, 3]),
        _schedule("00:02", [0]),
        _schedule("12:00", [2], active=False),
    )

    result = await reminder_sync.sync_reminders(
        delivery, dependant_id=dependant_id, medications=[medication], lead_minutes=5
    )

    reminders = await delivery.list_scheduled()
    assert result.cancelled == 0
    assert len(result.reminder_ids) == 3
    assert _slots(reminders) == [(1, 7, 55), (3, 7, 55), (6, 23, 57)]
    assert all(r.repeats for r in reminders)
    payload = reminders[0].payload
    assert payload["type"] == "medication_reminder"
    assert payload["dependant_id"] == str(dependant_id)
    assert payload["medication_name"] == "Aspirin"
    assert payload["body"] == "Time to take your Aspirin in 5 minutes!"


async def test_sync_is_idempotent_and_scoped_to_dependant() -> None:
    delivery = InMemoryReminderDelivery()
    dependant_id, other_id = uuid.uuid4(), uuid.uuid4()
    medication = _medication(_schedule("08:00", [1, 3]))

    await reminder_sync.sync_reminders(
        delivery, dependant_id=other_id, medications=[_medication(_schedule("09:00", [2]))]
    )
    first = await reminder_sync.sync_reminders(
        delivery, dependant_id=dependant_id, medications=[medication]
    )
    before = _slots(await delivery.list_scheduled(reminder_sync.is_reminder_for(dependant_id)))
    second = await reminder_sync.sync_reminders(
        delivery, dependant_id=dependant_id, medications=[medication]
    )
    after = _slots(await delivery.list_scheduled(reminder_sync.is_reminder_for(dependant_id)))

    assert first.cancelled == 0
    assert second.cancelled == 2
    assert before == after
    assert len(await delivery.list_scheduled(reminder_sync.is_reminder_for(other_id))) == 1


async def test_sync_with_no_schedules_clears_reminders() -> None:
    delivery = InMemoryReminderDelivery()
    dependant_id = uuid.uuid4()
    await reminder_sync.sync_reminders(
        delivery,
        dependant_id=dependant_id,
        medications=[_medication(_schedule("08:00", [1]))],
    )
    result = await reminder_sync.sync_reminders(
        delivery, dependant_id=dependant_id, medications=[]
    )
    assert result.cancelled == 1
    assert await delivery.list_scheduled() == []


async def test_resync_reads_current_schedules(people, db_url: str) -> None:
    delivery = InMemoryReminderDelivery()
    dependant_id = people["dependant"].id
    async with get_sessionmaker(db_url)() as session:
        await medication_service.create_medication(
            session,
            carer_id=people["carer"].id,
            dependant_id=dependant_id,
            name="Aspirin",
            schedules=[ScheduleIn(time_of_day="21:00", days_of_week=[5, 6])],
        )
        result = await reminder_sync.resync_for_dependant(
            session, delivery, dependant_id=dependant_id
        )

    assert len(result.reminder_ids) == 2
    assert _slots(await delivery.list_scheduled()) == [(5, 20, 55), (6, 20, 55)]
