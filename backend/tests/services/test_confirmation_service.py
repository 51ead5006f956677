"""Confirmation workflow tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from dosewatch.core.errors import NotFoundError, ValidationError
from dosewatch.db.session import get_sessionmaker
from dosewatch.models import MedicationConfirmation
from dosewatch.schemas.medication import ScheduleIn
from dosewatch.services import confirmation_service, medication_service

pytestmark = pytest.mark.asyncio


async def _medication(session, people, *, name: str = "Aspirin"):
    return await medication_service.create_medication(
        session,
        carer_id=people["carer"].id,
        dependant_id=people["dependant"].id,
        name=name,
        schedules=[ScheduleIn(time_of_day="08:00", days_of_week=[1, 2, 3])],
    )


async def test_submit_creates_pending_confirmation(people, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        medication = await _medication(session, people)
        confirmation = await confirmation_service.submit_confirmation(
            session,
            dependant_id=people["dependant"].id,
            medication_id=medication.id,
            schedule_id=medication.schedules[0].id,
            photo_path="uploads/dose.jpg",
        )
        pending = await confirmation_service.list_pending_for_carer(
            session, carer_id=people["carer"].id
        )

    assert confirmation.confirmed_by_carer is False
    assert confirmation.carer_confirmed_at is None
    assert [row.id for row in pending] == [confirmation.id]
    assert pending[0].medication_name == "Aspirin"
    assert pending[0].dependant_name == "Dana Dependant"


async def test_duplicate_submissions_are_accepted(people, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        medication = await _medication(session, people)
        for _ in range(2):
            await confirmation_service.submit_confirmation(
                session,
                dependant_id=people["dependant"].id,
                medication_id=medication.id,
                photo_path="uploads/dose.jpg",
            )
        pending = await confirmation_service.list_pending_for_carer(
            session, carer_id=people["carer"].id
        )
    assert len(pending) == 2


async def test_submit_validation(people, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        medication = await _medication(session, people)
        other = await _medication(session, people, name="Ibuprofen")

        with pytest.raises(ValidationError):
            await confirmation_service.submit_confirmation(
                session,
                dependant_id=people["dependant"].id,
                medication_id=medication.id,
                photo_path=" ",
            )
        with pytest.raises(NotFoundError):
            # medication belongs to a different dependant
            await confirmation_service.submit_confirmation(
                session,
                dependant_id=people["carer"].id,
                medication_id=medication.id,
                photo_path="uploads/dose.jpg",
            )
        with pytest.raises(NotFoundError):
            await confirmation_service.submit_confirmation(
                session,
                dependant_id=people["dependant"].id,
                medication_id=medication.id,
                schedule_id=other.schedules[0].id,
                photo_path="uploads/dose.jpg",
            )


async def test_confirm_by_owning_carer(people, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        medication = await _medication(session, people)
        submitted = await confirmation_service.submit_confirmation(
            session,
            dependant_id=people["dependant"].id,
            medication_id=medication.id,
            photo_path="uploads/dose.jpg",
        )
        confirmed = await confirmation_service.confirm_confirmation(
            session,
            carer_id=people["carer"].id,
            confirmation_id=submitted.id,
            notes="Looks good",
        )
        pending = await confirmation_service.list_pending_for_carer(
            session, carer_id=people["carer"].id
        )

    assert confirmed.confirmed_by_carer is True
    assert confirmed.carer_confirmed_at is not None
    assert confirmed.notes == "Looks good"
    assert pending == []


async def test_confirm_by_other_carer_is_not_found(people, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        medication = await _medication(session, people)
        submitted = await confirmation_service.submit_confirmation(
            session,
            dependant_id=people["dependant"].id,
            medication_id=medication.id,
            photo_path="uploads/dose.jpg",
        )
        with pytest.raises(NotFoundError):
            await confirmation_service.confirm_confirmation(
                session,
                carer_id=people["other_carer"].id,
                confirmation_id=submitted.id,
            )

    async with get_sessionmaker(db_url)() as session:
        stored = await session.get(MedicationConfirmation, submitted.id)
        assert stored is not None
        assert stored.confirmed_by_carer is False


async def test_recent_lists_confirmed_doses_from_last_day(people, db_url: str) -> None:
    now = datetime.now(UTC)
    async with get_sessionmaker(db_url)() as session:
        medication = await _medication(session, people)
        schedule_id = medication.schedules[0].id

        def _row(taken_at: datetime, confirmed: bool) -> MedicationConfirmation:
            return MedicationConfirmation(
                dependant_id=people["dependant"].id,
                medication_id=medication.id,
                schedule_id=schedule_id,
                photo_path="uploads/dose.jpg",
                taken_at=taken_at,
                confirmed_by_carer=confirmed,
            )

        fresh = _row(now - timedelta(hours=2), True)
        session.add_all(
            [
                fresh,
                _row(now - timedelta(hours=25), True),
                _row(now - timedelta(hours=1), False),
            ]
        )
        await session.commit()

        recent = await confirmation_service.list_recent_for_dependant(
            session, dependant_id=people["dependant"].id, now=now
        )

    assert [row.id for row in recent] == [fresh.id]
    assert recent[0].time_of_day == "08:00"
    assert recent[0].days_of_week == [1, 2, 3]
    assert recent[0].taken_at.tzinfo is not None
