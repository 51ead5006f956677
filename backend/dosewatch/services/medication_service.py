"""Medication and schedule services.

``create_medication`` and ``replace_schedules`` each run as one transaction:
the medication/schedule rows and the dependant's notification are committed
together or not at all.
"""
from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from datetime import UTC, datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from dosewatch.core.errors import AccessDeniedError, InternalError, ValidationError
from dosewatch.models import Medication, MedicationSchedule
from dosewatch.scheduling import evaluate
from dosewatch.schemas.medication import DoseStatusRead, ScheduleIn
from dosewatch.services import (
    confirmation_service,
    notification_service,
    relationship_service,
)

logger = logging.getLogger(__name__)


async def get_medication(
    session: AsyncSession, medication_id: uuid.UUID
) -> Medication | None:
    """Return a medication with its schedules freshly loaded."""
    result = await session.execute(
        select(Medication)
        .options(selectinload(Medication.schedules))
        .where(Medication.id == medication_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def list_medications_for_dependant(
    session: AsyncSession, *, dependant_id: uuid.UUID
) -> list[Medication]:
    """Return the dependant's medications with schedules, ordered by name."""
    result = await session.execute(
        select(Medication)
        .options(selectinload(Medication.schedules))
        .where(Medication.dependant_id == dependant_id)
        .order_by(Medication.name, Medication.created_at)
    )
    return list(result.scalars().all())


async def list_medications_for_carer_view(
    session: AsyncSession,
    *,
    carer_id: uuid.UUID,
    dependant_id: uuid.UUID,
) -> list[Medication]:
    if not await relationship_service.has_relationship(
        session, carer_id=carer_id, dependant_id=dependant_id
    ):
        raise AccessDeniedError("Access denied to this dependant")
    return await list_medications_for_dependant(session, dependant_id=dependant_id)


async def _insert_schedules(
    session: AsyncSession,
    *,
    medication_id: uuid.UUID,
    schedules: Sequence[ScheduleIn],
) -> None:
    for schedule in schedules:
        session.add(
            MedicationSchedule(
                medication_id=medication_id,
                time_of_day=schedule.time_of_day,
                days_of_week=list(schedule.days_of_week),
            )
        )
        await session.flush()


async def create_medication(
    session: AsyncSession,
    *,
    carer_id: uuid.UUID,
    dependant_id: uuid.UUID | None,
    name: str | None,
    dosage: str | None = None,
    instructions: str | None = None,
    schedules: Sequence[ScheduleIn] = (),
) -> Medication:
    """Create a medication, its schedules and the dependant's notification."""
    if not name or not name.strip() or dependant_id is None:
        raise ValidationError("Name and dependant ID are required")
    if not await relationship_service.has_relationship(
        session, carer_id=carer_id, dependant_id=dependant_id
    ):
        raise AccessDeniedError("Access denied to this dependant")

    try:
        medication = Medication(
            name=name.strip(),
            dosage=dosage,
            instructions=instructions,
            dependant_id=dependant_id,
            carer_id=carer_id,
        )
        session.add(medication)
        await session.flush()
        await _insert_schedules(
            session, medication_id=medication.id, schedules=schedules
        )
        await notification_service.record_schedule_update(
            session,
            medication=medication,
            message=notification_service.new_medication_message(medication.name),
        )
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Failed to create medication for dependant %s", dependant_id)
        raise InternalError() from exc

    logger.info(
        "Carer %s created medication %s with %s schedules",
        carer_id,
        medication.id,
        len(schedules),
    )
    created = await get_medication(session, medication.id)
    assert created is not None
    return created


async def replace_schedules(
    session: AsyncSession,
    *,
    carer_id: uuid.UUID,
    medication_id: uuid.UUID,
    schedules: Sequence[ScheduleIn],
) -> Medication:
    """Swap the medication's schedules for ``schedules`` in one transaction."""
    medication = await session.get(Medication, medication_id)
    if medication is None or medication.carer_id != carer_id:
        raise AccessDeniedError("Access denied to this medication")

    try:
        await session.execute(
            delete(MedicationSchedule).where(
                MedicationSchedule.medication_id == medication_id
            )
        )
        await _insert_schedules(
            session, medication_id=medication_id, schedules=schedules
        )
        await notification_service.record_schedule_update(
            session,
            medication=medication,
            message=notification_service.schedule_updated_message(medication.name),
        )
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Failed to replace schedules for medication %s", medication_id)
        raise InternalError() from exc

    logger.info(
        "Carer %s replaced schedules for medication %s (%s schedules)",
        carer_id,
        medication_id,
        len(schedules),
    )
    updated = await get_medication(session, medication_id)
    assert updated is not None
    return updated


async def dose_board(
    session: AsyncSession,
    *,
    dependant_id: uuid.UUID,
    now: datetime | None = None,
) -> list[DoseStatusRead]:
    """Evaluate every active schedule of the dependant against recent doses."""
    now = now or datetime.now(UTC)
    medications = await list_medications_for_dependant(
        session, dependant_id=dependant_id
    )
    history = await confirmation_service.list_recent_for_dependant(
        session, dependant_id=dependant_id, now=now
    )
    board: list[DoseStatusRead] = []
    for medication in medications:
        for schedule in medication.schedules:
            if not schedule.active:
                continue
            status = evaluate(
                medication.id,
                schedule.time_of_day,
                schedule.days_of_week,
                history,
                now,
            )
            board.append(
                DoseStatusRead(
                    medication_id=medication.id,
                    medication_name=medication.name,
                    schedule_id=schedule.id,
                    time_of_day=schedule.time_of_day,
                    days_of_week=list(schedule.days_of_week),
                    taken_today=status.taken_today,
                    scheduled_today=status.scheduled_today,
                    can_take=status.can_take,
                    is_overdue=status.is_overdue,
                    too_early=status.too_early,
                    next_dose=status.next_dose,
                    available_time=status.available_time,
                )
            )
    return board
