"""Photo confirmation workflow.

A confirmation is created pending by the dependant and moves exactly once to
confirmed when the carer who owns the medication approves it. Same-day
duplicate submissions are accepted.
"""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime, timedelta

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dosewatch.core.errors import InternalError, NotFoundError, ValidationError
from dosewatch.models import (
    Medication,
    MedicationConfirmation,
    MedicationSchedule,
    User,
)
from dosewatch.schemas.confirmation import (
    PendingConfirmationRead,
    RecentConfirmationRead,
)

logger = logging.getLogger(__name__)

RECENT_WINDOW = timedelta(hours=24)


def _coerce_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


async def submit_confirmation(
    session: AsyncSession,
    *,
    dependant_id: uuid.UUID,
    medication_id: uuid.UUID | None,
    photo_path: str | None,
    schedule_id: uuid.UUID | None = None,
) -> MedicationConfirmation:
    """Record a pending dose confirmation for one of the dependant's medications."""
    if medication_id is None or not photo_path or not photo_path.strip():
        raise ValidationError("Medication ID and photo path are required")

    medication = await session.get(Medication, medication_id)
    if medication is None or medication.dependant_id != dependant_id:
        raise NotFoundError("Medication not found or access denied")
    if schedule_id is not None:
        schedule = await session.get(MedicationSchedule, schedule_id)
        if schedule is None or schedule.medication_id != medication_id:
            raise NotFoundError("Schedule not found for this medication")

    confirmation = MedicationConfirmation(
        dependant_id=dependant_id,
        medication_id=medication_id,
        schedule_id=schedule_id,
        photo_path=photo_path.strip(),
        taken_at=datetime.now(UTC),
        confirmed_by_carer=False,
    )
    session.add(confirmation)
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Failed to store confirmation for medication %s", medication_id)
        raise InternalError() from exc
    await session.refresh(confirmation)
    logger.info(
        "Dependant %s submitted confirmation %s for medication %s",
        dependant_id,
        confirmation.id,
        medication_id,
    )
    return confirmation


async def confirm_confirmation(
    session: AsyncSession,
    *,
    carer_id: uuid.UUID,
    confirmation_id: uuid.UUID,
    notes: str | None = None,
) -> MedicationConfirmation:
    """Mark a confirmation as approved by the carer who owns its medication."""
    result = await session.execute(
        select(MedicationConfirmation)
        .join(Medication, Medication.id == MedicationConfirmation.medication_id)
        .where(
            MedicationConfirmation.id == confirmation_id,
            Medication.carer_id == carer_id,
        )
    )
    confirmation = result.scalar_one_or_none()
    if confirmation is None:
        raise NotFoundError("Confirmation not found or access denied")

    try:
        await session.execute(
            update(MedicationConfirmation)
            .where(MedicationConfirmation.id == confirmation_id)
            .values(
                confirmed_by_carer=True,
                carer_confirmed_at=datetime.now(UTC),
                notes=notes or None,
            )
        )
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Failed to confirm confirmation %s", confirmation_id)
        raise InternalError() from exc
    await session.refresh(confirmation)
    logger.info("Carer %s confirmed confirmation %s", carer_id, confirmation_id)
    return confirmation


async def list_pending_for_carer(
    session: AsyncSession, *, carer_id: uuid.UUID
) -> list[PendingConfirmationRead]:
    """Unconfirmed submissions on the carer's medications, newest first."""
    result = await session.execute(
        select(MedicationConfirmation, Medication.name, User.name)
        .join(Medication, Medication.id == MedicationConfirmation.medication_id)
        .join(User, User.id == MedicationConfirmation.dependant_id)
        .where(
            Medication.carer_id == carer_id,
            MedicationConfirmation.confirmed_by_carer.is_(False),
        )
        .order_by(MedicationConfirmation.taken_at.desc())
    )
    rows: list[PendingConfirmationRead] = []
    for confirmation, medication_name, dependant_name in result.all():
        rows.append(
            PendingConfirmationRead(
                id=confirmation.id,
                dependant_id=confirmation.dependant_id,
                medication_id=confirmation.medication_id,
                schedule_id=confirmation.schedule_id,
                photo_path=confirmation.photo_path,
                taken_at=_coerce_utc(confirmation.taken_at),
                confirmed_by_carer=confirmation.confirmed_by_carer,
                carer_confirmed_at=confirmation.carer_confirmed_at,
                notes=confirmation.notes,
                medication_name=medication_name,
                dependant_name=dependant_name,
            )
        )
    return rows


async def list_recent_for_dependant(
    session: AsyncSession,
    *,
    dependant_id: uuid.UUID,
    now: datetime | None = None,
) -> list[RecentConfirmationRead]:
    """Carer-confirmed doses from the trailing 24 hours, newest first.

    This is the history the dose-window evaluator consumes.
    """
    cutoff = _coerce_utc(now or datetime.now(UTC)) - RECENT_WINDOW
    result = await session.execute(
        select(
            MedicationConfirmation,
            MedicationSchedule.time_of_day,
            MedicationSchedule.days_of_week,
        )
        .outerjoin(
            MedicationSchedule,
            MedicationSchedule.id == MedicationConfirmation.schedule_id,
        )
        .where(
            MedicationConfirmation.dependant_id == dependant_id,
            MedicationConfirmation.confirmed_by_carer.is_(True),
            MedicationConfirmation.taken_at >= cutoff,
        )
        .order_by(MedicationConfirmation.taken_at.desc())
    )
    return [
        RecentConfirmationRead(
            id=confirmation.id,
            medication_id=confirmation.medication_id,
            schedule_id=confirmation.schedule_id,
            taken_at=_coerce_utc(confirmation.taken_at),
            confirmed_by_carer=confirmation.confirmed_by_carer,
            time_of_day=time_of_day,
            days_of_week=days_of_week,
        )
        for confirmation, time_of_day, days_of_week in result.all()
    ]
