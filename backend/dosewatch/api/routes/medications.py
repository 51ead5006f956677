"""Medication and schedule endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, BackgroundTasks, status

from dosewatch.api.deps import CarerUser, DeliveryDep, DependantUser, SessionDep
from dosewatch.schemas.medication import (
    DoseStatusRead,
    MedicationCreate,
    MedicationEnvelope,
    MedicationRead,
    ScheduleReplace,
)
from dosewatch.services import medication_service, reminder_sync

router = APIRouter()


@router.get(
    "/mine",
    response_model=list[MedicationRead],
    summary="List the dependant's medications",
)
async def list_my_medications(
    session: SessionDep, current_user: DependantUser
) -> list[MedicationRead]:
    medications = await medication_service.list_medications_for_dependant(
        session, dependant_id=current_user.id
    )
    return [MedicationRead.model_validate(obj) for obj in medications]


@router.get(
    "/mine/doses",
    response_model=list[DoseStatusRead],
    summary="Dose-window status for each active schedule",
)
async def list_my_doses(
    session: SessionDep, current_user: DependantUser
) -> list[DoseStatusRead]:
    return await medication_service.dose_board(session, dependant_id=current_user.id)


@router.get(
    "/dependant/{dependant_id}",
    response_model=list[MedicationRead],
    summary="List a linked dependant's medications",
)
async def list_dependant_medications(
    dependant_id: uuid.UUID, session: SessionDep, current_user: CarerUser
) -> list[MedicationRead]:
    medications = await medication_service.list_medications_for_carer_view(
        session, carer_id=current_user.id, dependant_id=dependant_id
    )
    return [MedicationRead.model_validate(obj) for obj in medications]


@router.post(
    "",
    response_model=MedicationEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a medication with schedules",
)
async def create_medication(
    payload: MedicationCreate,
    session: SessionDep,
    current_user: CarerUser,
    delivery: DeliveryDep,
    background_tasks: BackgroundTasks,
) -> MedicationEnvelope:
    medication = await medication_service.create_medication(
        session,
        carer_id=current_user.id,
        dependant_id=payload.dependant_id,
        name=payload.name,
        dosage=payload.dosage,
        instructions=payload.instructions,
        schedules=payload.schedules,
    )
    background_tasks.add_task(
        reminder_sync.resync_in_background, delivery, medication.dependant_id
    )
    return MedicationEnvelope(
        message="Medication created successfully",
        medication=MedicationRead.model_validate(medication),
    )


@router.put(
    "/{medication_id}/schedule",
    response_model=MedicationEnvelope,
    summary="Replace a medication's schedules",
)
async def replace_schedule(
    medication_id: uuid.UUID,
    payload: ScheduleReplace,
    session: SessionDep,
    current_user: CarerUser,
    delivery: DeliveryDep,
    background_tasks: BackgroundTasks,
) -> MedicationEnvelope:
    medication = await medication_service.replace_schedules(
        session,
        carer_id=current_user.id,
        medication_id=medication_id,
        schedules=payload.schedules,
    )
    background_tasks.add_task(
        reminder_sync.resync_in_background, delivery, medication.dependant_id
    )
    return MedicationEnvelope(
        message="Schedule updated successfully",
        medication=MedicationRead.model_validate(medication),
    )
