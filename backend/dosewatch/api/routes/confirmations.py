"""Dose confirmation endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Body, status

from dosewatch.api.deps import CarerUser, DependantUser, SessionDep
from dosewatch.schemas.confirmation import (
    ConfirmationApprove,
    ConfirmationEnvelope,
    ConfirmationRead,
    ConfirmationSubmit,
    PendingConfirmationRead,
    RecentConfirmationRead,
)
from dosewatch.services import confirmation_service

router = APIRouter()


@router.get(
    "/pending",
    response_model=list[PendingConfirmationRead],
    summary="Submissions awaiting the carer's approval",
)
async def list_pending(
    session: SessionDep, current_user: CarerUser
) -> list[PendingConfirmationRead]:
    return await confirmation_service.list_pending_for_carer(
        session, carer_id=current_user.id
    )


@router.get(
    "/recent",
    response_model=list[RecentConfirmationRead],
    summary="Confirmed doses from the last 24 hours",
)
async def list_recent(
    session: SessionDep, current_user: DependantUser
) -> list[RecentConfirmationRead]:
    return await confirmation_service.list_recent_for_dependant(
        session, dependant_id=current_user.id
    )


@router.post(
    "/submit",
    response_model=ConfirmationEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a photo confirmation for a dose",
)
async def submit(
    payload: ConfirmationSubmit, session: SessionDep, current_user: DependantUser
) -> ConfirmationEnvelope:
    confirmation = await confirmation_service.submit_confirmation(
        session,
        dependant_id=current_user.id,
        medication_id=payload.medication_id,
        schedule_id=payload.schedule_id,
        photo_path=payload.photo_path,
    )
    return ConfirmationEnvelope(
        message="Confirmation submitted successfully",
        confirmation=ConfirmationRead.model_validate(confirmation),
    )


@router.post(
    "/{confirmation_id}/confirm",
    response_model=ConfirmationEnvelope,
    summary="Approve a dependant's confirmation",
)
async def confirm(
    confirmation_id: uuid.UUID,
    session: SessionDep,
    current_user: CarerUser,
    payload: ConfirmationApprove | None = Body(default=None),
) -> ConfirmationEnvelope:
    confirmation = await confirmation_service.confirm_confirmation(
        session,
        carer_id=current_user.id,
        confirmation_id=confirmation_id,
        notes=payload.notes if payload else None,
    )
    return ConfirmationEnvelope(
        message="Medication confirmed successfully",
        confirmation=ConfirmationRead.model_validate(confirmation),
    )
