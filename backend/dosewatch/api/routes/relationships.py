"""Carer to dependant linking endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from dosewatch.api.deps import CarerUser, SessionDep
from dosewatch.schemas.relationship import (
    AddDependantRequest,
    AddDependantResponse,
    LinkedDependantRead,
)
from dosewatch.schemas.user import DependantSummary
from dosewatch.services import relationship_service

router = APIRouter()


@router.get(
    "/dependants",
    response_model=list[LinkedDependantRead],
    summary="List linked dependants",
)
async def list_dependants(
    session: SessionDep, current_user: CarerUser
) -> list[LinkedDependantRead]:
    dependants = await relationship_service.list_dependants(
        session, carer_id=current_user.id
    )
    return [LinkedDependantRead.model_validate(obj) for obj in dependants]


@router.post(
    "/add-dependant",
    response_model=AddDependantResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Link a dependant by email",
)
async def add_dependant(
    payload: AddDependantRequest, session: SessionDep, current_user: CarerUser
) -> AddDependantResponse:
    dependant = await relationship_service.add_dependant_by_email(
        session, carer_id=current_user.id, dependant_email=payload.dependant_email
    )
    return AddDependantResponse(
        message="Dependant added successfully",
        dependant=DependantSummary.model_validate(dependant),
    )
