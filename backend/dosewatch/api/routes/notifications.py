"""In-app notification endpoints for dependants."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Response, status

from dosewatch.api.deps import DependantUser, SessionDep
from dosewatch.schemas.notification import NotificationRead
from dosewatch.services import notification_service

router = APIRouter()


@router.get("", response_model=list[NotificationRead], summary="List notifications")
async def list_notifications(
    session: SessionDep,
    current_user: DependantUser,
    unread_only: bool = False,
) -> list[NotificationRead]:
    notifications = await notification_service.list_for_dependant(
        session, dependant_id=current_user.id, unread_only=unread_only
    )
    return [NotificationRead.model_validate(obj) for obj in notifications]


@router.post(
    "/{notification_id}/read",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Mark a notification as read",
)
async def mark_read(
    notification_id: uuid.UUID, session: SessionDep, current_user: DependantUser
) -> Response:
    await notification_service.mark_read(
        session, notification_id=notification_id, dependant_id=current_user.id
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
