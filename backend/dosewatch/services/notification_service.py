"""In-app notification helpers for dependants."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dosewatch.core.errors import NotFoundError
from dosewatch.models import Medication, Notification, NotificationType


def new_medication_message(name: str) -> str:
    return f'New medication "{name}" has been added to your schedule'


def schedule_updated_message(name: str) -> str:
    return f'Schedule for "{name}" has been updated'


async def record_schedule_update(
    session: AsyncSession,
    *,
    medication: Medication,
    message: str,
) -> Notification:
    """Stage a schedule-update notification inside the caller's transaction."""
    notification = Notification(
        dependant_id=medication.dependant_id,
        medication_id=medication.id,
        message=message,
        type=NotificationType.SCHEDULE_UPDATE,
    )
    session.add(notification)
    await session.flush()
    return notification


async def list_for_dependant(
    session: AsyncSession,
    *,
    dependant_id: uuid.UUID,
    unread_only: bool = False,
) -> list[Notification]:
    stmt = (
        select(Notification)
        .where(Notification.dependant_id == dependant_id)
        .order_by(Notification.created_at.desc())
    )
    if unread_only:
        stmt = stmt.where(Notification.read.is_(False))
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def mark_read(
    session: AsyncSession,
    *,
    notification_id: uuid.UUID,
    dependant_id: uuid.UUID,
) -> None:
    notification = await session.get(Notification, notification_id)
    if notification is None or notification.dependant_id != dependant_id:
        raise NotFoundError("Notification not found")
    notification.read = True
    await session.commit()
