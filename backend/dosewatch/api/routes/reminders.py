"""Device reminder endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from dosewatch.api.deps import DeliveryDep, DependantUser, SessionDep
from dosewatch.schemas.notification import ReminderRead, ReminderSyncResponse
from dosewatch.services import reminder_sync

router = APIRouter()


@router.get("", response_model=list[ReminderRead], summary="List scheduled reminders")
async def list_reminders(
    current_user: DependantUser, delivery: DeliveryDep
) -> list[ReminderRead]:
    reminders = await delivery.list_scheduled(
        reminder_sync.is_reminder_for(current_user.id)
    )
    return [ReminderRead.model_validate(obj) for obj in reminders]


@router.post(
    "/sync",
    response_model=ReminderSyncResponse,
    summary="Reschedule reminders from current schedules",
)
async def sync_reminders(
    session: SessionDep, current_user: DependantUser, delivery: DeliveryDep
) -> ReminderSyncResponse:
    result = await reminder_sync.resync_for_dependant(
        session, delivery, dependant_id=current_user.id
    )
    reminders = await delivery.list_scheduled(
        reminder_sync.is_reminder_for(current_user.id)
    )
    return ReminderSyncResponse(
        message=f"Scheduled {len(result.reminder_ids)} reminders",
        cancelled=result.cancelled,
        reminders=[ReminderRead.model_validate(obj) for obj in reminders],
    )
