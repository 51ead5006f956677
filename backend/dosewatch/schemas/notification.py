"""Notification and reminder schemas."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from dosewatch.models.notification import NotificationType


class NotificationRead(BaseModel):
    id: uuid.UUID
    dependant_id: uuid.UUID
    medication_id: uuid.UUID
    schedule_id: uuid.UUID | None = None
    message: str
    type: NotificationType
    read: bool
    scheduled_time: datetime
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReminderRead(BaseModel):
    """A weekly repeating reminder held by the delivery collaborator."""

    id: str
    weekday: int
    hour: int
    minute: int
    repeats: bool
    payload: dict[str, Any]

    model_config = ConfigDict(from_attributes=True)


class ReminderSyncResponse(BaseModel):
    message: str
    cancelled: int
    reminders: list[ReminderRead]
