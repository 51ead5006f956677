"""Medication confirmation schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ConfirmationSubmit(BaseModel):
    """Dependant's photo submission for a dose."""

    medication_id: uuid.UUID | None = Field(
        default=None, validation_alias=AliasChoices("medication_id", "medicationId")
    )
    schedule_id: uuid.UUID | None = Field(
        default=None, validation_alias=AliasChoices("schedule_id", "scheduleId")
    )
    photo_path: str | None = Field(
        default=None,
        max_length=1024,
        validation_alias=AliasChoices("photo_path", "photoPath"),
    )


class ConfirmationApprove(BaseModel):
    notes: str | None = None


class ConfirmationRead(BaseModel):
    id: uuid.UUID
    dependant_id: uuid.UUID
    medication_id: uuid.UUID
    schedule_id: uuid.UUID | None = None
    photo_path: str
    taken_at: datetime
    confirmed_by_carer: bool
    carer_confirmed_at: datetime | None = None
    notes: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ConfirmationEnvelope(BaseModel):
    message: str
    confirmation: ConfirmationRead


class PendingConfirmationRead(ConfirmationRead):
    """Pending submission joined with display names for the carer."""

    medication_name: str
    dependant_name: str


class RecentConfirmationRead(BaseModel):
    """Confirmed dose in the trailing 24 hours, with its schedule's timing."""

    id: uuid.UUID
    medication_id: uuid.UUID
    schedule_id: uuid.UUID | None = None
    taken_at: datetime
    confirmed_by_carer: bool
    time_of_day: str | None = None
    days_of_week: list[int] | None = None
