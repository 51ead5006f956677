"""Medication and schedule schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

_TIME_OF_DAY_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class ScheduleIn(BaseModel):
    """One recurring time of day on a set of weekdays (0=Sunday..6=Saturday)."""

    time_of_day: str = Field(
        pattern=_TIME_OF_DAY_PATTERN,
        validation_alias=AliasChoices("time_of_day", "timeOfDay"),
    )
    days_of_week: list[int] = Field(
        min_length=1,
        validation_alias=AliasChoices("days_of_week", "daysOfWeek"),
    )

    @field_validator("days_of_week")
    @classmethod
    def _check_days(cls, value: list[int]) -> list[int]:
        if any(day < 0 or day > 6 for day in value):
            raise ValueError("days_of_week entries must be between 0 and 6")
        return sorted(set(value))


class ScheduleRead(BaseModel):
    id: uuid.UUID
    medication_id: uuid.UUID
    time_of_day: str
    days_of_week: list[int]
    active: bool

    model_config = ConfigDict(from_attributes=True)


class MedicationCreate(BaseModel):
    """Payload for creating a medication with its schedules."""

    name: str = Field(min_length=1, max_length=255)
    dosage: str | None = Field(default=None, max_length=120)
    instructions: str | None = None
    dependant_id: uuid.UUID = Field(
        validation_alias=AliasChoices("dependant_id", "dependantId")
    )
    schedules: list[ScheduleIn] = Field(default_factory=list)


class ScheduleReplace(BaseModel):
    """Full replacement set of schedules for one medication."""

    schedules: list[ScheduleIn]


class MedicationRead(BaseModel):
    """Serialized medication with its schedules."""

    id: uuid.UUID
    name: str
    dosage: str | None = None
    instructions: str | None = None
    dependant_id: uuid.UUID
    carer_id: uuid.UUID
    schedules: list[ScheduleRead] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MedicationEnvelope(BaseModel):
    message: str
    medication: MedicationRead


class DoseStatusRead(BaseModel):
    """Dose-window answers for one active schedule."""

    medication_id: uuid.UUID
    medication_name: str
    schedule_id: uuid.UUID
    time_of_day: str
    days_of_week: list[int]
    taken_today: bool
    scheduled_today: bool
    can_take: bool
    is_overdue: bool
    too_early: bool
    next_dose: str
    available_time: str
