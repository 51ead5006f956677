"""Carer/dependant relationship schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field

from dosewatch.schemas.user import DependantSummary


class AddDependantRequest(BaseModel):
    dependant_email: EmailStr = Field(
        validation_alias=AliasChoices("dependant_email", "dependantEmail")
    )


class AddDependantResponse(BaseModel):
    message: str
    dependant: DependantSummary


class LinkedDependantRead(DependantSummary):
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

