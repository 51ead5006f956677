"""User schemas."""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr

from dosewatch.models.user import UserRole


class UserRead(BaseModel):
    """Public view of a user account."""

    id: uuid.UUID
    email: EmailStr
    name: str
    role: UserRole
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DependantSummary(BaseModel):
    id: uuid.UUID
    email: EmailStr
    name: str

    model_config = ConfigDict(from_attributes=True)
