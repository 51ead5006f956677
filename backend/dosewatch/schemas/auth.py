"""Authentication schemas."""
from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from dosewatch.models.user import UserRole
from dosewatch.schemas.user import UserRead


class LoginRequest(BaseModel):
    """Login payload."""

    email: EmailStr
    password: str = Field(min_length=1)


class RegistrationRequest(BaseModel):
    """Self-service registration payload for carers and dependants."""

    email: EmailStr
    password: str = Field(min_length=6)
    name: str = Field(min_length=1, max_length=255)
    role: UserRole


class AuthResponse(BaseModel):
    """Issued bearer token plus the authenticated user."""

    message: str
    user: UserRead
    token: str
    token_type: str = "bearer"
