"""Registration and login endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter

from dosewatch.api.deps import SessionDep
from dosewatch.core.config import get_settings
from dosewatch.schemas.auth import AuthResponse, LoginRequest, RegistrationRequest
from dosewatch.schemas.user import UserRead
from dosewatch.services import user_service
from dosewatch.services.auth_service import (
    authenticate_user,
    create_access_token_for_user,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_settings = get_settings()

_SECONDS = {
    "second": 1,
    "seconds": 1,
    "minute": 60,
    "minutes": 60,
    "hour": 3600,
    "hours": 3600,
    "day": 86400,
    "days": 86400,
}


def _parse_rate(value: str, *, fallback: tuple[int, int]) -> tuple[int, int]:
    """Parse ``"10/minute"`` into ``(times, seconds)``."""
    try:
        count_str, window_str = value.split("/", 1)
        count = int(count_str.strip())
    except ValueError:
        return fallback
    return count, _SECONDS.get(window_str.strip().lower(), fallback[1])


_LOGIN_LIMIT = _parse_rate(_settings.rate_limit_login, fallback=(10, 60))
_DEFAULT_LIMIT = _parse_rate(_settings.rate_limit_default, fallback=(100, 60))


def _rate_dependency(limit: tuple[int, int]):
    async def _dependency(request: Request, response: Response) -> None:
        if FastAPILimiter.redis is None:
            return None
        limiter = RateLimiter(times=limit[0], seconds=limit[1])
        await limiter(request, response)

    return Depends(_dependency)


_LOGIN_RATE_DEP = _rate_dependency(_LOGIN_LIMIT)
_DEFAULT_RATE_DEP = _rate_dependency(_DEFAULT_LIMIT)


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a carer or dependant",
    dependencies=[_DEFAULT_RATE_DEP],
)
async def register(payload: RegistrationRequest, session: SessionDep) -> AuthResponse:
    user = await user_service.create_user(
        session,
        email=payload.email,
        password=payload.password,
        name=payload.name,
        role=payload.role,
    )
    logger.info("Registered %s user %s", user.role.value, user.id)
    return AuthResponse(
        message="User created successfully",
        user=UserRead.model_validate(user),
        token=create_access_token_for_user(user),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Exchange credentials for a bearer token",
    dependencies=[_LOGIN_RATE_DEP],
)
async def login(payload: LoginRequest, session: SessionDep) -> AuthResponse:
    user = await authenticate_user(session, payload.email, payload.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return AuthResponse(
        message="Login successful",
        user=UserRead.model_validate(user),
        token=create_access_token_for_user(user),
    )
