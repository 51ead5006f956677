"""Common API dependencies."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from dosewatch.core.security import token_subject
from dosewatch.db.session import get_session
from dosewatch.integrations.reminders import ReminderDelivery, get_reminder_delivery
from dosewatch.models.user import User, UserRole

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async for session in get_session():
        yield session


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> User:
    """Authenticate request via bearer token."""
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Access token required")

    try:
        user_id = token_subject(credentials.credentials)
    except JWTError as exc:
        raise _unauthorized("Invalid token") from exc

    user = await session.get(User, user_id)
    if user is None:
        raise _unauthorized("Invalid token")
    return user


def require_role(role: UserRole) -> Callable[..., Awaitable[User]]:
    """Build a dependency admitting only users holding ``role``."""

    async def _dependency(
        current_user: Annotated[User, Depends(get_current_user)],
    ) -> User:
        if current_user.role != role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. {role.value} role required.",
            )
        return current_user

    return _dependency


SessionDep = Annotated[AsyncSession, Depends(get_db_session)]
CarerUser = Annotated[User, Depends(require_role(UserRole.CARER))]
DependantUser = Annotated[User, Depends(require_role(UserRole.DEPENDANT))]
DeliveryDep = Annotated[ReminderDelivery, Depends(get_reminder_delivery)]
