"""User data access helpers."""
from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dosewatch.core.errors import ConflictError
from dosewatch.core.security import get_password_hash
from dosewatch.models.user import User, UserRole


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    """Return a user by email address."""
    result = await session.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def get_user(session: AsyncSession, user_id: uuid.UUID) -> User | None:
    """Return a user by ID."""
    return await session.get(User, user_id)


async def create_user(
    session: AsyncSession,
    *,
    email: str,
    password: str,
    name: str,
    role: UserRole,
) -> User:
    """Persist a new user with hashed password."""
    if await get_user_by_email(session, email) is not None:
        raise ConflictError("User already exists")
    user = User(
        email=email.lower(),
        hashed_password=get_password_hash(password),
        name=name.strip(),
        role=role,
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise ConflictError("User already exists") from exc
    await session.refresh(user)
    return user
