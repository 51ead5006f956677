"""Carer to dependant relationship services."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dosewatch.core.errors import ConflictError, NotFoundError
from dosewatch.models import CarerDependantRelationship, User, UserRole

logger = logging.getLogger(__name__)


async def has_relationship(
    session: AsyncSession,
    *,
    carer_id: uuid.UUID,
    dependant_id: uuid.UUID,
) -> bool:
    result = await session.execute(
        select(CarerDependantRelationship.id).where(
            CarerDependantRelationship.carer_id == carer_id,
            CarerDependantRelationship.dependant_id == dependant_id,
        )
    )
    return result.first() is not None


async def list_dependants(session: AsyncSession, *, carer_id: uuid.UUID) -> list[User]:
    """Return the carer's linked dependants ordered by name."""
    result = await session.execute(
        select(User)
        .join(
            CarerDependantRelationship,
            CarerDependantRelationship.dependant_id == User.id,
        )
        .where(
            CarerDependantRelationship.carer_id == carer_id,
            User.role == UserRole.DEPENDANT,
        )
        .order_by(User.name)
    )
    return list(result.scalars().all())


async def add_dependant_by_email(
    session: AsyncSession,
    *,
    carer_id: uuid.UUID,
    dependant_email: str,
) -> User:
    """Link the dependant registered under ``dependant_email`` to the carer."""
    result = await session.execute(
        select(User).where(
            User.email == dependant_email.lower(),
            User.role == UserRole.DEPENDANT,
        )
    )
    dependant = result.scalar_one_or_none()
    if dependant is None:
        raise NotFoundError("Dependant not found")

    if await has_relationship(session, carer_id=carer_id, dependant_id=dependant.id):
        raise ConflictError("Relationship already exists")

    session.add(
        CarerDependantRelationship(carer_id=carer_id, dependant_id=dependant.id)
    )
    try:
        await session.commit()
    except IntegrityError as exc:
        # lost a race with a concurrent link of the same pair
        await session.rollback()
        raise ConflictError("Relationship already exists") from exc
    logger.info("Carer %s linked dependant %s", carer_id, dependant.id)
    return dependant
