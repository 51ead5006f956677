"""User model for carer and dependant identities."""
from __future__ import annotations

import enum
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dosewatch.db.base import Base
from dosewatch.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover
    from dosewatch.models import CarerDependantRelationship


class UserRole(str, enum.Enum):
    """Closed set of account roles."""

    CARER = "carer"
    DEPENDANT = "dependant"


class User(TimestampMixin, Base):
    """User entity for authentication and authorization."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(Enum(UserRole), nullable=False)

    dependant_links: Mapped[list["CarerDependantRelationship"]] = relationship(
        "CarerDependantRelationship",
        foreign_keys="CarerDependantRelationship.carer_id",
        back_populates="carer",
    )
