"""Carer to dependant link."""
from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dosewatch.db.base import Base
from dosewatch.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover
    from dosewatch.models import User


class CarerDependantRelationship(TimestampMixin, Base):
    """Grants a carer access to a dependant's medications and confirmations."""

    __tablename__ = "carer_dependant_relationships"
    __table_args__ = (
        UniqueConstraint("carer_id", "dependant_id", name="uq_carer_dependant"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    carer_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    dependant_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    carer: Mapped["User"] = relationship(
        "User", foreign_keys=[carer_id], back_populates="dependant_links"
    )
    dependant: Mapped["User"] = relationship("User", foreign_keys=[dependant_id])
