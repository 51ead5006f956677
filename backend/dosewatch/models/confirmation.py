"""Photographic dose confirmations submitted by dependants."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dosewatch.db.base import Base
from dosewatch.models.mixins import utcnow

if TYPE_CHECKING:  # pragma: no cover
    from dosewatch.models import Medication, MedicationSchedule, User


class MedicationConfirmation(Base):
    """A dependant's claim of a taken dose, pending until a carer confirms it.

    ``confirmed_by_carer`` only ever moves from false to true.
    """

    __tablename__ = "medication_confirmations"
    __table_args__ = (
        Index("ix_confirmation_dependant_taken", "dependant_id", "taken_at"),
        Index("ix_confirmation_medication", "medication_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    dependant_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    medication_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("medications.id", ondelete="CASCADE"), nullable=False
    )
    schedule_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("medication_schedules.id", ondelete="SET NULL")
    )
    photo_path: Mapped[str] = mapped_column(String(1024), nullable=False)
    taken_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    confirmed_by_carer: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    carer_confirmed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True)
    )
    notes: Mapped[str | None] = mapped_column(Text)

    dependant: Mapped["User"] = relationship("User")
    medication: Mapped["Medication"] = relationship("Medication")
    schedule: Mapped["MedicationSchedule | None"] = relationship("MedicationSchedule")
