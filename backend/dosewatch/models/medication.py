"""Medication and recurring schedule models."""
from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dosewatch.db.base import Base
from dosewatch.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover
    from dosewatch.models import User


class Medication(TimestampMixin, Base):
    """A medication a carer has prescribed to one of their dependants."""

    __tablename__ = "medications"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    dosage: Mapped[str | None] = mapped_column(String(120))
    instructions: Mapped[str | None] = mapped_column(Text)
    dependant_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    carer_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    schedules: Mapped[list["MedicationSchedule"]] = relationship(
        "MedicationSchedule",
        back_populates="medication",
        cascade="all, delete-orphan",
        order_by="MedicationSchedule.time_of_day",
    )
    dependant: Mapped["User"] = relationship("User", foreign_keys=[dependant_id])
    carer: Mapped["User"] = relationship("User", foreign_keys=[carer_id])


class MedicationSchedule(TimestampMixin, Base):
    """A recurring time of day on a set of weekdays (0=Sunday..6=Saturday)."""

    __tablename__ = "medication_schedules"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    medication_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("medications.id", ondelete="CASCADE"), nullable=False, index=True
    )
    time_of_day: Mapped[str] = mapped_column(String(5), nullable=False)
    days_of_week: Mapped[list[int]] = mapped_column(JSON, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    medication: Mapped["Medication"] = relationship(
        "Medication", back_populates="schedules"
    )
