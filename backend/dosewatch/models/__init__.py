"""ORM models package export."""

from dosewatch.models.confirmation import MedicationConfirmation
from dosewatch.models.medication import Medication, MedicationSchedule
from dosewatch.models.notification import Notification, NotificationType
from dosewatch.models.relationship import CarerDependantRelationship
from dosewatch.models.user import User, UserRole

__all__ = [
    "CarerDependantRelationship",
    "Medication",
    "MedicationConfirmation",
    "MedicationSchedule",
    "Notification",
    "NotificationType",
    "User",
    "UserRole",
]
