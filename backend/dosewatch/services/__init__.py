"""Service layer exports."""
from dosewatch.services import (
    auth_service,
    confirmation_service,
    medication_service,
    notification_service,
    relationship_service,
    reminder_sync,
    user_service,
)

__all__ = [
    "auth_service",
    "confirmation_service",
    "medication_service",
    "notification_service",
    "relationship_service",
    "reminder_sync",
    "user_service",
]
