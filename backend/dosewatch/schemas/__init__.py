"""Schema exports."""

from dosewatch.schemas.auth import AuthResponse, LoginRequest, RegistrationRequest
from dosewatch.schemas.confirmation import (
    ConfirmationApprove,
    ConfirmationEnvelope,
    ConfirmationRead,
    ConfirmationSubmit,
    PendingConfirmationRead,
    RecentConfirmationRead,
)
from dosewatch.schemas.medication import (
    DoseStatusRead,
    MedicationCreate,
    MedicationEnvelope,
    MedicationRead,
    ScheduleIn,
    ScheduleRead,
    ScheduleReplace,
)
from dosewatch.schemas.notification import (
    NotificationRead,
    ReminderRead,
    ReminderSyncResponse,
)
from dosewatch.schemas.relationship import (
    AddDependantRequest,
    AddDependantResponse,
    LinkedDependantRead,
)
from dosewatch.schemas.user import DependantSummary, UserRead

__all__ = [
    "AddDependantRequest",
    "AddDependantResponse",
    "AuthResponse",
    "ConfirmationApprove",
    "ConfirmationEnvelope",
    "ConfirmationRead",
    "ConfirmationSubmit",
    "DependantSummary",
    "DoseStatusRead",
    "LinkedDependantRead",
    "LoginRequest",
    "MedicationCreate",
    "MedicationEnvelope",
    "MedicationRead",
    "NotificationRead",
    "PendingConfirmationRead",
    "RecentConfirmationRead",
    "RegistrationRequest",
    "ReminderRead",
    "ReminderSyncResponse",
    "ScheduleIn",
    "ScheduleRead",
    "ScheduleReplace",
    "UserRead",
]
