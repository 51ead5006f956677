"""API router modules."""

from fastapi import APIRouter

from . import (
    auth,
    confirmations,
    health,
    medications,
    notifications,
    relationships,
    reminders,
)

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(medications.router, prefix="/medications", tags=["medications"])
router.include_router(
    relationships.router, prefix="/relationships", tags=["relationships"]
)
router.include_router(
    confirmations.router, prefix="/confirmations", tags=["confirmations"]
)
router.include_router(
    notifications.router, prefix="/notifications", tags=["notifications"]
)
router.include_router(reminders.router, prefix="/reminders", tags=["reminders"])
