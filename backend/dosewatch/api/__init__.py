"""HTTP API package."""

from fastapi import APIRouter

from dosewatch.core.config import get_settings

from .routes import router as routes_router

settings = get_settings()

api_router = APIRouter()
api_router.include_router(routes_router, prefix=settings.api_prefix)

__all__ = ["api_router"]
