"""Service-layer error taxonomy.

Services raise these; the API layer renders them as ``{"message": ...}``
bodies with the matching HTTP status. ``NotFoundError`` also covers resources
outside the caller's relationships.
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Invalid request"


class AccessDeniedError(ServiceError):
    status_code = 403
    default_message = "Access denied"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Not found"


class ConflictError(ServiceError):
    status_code = 409
    default_message = "Conflict"


class InternalError(ServiceError):
    """Unexpected store failure; the message is never shown to callers."""


__all__ = [
    "AccessDeniedError",
    "ConflictError",
    "InternalError",
    "NotFoundError",
    "ServiceError",
    "ValidationError",
]
