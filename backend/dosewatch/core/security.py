"""Password hashing and bearer tokens for carers and dependants.

Tokens carry the user id as ``sub`` and the account role as ``role``.
"""

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from dosewatch.core.config import get_settings
from dosewatch.models.user import UserRole


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())
    except (ValueError, TypeError):  # malformed stored hash
        return False


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def create_access_token(
    user_id: uuid.UUID,
    role: UserRole,
    *,
    expires_delta: timedelta | None = None,
) -> str:
    """Issue a signed token for ``user_id`` acting as ``role``."""
    settings = get_settings()
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = {
        "sub": str(user_id),
        "role": role.value,
        "exp": datetime.now(UTC) + lifetime,
    }
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """Verify signature and expiry, raising ``JWTError`` on failure."""
    settings = get_settings()
    return jwt.decode(
        token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
    )


def token_subject(token: str) -> uuid.UUID:
    """Return the user id a valid token was issued for."""
    claims = decode_access_token(token)
    try:
        return uuid.UUID(str(claims.get("sub")))
    except ValueError as exc:
        raise JWTError("Token subject is not a user id") from exc
