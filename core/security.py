# core/security.py
"""
Password hashing and JWT handling for staff sessions.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import JWTError, jwt

from config import settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
_DEV_SECRET = "dev-secret-key-change-in-production"
_warned_dev_secret = False


def get_secret_key() -> str:
    """JWT signing key from settings, or a fixed development key."""
    global _warned_dev_secret
    secret = getattr(settings, "SECRET_KEY", None)
    if secret:
        return secret
    if not _warned_dev_secret:
        logger.warning("SECRET_KEY is not set; using the development signing key")
        _warned_dev_secret = True
    return _DEV_SECRET


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its bcrypt hash."""
    return bcrypt.checkpw(
        plain_password.encode("utf-8"),
        hashed_password.encode("utf-8"),
    )


def get_password_hash(password: str) -> str:
    """Hash a password for storage."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def _encode(data: dict[str, Any], token_type: str, lifetime: timedelta) -> str:
    to_encode = data.copy()
    to_encode.update({
        "exp": datetime.now(timezone.utc) + lifetime,
        "type": token_type,
    })
    return jwt.encode(to_encode, get_secret_key(), algorithm=ALGORITHM)


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Payload data to encode in the token ("sub" is the user id)
        expires_delta: Optional custom expiration time
    """
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode(data, "access", lifetime)


def create_refresh_token(data: dict[str, Any]) -> str:
    """Create a JWT refresh token with a longer lifetime."""
    return _encode(data, "refresh", timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS))


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and validate a JWT token. Returns None if invalid or expired."""
    try:
        return jwt.decode(token, get_secret_key(), algorithms=[ALGORITHM])
    except JWTError:
        return None


def verify_token_type(token: str, expected_type: str) -> dict[str, Any] | None:
    """Decode token and check it is of the expected type ('access' or 'refresh')."""
    payload = decode_token(token)
    if payload is None or payload.get("type") != expected_type:
        return None
    return payload
