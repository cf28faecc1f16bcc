"""Password hashing and JWT access tokens.

Uses bcrypt directly (not passlib) and python-jose for tokens.
"""

from datetime import UTC, datetime, timedelta

import bcrypt
from jose import JWTError, jwt

from src.config import Settings, get_settings


class InvalidTokenError(Exception):
    """Raised when a token is malformed, expired or of the wrong type."""


def hash_password(password: str) -> str:
    """Hash a plaintext password using bcrypt."""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, hashed: str | None) -> bool:
    """Verify a plaintext password against its bcrypt hash."""
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(
    user_id: str,
    *,
    settings: Settings | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed access token for a user."""
    settings = settings or get_settings()
    now = datetime.now(UTC)
    expire = now + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims = {"sub": user_id, "iat": now, "exp": expire, "type": "access"}
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, *, settings: Settings | None = None) -> str:
    """Validate an access token.

    Returns:
        The user id carried in the ``sub`` claim

    Raises:
        InvalidTokenError: If the token is invalid, expired or not an access token
    """
    settings = settings or get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as e:
        raise InvalidTokenError(str(e)) from e

    if payload.get("type") != "access" or not payload.get("sub"):
        raise InvalidTokenError("Not an access token")
    return payload["sub"]
