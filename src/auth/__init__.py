"""Authentication primitives and access-control rules."""

from src.auth.access import (
    can_edit_minute,
    can_view_minute,
    visible_minutes,
    visible_projects,
)
from src.auth.security import (
    InvalidTokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

__all__ = [
    "InvalidTokenError",
    "can_edit_minute",
    "can_view_minute",
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "verify_password",
    "visible_minutes",
    "visible_projects",
]
