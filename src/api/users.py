"""User management and password endpoints."""

from typing import Any

import structlog
from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import EmailStr, Field

from src.api.crud import apply_update
from src.api.deps import get_current_user, get_repositories, require_admin
from src.auth.security import hash_password, verify_password
from src.models.base import ApiModel
from src.models.user import User, UserRole
from src.repositories import Repositories

logger = structlog.get_logger()

router = APIRouter(prefix="/api/users", tags=["users"])

# Fields only an admin may change, even on their own account
ADMIN_ONLY_FIELDS = {"role", "is_active", "project_ids", "has_limited_access"}


class UserCreate(ApiModel):
    """Request body for creating a user."""

    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(min_length=1)
    role: UserRole = UserRole.USER
    is_active: bool = True
    project_ids: list[str] = Field(default_factory=list)
    has_limited_access: bool = False


class ChangePasswordRequest(ApiModel):
    """Request body for a user changing their own password."""

    current_password: str = ""
    new_password: str = ""


class AdminChangePasswordRequest(ApiModel):
    """Request body for an admin resetting someone's password."""

    new_password: str = ""


def _touched_fields(payload: dict[str, Any]) -> set[str]:
    aliases = {f.alias: name for name, f in User.model_fields.items() if f.alias}
    return {aliases.get(key, key) for key in payload}


@router.get("", response_model=list[User])
async def list_users(
    user: User = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
) -> list[User]:
    """List all users."""
    return await repos.users.list_all()


@router.get("/{user_id}", response_model=User)
async def get_user(
    user_id: str,
    user: User = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
) -> User:
    """Get a user by id."""
    found = await repos.users.get(user_id)
    if found is None:
        raise HTTPException(status_code=404, detail="User not found")
    return found


@router.post("", response_model=User)
async def create_user(
    payload: UserCreate,
    admin: User = Depends(require_admin),
    repos: Repositories = Depends(get_repositories),
) -> User:
    """Create a user (admin only).

    Raises:
        HTTPException: 400 if the email is already registered
    """
    if await repos.users.get_by_email(payload.email) is not None:
        raise HTTPException(status_code=400, detail="Email already registered")

    user = User.model_validate(payload.model_dump(exclude={"password"}))
    await repos.users.create_with_password(user, hash_password(payload.password))
    logger.info("User created", user_id=user.id, created_by=admin.id)
    return user


@router.put("/{user_id}", response_model=User)
async def update_user(
    user_id: str,
    payload: dict[str, Any] = Body(...),
    current: User = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
) -> User:
    """Update a user.

    Admins may update anyone; other users only themselves and never
    their role, status or project assignments.
    """
    if not current.is_admin:
        if current.id != user_id:
            raise HTTPException(status_code=403, detail="Not authorized")
        if _touched_fields(payload) & ADMIN_ONLY_FIELDS:
            raise HTTPException(
                status_code=403,
                detail="Only admins can change role, status or projects",
            )

    existing = await repos.users.get(user_id)
    if existing is None:
        raise HTTPException(status_code=404, detail="User not found")

    updated = apply_update(existing, payload)
    if updated.email.lower() != existing.email.lower():
        other = await repos.users.get_by_email(updated.email)
        if other is not None and other.id != user_id:
            raise HTTPException(status_code=400, detail="Email already registered")

    saved = await repos.users.update(updated)
    if saved is None:
        raise HTTPException(status_code=404, detail="User not found")
    return saved


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    admin: User = Depends(require_admin),
    repos: Repositories = Depends(get_repositories),
) -> dict[str, str]:
    """Delete a user (admin only)."""
    if not await repos.users.delete(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    logger.info("User deleted", user_id=user_id, deleted_by=admin.id)
    return {"message": "User deleted"}


@router.post("/change-password")
async def change_password(
    payload: ChangePasswordRequest,
    current: User = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
) -> dict[str, str]:
    """Change the caller's own password.

    Raises:
        HTTPException: 400 on missing fields or a wrong current password
    """
    if not payload.current_password or not payload.new_password:
        raise HTTPException(
            status_code=400,
            detail="Current and new password are required",
        )
    stored = await repos.users.get_password_hash(current.id)
    if not verify_password(payload.current_password, stored):
        raise HTTPException(status_code=400, detail="Current password is incorrect")

    await repos.users.set_password_hash(current.id, hash_password(payload.new_password))
    logger.info("Password changed", user_id=current.id)
    return {"message": "Password updated"}


@router.post("/{user_id}/admin-change-password")
async def admin_change_password(
    user_id: str,
    payload: AdminChangePasswordRequest,
    admin: User = Depends(require_admin),
    repos: Repositories = Depends(get_repositories),
) -> dict[str, str]:
    """Set another user's password (admin only)."""
    if not payload.new_password:
        raise HTTPException(status_code=400, detail="New password is required")
    password_hash = hash_password(payload.new_password)
    if not await repos.users.set_password_hash(user_id, password_hash):
        raise HTTPException(status_code=404, detail="User not found")
    logger.info("Password reset by admin", user_id=user_id, admin_id=admin.id)
    return {"message": "Password updated"}
