"""Login endpoint issuing bearer tokens."""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import get_repositories
from src.auth.security import create_access_token, verify_password
from src.models.base import ApiModel
from src.models.user import User
from src.repositories import Repositories

logger = structlog.get_logger()

router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginRequest(ApiModel):
    """Credentials posted to the login endpoint."""

    email: str = ""
    password: str = ""


class LoginResponse(ApiModel):
    """Issued token together with the authenticated user."""

    access_token: str
    token_type: str = "bearer"
    user: User


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    repos: Repositories = Depends(get_repositories),
) -> LoginResponse:
    """Exchange email and password for an access token.

    Raises:
        HTTPException: 400 on missing fields, 401 on bad credentials or
            an inactive account
    """
    if not payload.email.strip() or not payload.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    user = await repos.users.get_by_email(payload.email)
    password_hash = await repos.users.get_password_hash(user.id) if user else None
    if user is None or not verify_password(payload.password, password_hash):
        logger.info("Login rejected", email=payload.email)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if not user.is_active:
        raise HTTPException(status_code=401, detail="User is inactive")

    logger.info("User logged in", user_id=user.id)
    return LoginResponse(access_token=create_access_token(user.id), user=user)
