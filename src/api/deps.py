"""Shared FastAPI dependencies: app-state services and the current user."""

import structlog
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.auth.security import InvalidTokenError, decode_access_token
from src.mail.dispatcher import MinuteNotifier
from src.models.user import User
from src.repositories import Repositories

logger = structlog.get_logger()

bearer_scheme = HTTPBearer(auto_error=False)


def get_repositories(request: Request) -> Repositories:
    """Get Repositories from app state."""
    if not hasattr(request.app.state, "repos"):
        raise HTTPException(status_code=500, detail="Repositories not initialized")
    return request.app.state.repos


def get_notifier(request: Request) -> MinuteNotifier:
    """Get MinuteNotifier from app state."""
    if not hasattr(request.app.state, "notifier"):
        raise HTTPException(status_code=500, detail="Notifier not initialized")
    return request.app.state.notifier


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    repos: Repositories = Depends(get_repositories),
) -> User:
    """Authenticate the request from its bearer token.

    Raises:
        HTTPException: 401 without a valid token, 403 if the user is gone
            or deactivated
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        user_id = decode_access_token(credentials.credentials)
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await repos.users.get(user_id)
    if user is None or not user.is_active:
        logger.warning("Rejected token for unknown or inactive user", user_id=user_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """Allow only admins."""
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return user
