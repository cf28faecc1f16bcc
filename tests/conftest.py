"""Pytest configuration and fixtures."""

from collections.abc import AsyncIterator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.auth.security import create_access_token, hash_password
from src.db.turso import TursoClient
from src.mail.dispatcher import MinuteNotifier
from src.main import app
from src.models.user import User, UserRole
from src.repositories import Repositories


@pytest.fixture
async def db(tmp_path: Path) -> AsyncIterator[TursoClient]:
    """Create a temp file database client."""
    db_path = tmp_path / "test_minutes.db"
    client = TursoClient(url=f"file:{db_path}")
    await client.connect()
    yield client
    await client.close()


@pytest.fixture
async def repos(db: TursoClient) -> Repositories:
    """Repositories with all tables created."""
    repositories = Repositories(db)
    await repositories.initialize()
    return repositories


@pytest.fixture
def notifier() -> MagicMock:
    """MinuteNotifier double recording scheduled notifications."""
    mock = MagicMock(spec=MinuteNotifier)
    mock.notify = AsyncMock()
    mock.notify_in_background = AsyncMock()
    return mock


@pytest.fixture
async def admin_user(repos: Repositories) -> User:
    user = User(name="Admin", email="admin@example.com", role=UserRole.ADMIN)
    return await repos.users.create_with_password(user, hash_password("admin-pass"))


@pytest.fixture
async def regular_user(repos: Repositories) -> User:
    user = User(name="Ana Maria", email="ana@example.com")
    return await repos.users.create_with_password(user, hash_password("user-pass"))


@pytest.fixture
def admin_headers(admin_user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(admin_user.id)}"}


@pytest.fixture
def user_headers(regular_user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(regular_user.id)}"}


@pytest.fixture
async def client(
    db: TursoClient,
    repos: Repositories,
    notifier: MagicMock,
) -> AsyncIterator[AsyncClient]:
    """Create async test client for FastAPI app with database."""
    app.state.db = db
    app.state.repos = repos
    app.state.notifier = notifier

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Clean up app state
    del app.state.db
    del app.state.repos
    del app.state.notifier
    app.dependency_overrides.clear()
