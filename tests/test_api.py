"""Tests for health endpoints."""

import pytest
from httpx import AsyncClient

from src.config import Settings, get_settings
from src.main import app


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient) -> None:
    """Test basic health check endpoint."""
    response = await client.get("/health/")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "timestamp" in data
    assert data["version"] == "0.1.0"


@pytest.mark.asyncio
async def test_liveness(client: AsyncClient) -> None:
    """Test liveness probe endpoint."""
    response = await client.get("/health/live")
    assert response.status_code == 200
    assert response.json() == {"status": "alive"}

@pytest.mark.asyncio
async def test_readiness(client: AsyncClient) -> None:
    """Database connected means ready, even without SMTP."""
    app.dependency_overrides[get_settings] = lambda: Settings(
        _env_file=None, smtp_host=None
    )
    response = await client.get("/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"] == {
        "api": "ok",
        "database": "ok",
        "smtp": "not_configured",
    }


@pytest.mark.asyncio
async def test_readiness_with_closed_database(client: AsyncClient, db) -> None:
    """A closed database connection makes the app not ready."""
    await db.close()
    response = await client.get("/health/ready")
    data = response.json()
    assert data["status"] == "not_ready"
    assert data["checks"]["database"] == "failed"
