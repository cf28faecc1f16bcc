"""Health check endpoints for monitoring and orchestration."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from src.config import Settings, get_settings

router = APIRouter(prefix="/health", tags=["health"])

# Checks that must pass for the app to be ready; others are informational
REQUIRED_CHECKS = ("api", "database")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    timestamp: datetime
    version: str
    environment: str


class LivenessResponse(BaseModel):
    """Response model for liveness probe."""

    status: str


class ReadinessResponse(BaseModel):
    """Response model for readiness probe."""

    status: str
    checks: dict[str, str]


@router.get("/", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC),
        version=settings.app_version,
        environment=settings.app_env,
    )


@router.get("/live", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    """Liveness probe - app is running."""
    return LivenessResponse(status="alive")


@router.get("/ready", response_model=ReadinessResponse)
async def readiness(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> ReadinessResponse:
    """Readiness probe - app can serve traffic.

    Checks:
    - Database is connected and healthy
    - SMTP host is configured (reported, does not affect readiness)
    """
    checks: dict[str, str] = {"api": "ok"}

    db = getattr(request.app.state, "db", None)
    if db:
        checks["database"] = "ok" if await db.is_healthy() else "failed"
    else:
        checks["database"] = "not_configured"

    checks["smtp"] = "ok" if settings.smtp_host else "not_configured"

    ready = all(checks[name] == "ok" for name in REQUIRED_CHECKS)
    return ReadinessResponse(status="ready" if ready else "not_ready", checks=checks)
