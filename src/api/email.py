"""Mail diagnostic endpoints: test notification and SMTP port check."""

from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from pydantic import Field

from src.api.deps import get_notifier, require_admin
from src.config import Settings, get_settings
from src.mail.diagnostics import probe_smtp_port
from src.mail.dispatcher import MinuteNotifier
from src.mail.schemas import PortProbeResult
from src.models.base import ApiModel
from src.models.minute import Minute, MinuteItem, OccasionalParticipant, Task
from src.models.user import User

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["email"])


class EmailTestRequest(ApiModel):
    """Addresses that should receive the test notification."""

    recipients: list[str] = Field(default_factory=list)


def build_test_minute(recipients: list[str], now: datetime | None = None) -> Minute:
    """Synthetic minute sent by the test-email endpoint.

    Recipients are attached as occasional participants so they go
    through the same resolution as a real minute.
    """
    now = now or datetime.now(UTC)
    return Minute(
        id=f"test-{int(now.timestamp() * 1000)}",
        title="Prueba de email desde backend",
        meeting_date=now.strftime("%Y-%m-%d"),
        meeting_time=now.strftime("%H:%M:%S"),
        created_by="Sistema",
        topics_discussed=[MinuteItem(text="Tema de prueba")],
        decisions=[MinuteItem(text="Decisión de prueba")],
        pending_tasks=[Task(text="Tarea de prueba")],
        occasional_participants=[
            OccasionalParticipant(email=address) for address in recipients
        ],
    )


@router.post("/test-email")
async def trigger_test_email(
    payload: EmailTestRequest,
    background_tasks: BackgroundTasks,
    admin: User = Depends(require_admin),
    notifier: MinuteNotifier = Depends(get_notifier),
) -> dict[str, str]:
    """Send a notification for a synthetic minute without waiting for it."""
    minute = build_test_minute(payload.recipients)
    background_tasks.add_task(notifier.notify_in_background, minute)
    logger.info(
        "Test email scheduled",
        minute_id=minute.id,
        recipients=len(payload.recipients),
        requested_by=admin.id,
    )
    return {"message": "Test email triggered"}


@router.get("/smtp-check", response_model=PortProbeResult)
async def smtp_check(
    admin: User = Depends(require_admin),
    settings: Settings = Depends(get_settings),
) -> PortProbeResult:
    """Check TCP reachability of the configured SMTP server.

    Raises:
        HTTPException: 400 if SMTP_HOST is not configured
    """
    if not settings.smtp_host:
        raise HTTPException(status_code=400, detail="SMTP_HOST not configured")
    return await probe_smtp_port(
        settings.smtp_host,
        settings.smtp_port,
        timeout=settings.smtp_check_timeout_seconds,
    )
