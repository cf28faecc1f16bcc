"""Minute notification dispatcher.

Orchestrates transport selection, recipient resolution, rendering and
submission. Every outcome is returned as a NotificationResult; nothing
raises past ``send_minute_notification``.
"""

from email.message import EmailMessage
from email.utils import make_msgid

import structlog

from src.config import Settings, get_settings
from src.mail.diagnostics import (
    classify_error,
    error_message,
    error_response,
    remediation_hints,
)
from src.mail.recipients import UserEmailLookup, gather_recipient_emails
from src.mail.renderer import build_minute_html
from src.mail.schemas import NotificationResult
from src.mail.transport import TransportSelector, get_selector
from src.models.minute import Minute

logger = structlog.get_logger()

NO_RECIPIENTS = "No recipients"


def build_message(
    minute: Minute,
    recipients: list[str],
    html: str,
    sender: str | None,
    fallback_domain: str = "localhost",
) -> EmailMessage:
    """Build the notification envelope for a minute.

    Args:
        minute: Minute being notified
        recipients: Destination addresses
        html: Rendered body
        sender: From address (EMAIL_FROM or SMTP_USER)
        fallback_domain: Message-ID domain when the sender has none

    Returns:
        EmailMessage with a generated Message-ID
    """
    message = EmailMessage()
    if sender:
        message["From"] = sender
    message["To"] = ", ".join(recipients)
    message["Subject"] = f"Minuta: {minute.title or 'Nueva minuta'}"
    domain = sender.rpartition("@")[2] if sender and "@" in sender else fallback_domain
    message["Message-ID"] = make_msgid(domain=domain)
    message.set_content(html, subtype="html")
    return message


async def send_minute_notification(
    minute: Minute,
    user_lookup: UserEmailLookup | None,
    *,
    selector: TransportSelector | None = None,
    settings: Settings | None = None,
) -> NotificationResult:
    """Email a minute summary to its participants and informed persons.

    Args:
        minute: Minute to notify about
        user_lookup: User store used to resolve participant emails
        selector: Transport selector. Defaults to the process-wide one.
        settings: Settings with EMAIL_FROM/APP_URL. Defaults to app settings.

    Returns:
        NotificationResult; ``reason="No recipients"`` is a soft skip
    """
    settings = settings or get_settings()
    selector = selector or get_selector()

    try:
        transport = await selector.get_transport()

        recipients = await gather_recipient_emails(minute, user_lookup)
        if not recipients:
            logger.info("No recipients for minute", minute_id=minute.id)
            return NotificationResult(success=False, reason=NO_RECIPIENTS)

        html = build_minute_html(minute, settings.app_url)
        message = build_message(
            minute,
            recipients,
            html,
            settings.mail_sender,
            fallback_domain=settings.smtp_host or "localhost",
        )
        info = await transport.send_mail(message)
    except Exception as e:
        code = classify_error(e)
        logger.error(
            "Error sending minute notification",
            minute_id=minute.id,
            code=code,
            error=error_message(e),
            response=error_response(e),
            hints=remediation_hints(code, settings.smtp_host),
        )
        return NotificationResult(
            success=False,
            error=error_message(e),
            code=code,
            response=error_response(e),
        )

    logger.info(
        "Minute notification sent",
        minute_id=minute.id,
        message_id=info.message_id,
        recipients=recipients,
        rejected=info.rejected,
    )
    return NotificationResult(
        success=True,
        message_id=info.message_id,
        recipients=len(recipients),
        response=info.response,
    )


class MinuteNotifier:
    """Binds the dispatcher to a user store for use from API routes."""

    def __init__(
        self,
        user_lookup: UserEmailLookup | None,
        *,
        selector: TransportSelector | None = None,
        settings: Settings | None = None,
    ):
        self._user_lookup = user_lookup
        self._selector = selector
        self._settings = settings

    async def notify(self, minute: Minute) -> NotificationResult:
        """Send the notification for a minute and return the outcome."""
        return await send_minute_notification(
            minute,
            self._user_lookup,
            selector=self._selector,
            settings=self._settings,
        )

    async def notify_in_background(self, minute: Minute) -> None:
        """Fire-and-forget variant: log the outcome and discard it."""
        result = await self.notify(minute)
        logger.info(
            "Minute notification finished",
            minute_id=minute.id,
            success=result.success,
            reason=result.reason,
            code=result.code,
        )
