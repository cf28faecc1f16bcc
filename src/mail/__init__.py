"""Email notification pipeline for minutes.

- recipients: Resolve the unique addresses to notify
- renderer: Render the HTML body
- transport: Pick a working SMTP configuration and reuse it
- dispatcher: Orchestrate a send and report the outcome
- diagnostics: Error codes, remediation hints and port probing
"""

from src.mail.diagnostics import MailTransportError, classify_error, remediation_hints
from src.mail.dispatcher import MinuteNotifier, send_minute_notification
from src.mail.recipients import UserEmailLookup, gather_recipient_emails
from src.mail.renderer import MinuteEmailRenderer, build_minute_html, minute_url
from src.mail.schemas import NotificationResult, SendInfo, SmtpConfig, SmtpProfile
from src.mail.transport import (
    CANDIDATE_PROFILES,
    SmtpTransport,
    TransportSelector,
    get_selector,
    get_transport,
    reset_transport,
)

__all__ = [
    "CANDIDATE_PROFILES",
    "MailTransportError",
    "MinuteEmailRenderer",
    "MinuteNotifier",
    "NotificationResult",
    "SendInfo",
    "SmtpConfig",
    "SmtpProfile",
    "SmtpTransport",
    "TransportSelector",
    "UserEmailLookup",
    "build_minute_html",
    "classify_error",
    "gather_recipient_emails",
    "get_selector",
    "get_transport",
    "minute_url",
    "remediation_hints",
    "reset_transport",
    "send_minute_notification",
]
