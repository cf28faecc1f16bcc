"""Error classification and remediation hints for SMTP failures.

SMTP failures are mapped to short codes (``EAUTH``, ``ETIMEDOUT``, ...)
so logs, API results and the diagnostic CLI describe the same problem
the same way.
"""

import asyncio
import ssl

import aiosmtplib
import structlog

from src.mail.schemas import PortProbeResult, SmtpConfig

logger = structlog.get_logger()

EAUTH = "EAUTH"
ETIMEDOUT = "ETIMEDOUT"
ECONNECTION = "ECONNECTION"
ETLS = "ETLS"
EENVELOPE = "EENVELOPE"
EPROTOCOL = "EPROTOCOL"
ECONFIG = "ECONFIG"


class MailTransportError(Exception):
    """A mail failure already tagged with its error code."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        response: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.response = response


def classify_error(exc: BaseException) -> str | None:
    """Map an exception raised while talking SMTP to an error code.

    Returns:
        One of the E* codes, or None for errors with no known category
    """
    code = getattr(exc, "code", None)
    if isinstance(code, str) and code:
        return code

    # Order matters: timeouts and TLS errors are OSErrors too.
    if isinstance(exc, aiosmtplib.SMTPAuthenticationError):
        return EAUTH
    if isinstance(exc, (aiosmtplib.SMTPTimeoutError, TimeoutError)):
        return ETIMEDOUT
    if isinstance(exc, ssl.SSLError):
        return ETLS
    if isinstance(exc, (aiosmtplib.SMTPRecipientsRefused, aiosmtplib.SMTPSenderRefused)):
        return EENVELOPE
    if isinstance(
        exc,
        (aiosmtplib.SMTPConnectError, aiosmtplib.SMTPServerDisconnected, OSError),
    ):
        return ECONNECTION
    if isinstance(exc, aiosmtplib.SMTPResponseException):
        return EPROTOCOL
    return None


def error_message(exc: BaseException) -> str:
    """Human readable message of an SMTP exception."""
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or type(exc).__name__


def error_response(exc: BaseException) -> str | None:
    """Server response carried by an exception, if any."""
    if isinstance(exc, MailTransportError):
        return exc.response
    if isinstance(exc, aiosmtplib.SMTPResponseException):
        return f"{exc.code} {exc.message}"
    return None


_GENERIC_HINTS: dict[str, list[str]] = {
    EAUTH: [
        "Check that SMTP_USER is the full mailbox address",
        "Use an app-specific password instead of the regular password",
        "If the account has 2FA, generate an app password",
        "Check that the account is not locked by the email provider",
    ],
    ETIMEDOUT: [
        "Try port 465 with SMTP_SECURE=true",
        "Check that no firewall blocks outgoing SMTP ports",
        "Verify SMTP_HOST is correct: {host}",
    ],
    ECONNECTION: [
        "Verify SMTP_HOST ({host}) and SMTP_PORT",
        "Check that the server accepts connections from this network",
    ],
    ETLS: [
        "Port 465 expects SMTP_SECURE=true; port 587 expects SMTP_SECURE=false",
        "Check that the server certificate matches {host}",
    ],
    ECONFIG: [
        "Set SMTP_HOST, SMTP_USER and SMTP_PASS in the environment or .env",
    ],
}

_PROVIDER_HINTS: dict[str, dict[str, list[str]]] = {
    "titan.email": {
        EAUTH: ["Enable SMTP access in the Titan/GoDaddy email settings"],
    },
    "gmail.com": {
        EAUTH: ["Gmail only accepts app passwords when 2-step verification is on"],
    },
    "office365.com": {
        EAUTH: ["Enable SMTP AUTH for the mailbox in the Microsoft 365 admin center"],
    },
}


def remediation_hints(code: str | None, host: str | None = None) -> list[str]:
    """Steps likely to fix a failure with the given code.

    Args:
        code: Error code from classify_error
        host: SMTP host, used for provider-specific advice

    Returns:
        List of hints, empty for unknown codes
    """
    if code is None:
        return []
    shown_host = host or "(not set)"
    hints = [hint.format(host=shown_host) for hint in _GENERIC_HINTS.get(code, [])]
    if host:
        for domain, provider_hints in _PROVIDER_HINTS.items():
            if host.lower().endswith(domain):
                hints.extend(provider_hints.get(code, []))
    return hints


def log_smtp_failure(event: str, exc: BaseException, config: SmtpConfig) -> str | None:
    """Log an SMTP failure with host context and remediation hints.

    Returns:
        The classified error code
    """
    code = classify_error(exc)
    logger.error(
        event,
        code=code,
        error=error_message(exc),
        response=error_response(exc),
        host=config.host,
        port=config.port,
        secure=config.secure,
        hints=remediation_hints(code, config.host),
    )
    return code


async def probe_smtp_port(host: str, port: int, timeout: float = 10.0) -> PortProbeResult:
    """Check that a TCP connection to the SMTP server can be opened.

    Args:
        host: SMTP host
        port: SMTP port
        timeout: Seconds to wait for the connection

    Returns:
        PortProbeResult with status ok, timeout or error
    """
    try:
        _, writer = await asyncio.wait_for(
            asyncio.open_connection(host, port),
            timeout=timeout,
        )
    except TimeoutError:
        return PortProbeResult(
            status="timeout",
            info=f"No response within {int(timeout * 1000)}ms",
        )
    except OSError as e:
        return PortProbeResult(status="error", info=str(e))

    writer.close()
    return PortProbeResult(status="ok", info=f"Connected to {host}:{port}")
