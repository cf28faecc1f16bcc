"""SMTP transport and the process-wide transport selector.

Providers disagree on whether port 587 (STARTTLS) or 465 (implicit TLS)
works, so the selector tries both and keeps the first one that verifies.
When none verifies it still hands back a transport built from the raw
environment values: a later send may succeed, and if not, it fails with
a diagnosable error instead of no attempt at all.
"""

from collections.abc import Callable
from email.message import EmailMessage
from email.utils import getaddresses

import aiosmtplib
import structlog

from src.config import Settings, get_settings
from src.mail.diagnostics import ECONFIG, MailTransportError, log_smtp_failure
from src.mail.schemas import SendInfo, SmtpConfig, SmtpProfile

logger = structlog.get_logger()

CANDIDATE_PROFILES: tuple[SmtpProfile, ...] = (
    SmtpProfile(port=587, secure=False),
    SmtpProfile(port=465, secure=True),
)


class SmtpTransport:
    """Sends messages through one SMTP configuration.

    Every operation opens its own session; nothing is kept open between
    sends.
    """

    def __init__(self, config: SmtpConfig):
        """Initialize transport with its SMTP configuration.

        Args:
            config: Host, port, TLS mode, credentials and timeout
        """
        self.config = config

    def _client(self) -> aiosmtplib.SMTP:
        if not self.config.host:
            raise MailTransportError("SMTP host is not configured", code=ECONFIG)
        return aiosmtplib.SMTP(
            hostname=self.config.host,
            port=self.config.port,
            use_tls=self.config.secure,
            # None lets aiosmtplib upgrade with STARTTLS when offered
            start_tls=False if self.config.secure else None,
            timeout=self.config.timeout,
        )

    async def _login(self, smtp: aiosmtplib.SMTP) -> None:
        if self.config.user:
            await smtp.login(self.config.user, self.config.password or "")

    async def verify(self) -> None:
        """Connect, complete the greeting and authenticate.

        Raises:
            MailTransportError: If the configuration is incomplete
            aiosmtplib.SMTPException: On connection, TLS or auth failures
        """
        async with self._client() as smtp:
            await self._login(smtp)

    async def send_mail(self, message: EmailMessage) -> SendInfo:
        """Submit a message.

        Args:
            message: Fully built message with From/To/Subject headers

        Returns:
            SendInfo with message id and accepted/rejected recipients
        """
        async with self._client() as smtp:
            await self._login(smtp)
            errors, response = await smtp.send_message(message)

        addresses = [
            address
            for _, address in getaddresses(message.get_all("To", []))
            if address
        ]
        return SendInfo(
            message_id=message["Message-ID"],
            accepted=[a for a in addresses if a not in errors],
            rejected=list(errors),
            response=response,
        )


TransportFactory = Callable[[SmtpConfig], SmtpTransport]


class TransportSelector:
    """Lazily picks a working SMTP transport and reuses it.

    Candidates are tried in order; the first whose ``verify`` succeeds is
    kept for the rest of the process. ``get_transport`` never raises and
    never returns None.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport_factory: TransportFactory = SmtpTransport,
        candidates: tuple[SmtpProfile, ...] = CANDIDATE_PROFILES,
        timeout: float | None = None,
    ):
        """Initialize selector.

        Args:
            settings: Settings providing SMTP_* values. Defaults to app settings.
            transport_factory: Builds a transport from a config
            candidates: Port/TLS profiles to try, in order
            timeout: Connect/greeting/socket timeout. Defaults to settings.
        """
        self._settings = settings or get_settings()
        self._factory = transport_factory
        self._candidates = candidates
        self._timeout = timeout or self._settings.smtp_timeout_seconds
        self._transport: SmtpTransport | None = None
        self._initialized = False

    @property
    def initialized(self) -> bool:
        """Whether a transport has been selected."""
        return self._initialized

    def raw_config(self) -> SmtpConfig:
        """Config exactly as given by the environment."""
        return SmtpConfig(
            host=self._settings.smtp_host,
            port=self._settings.smtp_port,
            secure=self._settings.smtp_secure,
            user=self._settings.smtp_user,
            password=self._settings.smtp_pass,
            timeout=self._timeout,
        )

    def candidate_configs(self) -> list[SmtpConfig]:
        """Raw config with each candidate port/TLS profile applied."""
        raw = self.raw_config()
        return [
            raw.model_copy(update={"port": profile.port, "secure": profile.secure})
            for profile in self._candidates
        ]

    async def get_transport(self) -> SmtpTransport:
        """Return the selected transport, selecting it on first use."""
        if not self._initialized or self._transport is None:
            self._transport = await self._select()
            self._initialized = True
        return self._transport

    def reset(self) -> None:
        """Forget the selected transport; the next call selects again."""
        self._transport = None
        self._initialized = False

    async def _select(self) -> SmtpTransport:
        raw = self.raw_config()
        if not raw.host:
            logger.error("SMTP host not configured", hints=["Set SMTP_HOST"])
        elif not raw.user or not raw.password:
            logger.warning(
                "SMTP credentials incomplete",
                host=raw.host,
                user=raw.user,
                has_password=bool(raw.password),
            )

        for config in self.candidate_configs():
            transport = self._factory(config)
            try:
                await transport.verify()
            except Exception as e:
                log_smtp_failure("SMTP candidate failed verification", e, config)
                continue
            logger.info(
                "SMTP transport verified",
                host=config.host,
                port=config.port,
                secure=config.secure,
            )
            return transport

        logger.warning(
            "No SMTP candidate verified, using unverified transport from environment",
            host=raw.host,
            port=raw.port,
            secure=raw.secure,
        )
        return self._factory(raw)


# Process-wide selector (created on first use)
_selector: TransportSelector | None = None


def get_selector() -> TransportSelector:
    """Get the process-wide transport selector."""
    global _selector
    if _selector is None:
        _selector = TransportSelector()
    return _selector


async def get_transport() -> SmtpTransport:
    """Get the process-wide SMTP transport, selecting it on first use."""
    return await get_selector().get_transport()


def reset_transport() -> None:
    """Drop the process-wide selector and its transport."""
    global _selector
    _selector = None
