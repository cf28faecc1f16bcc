"""Schemas for the mail notification pipeline."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from src.models.base import ApiModel


class SmtpProfile(BaseModel):
    """Port/TLS combination tried by the transport selector."""

    model_config = ConfigDict(frozen=True)

    port: int
    secure: bool = Field(description="Implicit TLS from the first byte")


class SmtpConfig(BaseModel):
    """Everything needed to open an SMTP session."""

    host: str | None = None
    port: int = 587
    secure: bool = False
    user: str | None = None
    password: str | None = Field(default=None, repr=False)
    timeout: float = Field(default=30.0, gt=0)

    def masked(self) -> dict:
        """Config as a dict safe for logs and console output."""
        return {
            "host": self.host,
            "port": self.port,
            "secure": self.secure,
            "user": self.user,
            "pass": "***hidden***" if self.password else "NOT SET",
            "timeout": self.timeout,
        }


class SendInfo(BaseModel):
    """Outcome of a message accepted by the SMTP server."""

    message_id: str | None = None
    accepted: list[str] = Field(default_factory=list)
    rejected: list[str] = Field(default_factory=list)
    response: str | None = None


class NotificationResult(ApiModel):
    """Result of dispatching a minute notification.

    ``reason`` marks soft outcomes (no recipients) that are not errors;
    ``error``/``code``/``response`` carry diagnostics of failed sends.
    """

    success: bool
    message_id: str | None = None
    recipients: int | None = Field(default=None, description="Number of recipients")
    reason: str | None = None
    error: str | None = None
    code: str | None = None
    response: str | None = None


class PortProbeResult(BaseModel):
    """Result of a raw TCP reachability check of the SMTP server."""

    status: Literal["ok", "timeout", "error"]
    info: str
