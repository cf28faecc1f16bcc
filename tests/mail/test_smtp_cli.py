"""Tests for the smtp-diagnose command."""

from unittest.mock import AsyncMock

import aiosmtplib
import pytest

from src.config import Settings
from src.mail import cli
from src.mail.schemas import SendInfo


@pytest.fixture
def settings(monkeypatch) -> Settings:
    configured = Settings(
        _env_file=None,
        smtp_host="smtp.example.com",
        smtp_port=587,
        smtp_user="bot@example.com",
        smtp_pass="secret",
    )
    monkeypatch.setattr(cli, "get_settings", lambda: configured)
    return configured


class FakeTransport:
    """SmtpTransport double shared by all instances of a test."""

    verify = AsyncMock()
    send_mail = AsyncMock()

    def __init__(self, config):
        self.config = config


@pytest.fixture
def fake_transport(monkeypatch):
    FakeTransport.verify = AsyncMock()
    FakeTransport.send_mail = AsyncMock(
        return_value=SendInfo(message_id="<id@example.com>", accepted=["bot@example.com"])
    )
    monkeypatch.setattr(cli, "SmtpTransport", FakeTransport)
    return FakeTransport


class TestBuildParser:
    """Tests for argument parsing."""

    def test_defaults_come_from_settings(self, settings):
        args = cli.build_parser().parse_args([])

        assert args.host == "smtp.example.com"
        assert args.port == 587
        assert args.secure is False
        assert args.user == "bot@example.com"
        assert args.timeout == 20.0
        assert args.verify_only is False

    def test_overrides(self, settings):
        args = cli.build_parser().parse_args(
            ["--host", "mail.test", "--port", "465", "--secure", "--to", "me@test"]
        )

        assert args.host == "mail.test"
        assert args.port == 465
        assert args.secure is True
        assert args.to == "me@test"


class TestMain:
    """Tests for the diagnostic flow."""

    def test_success_sends_to_self(self, settings, fake_transport, capsys):
        exit_code = cli.main([])

        assert exit_code == 0
        fake_transport.verify.assert_awaited_once()
        message = fake_transport.send_mail.call_args.args[0]
        assert message["To"] == "bot@example.com"
        output = capsys.readouterr().out
        assert "***hidden***" in output
        assert "secret" not in output
        assert "All tests passed" in output

    def test_verify_only_does_not_send(self, settings, fake_transport):
        assert cli.main(["--verify-only"]) == 0
        fake_transport.send_mail.assert_not_called()

    def test_auth_failure_prints_hints(self, settings, fake_transport, capsys):
        fake_transport.verify.side_effect = aiosmtplib.SMTPAuthenticationError(
            535, "Authentication failed"
        )

        assert cli.main([]) == 1

        output = capsys.readouterr().out
        assert "code: EAUTH" in output
        assert "Authentication error - possible solutions:" in output
        assert "1. " in output

    def test_missing_password(self, monkeypatch, fake_transport, capsys):
        monkeypatch.setattr(
            cli,
            "get_settings",
            lambda: Settings(_env_file=None, smtp_host="smtp.example.com"),
        )

        assert cli.main([]) == 1
        assert "SMTP_PASS" in capsys.readouterr().out
        fake_transport.verify.assert_not_called()
