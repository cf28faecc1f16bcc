"""Standalone SMTP diagnostic: verify credentials and send a test email.

Usage: smtp-diagnose [--host H] [--port P] [--secure] [--to ADDR]

Values default to the SMTP_* environment variables (or .env).
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import datetime
from email.message import EmailMessage
from email.utils import make_msgid

from src.config import get_settings
from src.mail.diagnostics import (
    EAUTH,
    ETIMEDOUT,
    classify_error,
    error_message,
    error_response,
    remediation_hints,
)
from src.mail.renderer import MinuteEmailRenderer
from src.mail.schemas import SmtpConfig
from src.mail.transport import SmtpTransport


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    p = argparse.ArgumentParser(description="Test the SMTP configuration.")
    p.add_argument("--host", default=settings.smtp_host, help="SMTP host (SMTP_HOST)")
    p.add_argument(
        "--port",
        type=int,
        default=settings.smtp_port,
        help="SMTP port (SMTP_PORT, default: 587)",
    )
    p.add_argument(
        "--secure",
        action=argparse.BooleanOptionalAction,
        default=settings.smtp_secure,
        help="Use implicit TLS (SMTP_SECURE)",
    )
    p.add_argument("--user", default=settings.smtp_user, help="SMTP user (SMTP_USER)")
    p.add_argument(
        "--to",
        default=None,
        help="Recipient of the test email (default: the SMTP user)",
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=20.0,
        help="Connect/greeting/socket timeout in seconds (default: 20)",
    )
    p.add_argument(
        "--verify-only",
        action="store_true",
        help="Only verify the connection; do not send the test email",
    )
    return p


def print_failure(exc: BaseException, config: SmtpConfig) -> None:
    """Print a failure with remediation steps for known error codes."""
    code = classify_error(exc)
    print("SMTP test failed:")
    print(f"  code: {code}")
    print(f"  response: {error_response(exc)}")
    print(f"  message: {error_message(exc)}")

    if code == EAUTH:
        print("\nAuthentication error - possible solutions:")
    elif code == ETIMEDOUT:
        print("\nConnection timeout - possible solutions:")
    else:
        return
    for index, hint in enumerate(remediation_hints(code, config.host), start=1):
        print(f"{index}. {hint}")


async def run(args: argparse.Namespace) -> int:
    """Run the diagnostic and return the process exit code."""
    settings = get_settings()
    config = SmtpConfig(
        host=args.host,
        port=args.port,
        secure=args.secure,
        user=args.user,
        password=settings.smtp_pass,
        timeout=args.timeout,
    )

    print("Testing SMTP configuration...")
    print(f"Config: {config.masked()}")

    if not config.host or not config.password:
        print("Please set SMTP_HOST and SMTP_PASS (environment or .env)")
        return 1

    transport = SmtpTransport(config)
    try:
        print("\nStep 1: testing connection...")
        await transport.verify()
        print("SMTP connection successful!")

        if args.verify_only:
            return 0

        print("\nStep 2: sending test email...")
        sender = settings.email_from or config.user
        message = EmailMessage()
        if sender:
            message["From"] = sender
        message["To"] = args.to or config.user or ""
        message["Subject"] = f"SMTP Test - {datetime.now():%Y-%m-%d %H:%M:%S}"
        message["Message-ID"] = make_msgid(domain=config.host)
        message.set_content(
            MinuteEmailRenderer().render_smtp_test(config),
            subtype="html",
        )
        info = await transport.send_mail(message)
        print("Test email sent successfully!")
        print(f"Message ID: {info.message_id}")
        print(f"Accepted: {info.accepted}")
        print(f"Rejected: {info.rejected}")
    except Exception as e:
        print_failure(e, config)
        return 1

    print("\nAll tests passed! The SMTP configuration is working.")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
