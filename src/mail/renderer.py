"""Jinja2-based HTML renderer for minute notification emails."""

from datetime import UTC, datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from src.mail.schemas import SmtpConfig
from src.models.minute import Minute

TEMPLATE_DIR = Path(__file__).parent / "templates"


def minute_url(minute_id: str, app_url: str | None = None) -> str:
    """Link to a minute in the dashboard.

    Falls back to a hash route when no application URL is configured.
    """
    if app_url:
        return f"{app_url.rstrip('/')}/minutes/{minute_id}"
    return f"#/minutes/{minute_id}"


class MinuteEmailRenderer:
    """Render notification emails from Jinja2 templates.

    Rendering is pure: the output depends only on the minute and the
    application URL passed in.
    """

    def __init__(self, template_dir: str | Path = TEMPLATE_DIR):
        """Initialize renderer with template directory.

        Args:
            template_dir: Path to directory containing .html.j2 templates.
        """
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "htm", "html.j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_minute(self, minute: Minute, app_url: str | None = None) -> str:
        """Render the notification body for a minute.

        Args:
            minute: Minute to summarize
            app_url: Base URL of the dashboard, if configured

        Returns:
            HTML document string
        """
        template = self.env.get_template("minute_notification.html.j2")
        return template.render(
            title=minute.title or "Sin título",
            meeting_date=minute.meeting_date,
            meeting_time=minute.meeting_time,
            author=minute.created_by or "",
            minute_url=minute_url(minute.id, app_url),
            topics=minute.all_topics,
            decisions=minute.all_decisions,
            tasks=minute.all_pending_tasks,
        )

    def render_smtp_test(
        self,
        config: SmtpConfig,
        sent_at: datetime | None = None,
    ) -> str:
        """Render the body of a diagnostic test email."""
        template = self.env.get_template("smtp_test.html.j2")
        return template.render(
            host=config.host,
            port=config.port,
            secure=config.secure,
            user=config.user,
            sent_at=(sent_at or datetime.now(UTC)).isoformat(),
        )


_default_renderer = MinuteEmailRenderer()


def build_minute_html(minute: Minute, app_url: str | None = None) -> str:
    """Render a minute notification with the packaged template."""
    return _default_renderer.render_minute(minute, app_url)
