"""Application configuration using pydantic-settings pattern."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Minutes Manager"
    app_version: str = "0.1.0"
    app_env: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Database (libSQL / Turso)
    database_url: str | None = Field(default=None)
    database_auth_token: str | None = Field(default=None)

    # Auth
    jwt_secret: str = Field(default="secret")
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=60 * 12, ge=1)

    # Mail (names match the SMTP_* / EMAIL_FROM / APP_URL env vars)
    smtp_host: str | None = Field(default=None)
    smtp_port: int = Field(default=587)
    smtp_secure: bool = Field(default=False)
    smtp_user: str | None = Field(default=None)
    smtp_pass: str | None = Field(default=None)
    email_from: str | None = Field(default=None)
    app_url: str | None = Field(default=None)
    smtp_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Connect/greeting/socket timeout for SMTP operations",
    )
    smtp_check_timeout_seconds: float = Field(default=10.0, gt=0)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def mail_sender(self) -> str | None:
        """Address used in the From header."""
        return self.email_from or self.smtp_user


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
