"""Notification delivery settings (email, Slack, Discord).

Environment variables use NOTIFY_ prefix.
Example: NOTIFY_SLACK_WEBHOOK_URL=https://hooks.slack.com/..., NOTIFY_EMAIL_BACKEND=sendgrid
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import EmailStr, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_sources import create_notify_yaml_source

EmailBackend = Literal["sendgrid", "smtp", "console"]


class NotificationSettings(BaseSettings):
    """Outbound notification configuration.

    A channel without configuration is skipped at send time; it is never an
    error to leave Slack, Discord or email unconfigured.
    """

    # Chat webhooks
    slack_webhook_url: str | None = Field(
        default=None,
        description="Slack incoming webhook URL. Unset disables Slack notifications.",
    )
    discord_webhook_url: str | None = Field(
        default=None,
        description="Discord webhook URL. Unset disables Discord notifications.",
    )
    webhook_timeout: float = Field(
        default=10.0,
        gt=0.0,
        le=120.0,
        description="Timeout for Slack/Discord webhook requests (seconds)",
    )

    # Email
    email_enabled: bool = Field(
        default=False,
        description="Enable subscriber emails (verification, status changes, incidents)",
    )
    email_backend: EmailBackend = Field(
        default="sendgrid",
        description="Email backend: sendgrid (API v3), smtp, console (log only)",
    )
    from_email: EmailStr = Field(
        default="status@covaera.com",
        description="Sender address for subscriber emails",
    )
    from_name: str = Field(
        default="Covaera Status",
        max_length=100,
        description="Sender display name",
    )
    email_timeout: float = Field(default=30.0, ge=1.0, le=300.0)

    # SendGrid
    sendgrid_api_key: SecretStr | None = Field(default=None, description="SendGrid API key")
    sendgrid_api_url: str = Field(default="https://api.sendgrid.com/v3")

    # SMTP
    smtp_host: str = Field(default="localhost", min_length=1, max_length=255)
    smtp_port: int = Field(default=587, ge=1, le=65535)
    smtp_username: str | None = Field(default=None)
    smtp_password: SecretStr | None = Field(default=None)
    smtp_use_tls: bool = Field(default=True, description="Use STARTTLS")
    smtp_use_ssl: bool = Field(default=False, description="Use implicit TLS")

    @model_validator(mode="after")
    def validate_tls_mode(self) -> NotificationSettings:
        """STARTTLS and implicit TLS are mutually exclusive."""
        if self.smtp_use_tls and self.smtp_use_ssl:
            msg = "smtp_use_tls and smtp_use_ssl are mutually exclusive"
            raise ValueError(msg)
        return self

    @property
    def email_configured(self) -> bool:
        """Whether emails can actually be delivered with the chosen backend."""
        if not self.email_enabled:
            return False
        if self.email_backend == "sendgrid":
            return self.sendgrid_api_key is not None
        return True

    model_config = SettingsConfigDict(
        env_prefix="NOTIFY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        return (
            init_settings,
            create_notify_yaml_source(settings_cls),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )
