"""Authorization settings for admin endpoints and the scheduled trigger."""

from __future__ import annotations

from typing import Any

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_sources import create_auth_yaml_source


class SecuritySettings(BaseSettings):
    """Shared secrets guarding write and trigger endpoints.

    Environment variables use AUTH_ prefix.

    Example:
        AUTH_CRON_SECRET=s3cret
        AUTH_ADMIN_API_KEYS='{"ops@example.com": "key-1"}'
    """

    cron_secret: SecretStr | None = Field(
        default=None,
        description=(
            "Bearer token required by /api/cron/check. When unset the endpoint "
            "is open, which is only intended for local development."
        ),
    )
    admin_api_keys: dict[str, SecretStr] = Field(
        default_factory=dict,
        description="Mapping of admin email to API key accepted in the X-API-Key header",
    )

    @field_validator("admin_api_keys")
    @classmethod
    def normalize_emails(cls, v: dict[str, SecretStr]) -> dict[str, SecretStr]:
        """Admin identities are compared case-insensitively."""
        return {email.strip().lower(): key for email, key in v.items()}

    @property
    def admin_emails(self) -> list[str]:
        return sorted(self.admin_api_keys)

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
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
            create_auth_yaml_source(settings_cls),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )
