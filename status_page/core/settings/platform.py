"""Settings for the monitored platform the health checker polls."""

from __future__ import annotations

from typing import Any

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_sources import create_platform_yaml_source


class PlatformSettings(BaseSettings):
    """Upstream platform endpoints and probe behaviour.

    Environment variables use PLATFORM_ prefix.
    Example: PLATFORM_BASE_URL=https://app.example.com, PLATFORM_REQUEST_TIMEOUT=10
    """

    base_url: str = Field(
        default="https://covaera.com",
        description="Base URL of the platform whose components are checked",
    )
    internal_api_key: SecretStr | None = Field(
        default=None,
        description="Sent as X-Internal-API-Key on every probe when set",
    )
    request_timeout: float = Field(
        default=10.0,
        gt=0.0,
        le=120.0,
        description="Per-probe timeout in seconds",
    )
    degraded_threshold_ms: int = Field(
        default=2000,
        ge=1,
        description="Responses slower than this are classified as degraded",
    )
    user_agent: str = Field(
        default="status-page-checker/1.0",
        description="User-Agent header sent with probes",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def probe_headers(self) -> dict[str, str]:
        """Headers attached to every probe request."""
        headers = {"User-Agent": self.user_agent}
        if self.internal_api_key is not None:
            headers["X-Internal-API-Key"] = self.internal_api_key.get_secret_value()
        return headers

    model_config = SettingsConfigDict(
        env_prefix="PLATFORM_",
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
            create_platform_yaml_source(settings_cls),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )
