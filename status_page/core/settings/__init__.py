"""Modular Pydantic Settings v2 configuration.

Settings are split by domain (app/db/logging/platform/notify/auth), each read
from environment variables with its own prefix, with optional YAML/conf.d
files for local development.

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. YAML/conf.d files (optional, local/dev)
    3. Environment variables (production)
    4. .env file (development only)
    5. secrets_dir (Kubernetes/Docker secrets)
"""

from __future__ import annotations

from .app import AppSettings
from .database import DatabaseSettings
from .loader import (
    clear_all_caches,
    get_app_settings,
    get_db_settings,
    get_logging_settings,
    get_notification_settings,
    get_platform_settings,
    get_security_settings,
)
from .logs import LoggingSettings
from .notifications import NotificationSettings
from .platform import PlatformSettings
from .security import SecuritySettings

__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "LoggingSettings",
    "NotificationSettings",
    "PlatformSettings",
    "SecuritySettings",
    "clear_all_caches",
    "get_app_settings",
    "get_db_settings",
    "get_logging_settings",
    "get_notification_settings",
    "get_platform_settings",
    "get_security_settings",
]
