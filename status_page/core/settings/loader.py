"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the
process. Tests clear the caches with ``clear_all_caches()`` or build settings
objects directly:

    settings = AppSettings(environment="test")
"""

from __future__ import annotations

from functools import lru_cache

from .app import AppSettings
from .database import DatabaseSettings
from .logs import LoggingSettings
from .notifications import NotificationSettings
from .platform import PlatformSettings
from .security import SecuritySettings


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()


@lru_cache(maxsize=1)
def get_db_settings() -> DatabaseSettings:
    """Get cached database settings."""
    return DatabaseSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings."""
    return LoggingSettings()


@lru_cache(maxsize=1)
def get_platform_settings() -> PlatformSettings:
    """Get cached settings for the monitored platform."""
    return PlatformSettings()


@lru_cache(maxsize=1)
def get_notification_settings() -> NotificationSettings:
    """Get cached notification channel settings."""
    return NotificationSettings()


@lru_cache(maxsize=1)
def get_security_settings() -> SecuritySettings:
    """Get cached admin/cron authorization settings."""
    return SecuritySettings()


def clear_all_caches() -> None:
    """Clear all settings caches.

    Useful for testing or when you need to force reload settings.
    In production, prefer process restarts over cache clearing.
    """
    get_app_settings.cache_clear()
    get_db_settings.cache_clear()
    get_logging_settings.cache_clear()
    get_platform_settings.cache_clear()
    get_notification_settings.cache_clear()
    get_security_settings.cache_clear()
