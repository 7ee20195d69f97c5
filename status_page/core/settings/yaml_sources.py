"""Custom YAML config source with conf.d directory support.

Extends pydantic-settings YamlConfigSettingsSource to support:
- Main YAML file (e.g., conf/platform.yaml)
- conf.d directory merging (e.g., conf/platform.d/*.yaml)
- Alphabetical file ordering in conf.d
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic_settings import YamlConfigSettingsSource

if TYPE_CHECKING:
    from pydantic_settings import BaseSettings


class ConfDYamlConfigSettingsSource(YamlConfigSettingsSource):
    """YAML settings source with conf.d directory support.

    Supports the standard Linux conf.d pattern:
    - conf/<name>.yaml        (base configuration)
    - conf/<name>.d/*.yaml    (override files, merged alphabetically)

    The base directory can be overridden per domain through an environment
    variable such as ``PLATFORM_CONFIG_DIR=/etc/status-page``.
    """

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: str = "app.yaml",
        confd_dir: str | None = "app.d",
        config_dir_env: str = "CONFIG_DIR",
        base_dir: str = "conf",
        yaml_file_encoding: str | None = "utf-8",
    ) -> None:
        config_base = Path(os.getenv(config_dir_env, base_dir))

        yaml_files: list[Path] = []

        main_file = config_base / yaml_file
        if main_file.exists():
            yaml_files.append(main_file)

        if confd_dir:
            confd_path = config_base / confd_dir
            if confd_path.is_dir():
                yaml_files.extend(sorted(confd_path.glob("*.yaml")))
                yaml_files.extend(sorted(confd_path.glob("*.yml")))

        self._yaml_files = yaml_files

        super().__init__(
            settings_cls=settings_cls,
            yaml_file=yaml_files if yaml_files else None,
            yaml_file_encoding=yaml_file_encoding,
        )

    def __repr__(self) -> str:
        files_str = ", ".join(str(f) for f in self._yaml_files)
        return f"{self.__class__.__name__}(yaml_files=[{files_str}])"


# ============================================================================
# Factory functions for each settings domain
# ============================================================================


def create_yaml_source(
    settings_cls: type[BaseSettings], name: str
) -> ConfDYamlConfigSettingsSource:
    """Create a YAML source loading ``conf/<name>.yaml`` and ``conf/<name>.d/``.

    Override directory with: ``<NAME>_CONFIG_DIR=/custom/path``
    """
    return ConfDYamlConfigSettingsSource(
        settings_cls,
        yaml_file=f"{name}.yaml",
        confd_dir=f"{name}.d",
        config_dir_env=f"{name.upper()}_CONFIG_DIR",
    )


def create_app_yaml_source(settings_cls: type[BaseSettings]) -> ConfDYamlConfigSettingsSource:
    """Create YAML source for AppSettings (conf/app.yaml)."""
    return create_yaml_source(settings_cls, "app")


def create_db_yaml_source(settings_cls: type[BaseSettings]) -> ConfDYamlConfigSettingsSource:
    """Create YAML source for DatabaseSettings (conf/db.yaml)."""
    return create_yaml_source(settings_cls, "db")


def create_logging_yaml_source(settings_cls: type[BaseSettings]) -> ConfDYamlConfigSettingsSource:
    """Create YAML source for LoggingSettings (conf/logging.yaml)."""
    return create_yaml_source(settings_cls, "logging")


def create_platform_yaml_source(
    settings_cls: type[BaseSettings],
) -> ConfDYamlConfigSettingsSource:
    """Create YAML source for PlatformSettings (conf/platform.yaml)."""
    return create_yaml_source(settings_cls, "platform")


def create_notify_yaml_source(settings_cls: type[BaseSettings]) -> ConfDYamlConfigSettingsSource:
    """Create YAML source for NotificationSettings (conf/notify.yaml)."""
    return create_yaml_source(settings_cls, "notify")


def create_auth_yaml_source(settings_cls: type[BaseSettings]) -> ConfDYamlConfigSettingsSource:
    """Create YAML source for SecuritySettings (conf/auth.yaml)."""
    return create_yaml_source(settings_cls, "auth")


__all__ = [
    "ConfDYamlConfigSettingsSource",
    "create_app_yaml_source",
    "create_auth_yaml_source",
    "create_db_yaml_source",
    "create_logging_yaml_source",
    "create_notify_yaml_source",
    "create_platform_yaml_source",
    "create_yaml_source",
]
