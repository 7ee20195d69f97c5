"""CLI utilities for running async operations and formatting output."""

from status_page.cli.utils.async_runner import coro
from status_page.cli.utils.formatters import (
    error,
    header,
    info,
    section,
    success,
    table,
    warning,
)

__all__ = [
    "coro",
    "error",
    "header",
    "info",
    "section",
    "success",
    "table",
    "warning",
]
