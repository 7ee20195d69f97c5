"""Structured logging: dictConfig setup, JSON formatting and context injection.

Example:
    from status_page.infra.logging import get_lazy_logger, set_log_context

    logger = get_lazy_logger(__name__)
    set_log_context(request_id="abc-123")
    logger.info("Check pass started", extra={"components": 3})
"""

from __future__ import annotations

from .config import configure_logging, setup_logging, shutdown
from .context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)
from .formatters import JSONFormatter
from .lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "clear_log_context",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "remove_from_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
