"""Context propagation for structured logging.

Request middleware and the scheduled check pass store identifiers (request_id,
check_run_id, ...) in a ContextVar. ``ContextInjectingFilter`` copies them onto
every LogRecord so the JSON formatter emits them without explicit ``extra=``.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Add fields to the logging context of the current task.

    Example:
        ```python
        set_log_context(request_id="abc-123", path="/api/status")
        logger.info("Serving status")  # carries request_id and path
        ```
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Return a copy of the current logging context."""
    return _log_context.get().copy()


def clear_log_context() -> None:
    """Drop all context fields for the current task."""
    _log_context.set({})


def remove_from_log_context(*keys: str) -> None:
    current = _log_context.get().copy()
    for key in keys:
        current.pop(key, None)
    _log_context.set(current)


class ContextInjectingFilter(logging.Filter):
    """Copy the contextvars log context onto each record.

    Attached to the root logger by ``configure_logging``. Existing record
    attributes (including explicit ``extra=`` values) win over context.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
