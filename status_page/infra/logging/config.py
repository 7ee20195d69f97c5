"""Logging configuration setup.

Root logging is configured with ``logging.config.dictConfig``. Records are
handed to a ``QueueHandler`` and written by a ``QueueListener`` thread so a
slow stdout or file never blocks the event loop.
"""

from __future__ import annotations

import atexit
import logging
import logging.config
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import Queue
from typing import TYPE_CHECKING, Any

from .formatters import DEFAULT_FMT_KEYS, JSONFormatter

if TYPE_CHECKING:
    from status_page.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)

_log_queue: Queue[logging.LogRecord] | None = None
_listener: QueueListener | None = None
_LOGGING_INITIALIZED = False
_ATEXIT_REGISTERED = False

TEXT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
TEXT_DATEFMT = "%Y-%m-%d %H:%M:%S"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def shutdown() -> None:
    """Stop the QueueListener, flushing pending records.

    Registered with atexit on first configuration; safe to call repeatedly.
    """
    global _log_queue, _listener

    if _listener is not None:
        _listener.stop()
        _listener = None
    _log_queue = None


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Configure logging once across entrypoints (API, CLI).

    Args:
        log_settings: Optional settings instance; loaded via
            ``get_logging_settings()`` when omitted.
        force: Reconfigure even if logging was already initialized.
        **configure_kwargs: Explicit overrides for ``configure_logging()``.
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    if log_settings is None:
        from status_page.core.settings import get_logging_settings

        log_settings = get_logging_settings()

    log_config = {**log_settings.to_logging_kwargs(), **configure_kwargs}
    configure_logging(**log_config)
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    *,
    service_name: str = "status-page",
    json_logs: bool = True,
    file_path: str | Path | None = None,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    console_enabled: bool = True,
    include_context: bool = True,
    capture_warnings: bool = True,
    include_uvicorn: bool = True,
    **kwargs: Any,
) -> None:
    """Apply root logging configuration.

    Args:
        log_level: Root logger level.
        service_name: Static ``service`` field added to JSON records.
        json_logs: Emit JSON Lines instead of human-readable text.
        file_path: Rotating log file; None disables file logging.
        file_max_bytes: Size at which the log file rotates.
        file_backup_count: Rotated files to keep.
        console_enabled: Write to stderr.
        include_context: Attach ``ContextInjectingFilter`` to the root logger.
        capture_warnings: Route ``warnings`` through logging.
        include_uvicorn: Make uvicorn loggers propagate to the root handlers.
    """
    if kwargs:
        logger.debug("Unused logging kwargs supplied: %s", ", ".join(sorted(kwargs)))

    logging.captureWarnings(capture_warnings)

    path = Path(file_path) if file_path else None
    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)

    filters: dict[str, Any] = {}
    if include_context:
        filters["context"] = {
            "()": "status_page.infra.logging.context.ContextInjectingFilter",
        }

    loggers: dict[str, Any] = {}
    if include_uvicorn:
        for name in UVICORN_LOGGERS:
            loggers[name] = {"handlers": [], "propagate": True}

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": filters,
            "root": {
                "level": log_level.upper(),
                "handlers": [],
                "filters": list(filters),
            },
            "loggers": loggers,
        }
    )

    handlers = _build_handlers(
        service_name=service_name,
        json_logs=json_logs,
        file_path=path,
        file_max_bytes=file_max_bytes,
        file_backup_count=file_backup_count,
        console_enabled=console_enabled,
    )
    _start_queue_listener(handlers)


def _build_formatter(service_name: str, json_logs: bool) -> logging.Formatter:
    if json_logs:
        return JSONFormatter(fmt_keys=dict(DEFAULT_FMT_KEYS), static={"service": service_name})
    return logging.Formatter(fmt=TEXT_FORMAT, datefmt=TEXT_DATEFMT)


def _build_handlers(
    *,
    service_name: str,
    json_logs: bool,
    file_path: Path | None,
    file_max_bytes: int,
    file_backup_count: int,
    console_enabled: bool,
) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []

    if console_enabled:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(_build_formatter(service_name, json_logs))
        handlers.append(console_handler)

    if file_path is not None:
        file_handler = RotatingFileHandler(
            file_path,
            maxBytes=file_max_bytes,
            backupCount=file_backup_count,
            encoding="utf-8",
        )
        # Files are always machine-parsed
        file_handler.setFormatter(_build_formatter(service_name, json_logs=True))
        handlers.append(file_handler)

    return handlers


def _start_queue_listener(handlers: list[logging.Handler]) -> None:
    global _log_queue, _listener, _ATEXIT_REGISTERED

    shutdown()

    if not handlers:
        return

    _log_queue = Queue()
    _listener = QueueListener(_log_queue, *handlers, respect_handler_level=True)
    _listener.start()

    if not _ATEXIT_REGISTERED:
        atexit.register(shutdown)
        _ATEXIT_REGISTERED = True

    logging.getLogger().addHandler(QueueHandler(_log_queue))
