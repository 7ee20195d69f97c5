"""JSON Lines formatter with trace correlation."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from opentelemetry import trace

# LogRecord attributes that never belong in the JSON body.
_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
    }
)

DEFAULT_FMT_KEYS = {
    "level": "levelname",
    "logger": "name",
    "message": "message",
}


class JSONFormatter(logging.Formatter):
    """Format records as one JSON object per line with UTC timestamps.

    Extra fields passed via ``extra=`` or injected by ``ContextInjectingFilter``
    (request_id, component, channel, ...) are emitted as top-level keys. When an
    OpenTelemetry span is active its trace and span ids are included.

    Example output:
        {"level": "INFO", "logger": "status_page.features.cron.service",
         "message": "Check pass complete", "timestamp": "2025-01-01T00:00:00.123Z",
         "service": "status-page", "changes": 1}
    """

    def __init__(
        self,
        fmt_keys: dict[str, str] | None = None,
        static: dict[str, Any] | None = None,
        include_process_info: bool = False,
    ) -> None:
        super().__init__()
        self.fmt_keys = fmt_keys or dict(DEFAULT_FMT_KEYS)
        self.static = static or {}
        self.include_process_info = include_process_info

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()

        data: dict[str, Any] = {
            key: getattr(record, attr, None) for key, attr in self.fmt_keys.items()
        }
        data["timestamp"] = (
            datetime.fromtimestamp(record.created, tz=UTC)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z")
        )

        if self.include_process_info:
            data["process_id"] = record.process
            data["process_name"] = record.processName

        span = trace.get_current_span()
        ctx = span.get_span_context() if span else None
        if ctx is not None and ctx.is_valid:
            data["trace_id"] = format(ctx.trace_id, "032x")
            data["span_id"] = format(ctx.span_id, "016x")

        # Newlines escaped to keep one record per line
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info).replace("\n", "\\n")
        if record.stack_info:
            data["stack_trace"] = record.stack_info.replace("\n", "\\n")

        data.update(self.static)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and key not in data:
                data[key] = value

        return json.dumps(data, ensure_ascii=False, default=str)
