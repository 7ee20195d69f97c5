"""Unit tests for structured logging helpers."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from status_page.infra.logging import (
    ContextInjectingFilter,
    JSONFormatter,
    clear_log_context,
    get_lazy_logger,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)


@pytest.fixture(autouse=True)
def _reset_context():
    clear_log_context()
    yield
    clear_log_context()


def _record(msg: str = "Check pass complete", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="status_page.features.cron.service",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_emits_one_json_object(self):
        formatter = JSONFormatter(static={"service": "status-page"})

        data = json.loads(formatter.format(_record(changes=2)))

        assert data["level"] == "INFO"
        assert data["logger"] == "status_page.features.cron.service"
        assert data["message"] == "Check pass complete"
        assert data["service"] == "status-page"
        assert data["changes"] == 2
        assert data["timestamp"].endswith("Z")
        assert "trace_id" not in data

    def test_exception_is_single_line(self):
        formatter = JSONFormatter()
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record()
            record.exc_info = sys.exc_info()

        output = formatter.format(record)

        assert "\n" not in output
        assert "RuntimeError: boom" in json.loads(output)["exception"]


class TestLogContext:
    def test_filter_injects_context(self):
        set_log_context(request_id="req-1", path="/api/status")
        record = _record()

        assert ContextInjectingFilter().filter(record)
        assert record.request_id == "req-1"
        assert record.path == "/api/status"

    def test_explicit_extra_wins(self):
        set_log_context(component="api")
        record = _record(component="database")

        ContextInjectingFilter().filter(record)

        assert record.component == "database"

    def test_remove_keys(self):
        set_log_context(request_id="req-1", check_run_id="run-1")
        remove_from_log_context("request_id")

        assert get_log_context() == {"check_run_id": "run-1"}


class TestLazyLogger:
    def test_callable_not_evaluated_when_disabled(self, caplog):
        calls: list[int] = []
        logger = get_lazy_logger("status_page.tests.lazy")

        with caplog.at_level(logging.INFO, logger="status_page.tests.lazy"):
            logger.debug(lambda: calls.append(1) or "expensive")

        assert calls == []

    def test_callable_evaluated_when_enabled(self, caplog):
        logger = get_lazy_logger("status_page.tests.lazy", channel="slack")

        with caplog.at_level(logging.DEBUG, logger="status_page.tests.lazy"):
            logger.debug(lambda: "webhook.post")
            logger.info("sent %s", lambda: 3)

        assert [r.getMessage() for r in caplog.records] == ["webhook.post", "sent 3"]
        assert all(r.channel == "slack" for r in caplog.records)
