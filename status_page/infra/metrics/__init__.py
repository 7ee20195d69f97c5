"""Prometheus metrics registry and collectors."""

from __future__ import annotations

from .prometheus import (
    REGISTRY,
    application_info,
    check_duration_seconds,
    checks_total,
    http_request_duration_seconds,
    http_requests_total,
    notifications_total,
    status_changes_total,
)

__all__ = [
    "REGISTRY",
    "application_info",
    "check_duration_seconds",
    "checks_total",
    "http_request_duration_seconds",
    "http_requests_total",
    "notifications_total",
    "status_changes_total",
]
