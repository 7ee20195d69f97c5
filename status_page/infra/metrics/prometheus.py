"""Prometheus metrics for the checker, notifier and HTTP layer."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

# Custom registry so tests and multiple app instances never collide with the
# process-wide default collectors.
REGISTRY = CollectorRegistry()

# Probe latencies range from a few ms to the request timeout
CHECK_LATENCY_BUCKETS = (
    0.01,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.0,
    5.0,
    10.0,
    30.0,
)

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
    registry=REGISTRY,
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    registry=REGISTRY,
)

# Health check metrics
checks_total = Counter(
    "status_page_checks_total",
    "Component health checks performed, by resulting status",
    ["component", "status"],
    registry=REGISTRY,
)

check_duration_seconds = Histogram(
    "status_page_check_duration_seconds",
    "Duration of a single component probe in seconds",
    ["component"],
    buckets=CHECK_LATENCY_BUCKETS,
    registry=REGISTRY,
)

status_changes_total = Counter(
    "status_page_status_changes_total",
    "Detected component status transitions",
    ["component"],
    registry=REGISTRY,
)

# Notification metrics
notifications_total = Counter(
    "status_page_notifications_total",
    "Notification deliveries by channel, event kind and result",
    ["channel", "event", "result"],
    registry=REGISTRY,
)

# Application metadata
application_info = Gauge(
    "status_page_application_info",
    "Application version and environment",
    ["version", "service", "environment"],
    registry=REGISTRY,
)
