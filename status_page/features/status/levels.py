"""Component, status, incident and maintenance vocabularies."""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum


class ComponentType(StrEnum):
    """Platform components polled by the health checker, in display order."""

    API = "api"
    DATABASE = "database"
    CACHE = "cache"
    AUTH = "auth"
    PAYMENTS = "payments"
    STORAGE = "storage"

    @property
    def label(self) -> str:
        return COMPONENT_LABELS[self]


class StatusLevel(StrEnum):
    """Component health, declared in increasing order of severity."""

    OPERATIONAL = "operational"
    DEGRADED = "degraded"
    PARTIAL_OUTAGE = "partial_outage"
    MAJOR_OUTAGE = "major_outage"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


class IncidentStatus(StrEnum):
    INVESTIGATING = "investigating"
    IDENTIFIED = "identified"
    MONITORING = "monitoring"
    RESOLVED = "resolved"


class IncidentSeverity(StrEnum):
    MINOR = "minor"
    MAJOR = "major"
    CRITICAL = "critical"


class MaintenanceStatus(StrEnum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


COMPONENT_LABELS: dict[ComponentType, str] = {
    ComponentType.API: "API",
    ComponentType.DATABASE: "Database",
    ComponentType.CACHE: "Cache",
    ComponentType.AUTH: "Authentication",
    ComponentType.PAYMENTS: "Payments",
    ComponentType.STORAGE: "File Storage",
}

STATUS_LABELS: dict[StatusLevel, str] = {
    StatusLevel.OPERATIONAL: "Operational",
    StatusLevel.DEGRADED: "Degraded Performance",
    StatusLevel.PARTIAL_OUTAGE: "Partial Outage",
    StatusLevel.MAJOR_OUTAGE: "Major Outage",
}

OVERALL_STATUS_MESSAGES: dict[StatusLevel, str] = {
    StatusLevel.OPERATIONAL: "All Systems Operational",
    StatusLevel.DEGRADED: "Some Systems Degraded",
    StatusLevel.PARTIAL_OUTAGE: "Partial System Outage",
    StatusLevel.MAJOR_OUTAGE: "Major System Outage",
}

_SEVERITY_ORDER: tuple[StatusLevel, ...] = tuple(StatusLevel)


def severity_rank(level: StatusLevel | str) -> int:
    """Return 0 for operational up to 3 for a major outage."""
    return _SEVERITY_ORDER.index(StatusLevel(level))


def worst_status(levels: Iterable[StatusLevel | str]) -> StatusLevel:
    """Return the most severe level present, operational when empty."""
    worst = StatusLevel.OPERATIONAL
    for level in levels:
        candidate = StatusLevel(level)
        if severity_rank(candidate) > severity_rank(worst):
            worst = candidate
    return worst


def get_overall_status(levels: Iterable[StatusLevel | str]) -> StatusLevel:
    """Aggregate component statuses into the page-wide status."""
    return worst_status(levels)


def get_overall_status_message(level: StatusLevel | str) -> str:
    return OVERALL_STATUS_MESSAGES[StatusLevel(level)]


def parse_component(value: str) -> ComponentType | None:
    """Return the matching component, or None for unknown identifiers."""
    try:
        return ComponentType(value)
    except ValueError:
        return None


__all__ = [
    "COMPONENT_LABELS",
    "STATUS_LABELS",
    "ComponentType",
    "IncidentSeverity",
    "IncidentStatus",
    "MaintenanceStatus",
    "StatusLevel",
    "get_overall_status",
    "get_overall_status_message",
    "parse_component",
    "severity_rank",
    "worst_status",
]
