"""Value objects produced by a check pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .levels import ComponentType, StatusLevel


@dataclass(slots=True, frozen=True)
class CheckResult:
    """Outcome of probing one component."""

    component: ComponentType
    status: StatusLevel
    response_time_ms: int
    status_code: int | None = None
    details: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class StatusChange:
    """A component whose fresh status differs from its stored one."""

    component: ComponentType
    previous_status: StatusLevel
    new_status: StatusLevel
