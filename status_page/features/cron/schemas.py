"""Response schema for the scheduled trigger."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from status_page.features.status.levels import ComponentType, StatusLevel


class CheckResultSummary(BaseModel):
    component: ComponentType
    status: StatusLevel
    response_time_ms: int


class StatusChangeSummary(BaseModel):
    component: ComponentType
    previous_status: StatusLevel
    new_status: StatusLevel


class CheckRunResponse(BaseModel):
    success: bool = True
    timestamp: datetime
    results: list[CheckResultSummary]
    changes: int
    status_changes: list[StatusChangeSummary]
