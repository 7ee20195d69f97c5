"""Health probe response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from status_page.core.schemas.common import HealthStatus


class LivenessResponse(BaseModel):
    status: HealthStatus = HealthStatus.HEALTHY
    service: str
    version: str
    timestamp: datetime


class ReadinessResponse(BaseModel):
    ready: bool
    checks: dict[str, bool] = Field(default_factory=dict, description="Dependency name to result")
    timestamp: datetime
