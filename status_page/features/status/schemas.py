"""Pydantic response schemas for the public status endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .levels import ComponentType, StatusLevel


class ComponentStatus(BaseModel):
    """Current state of one component on the status overview."""

    component: ComponentType
    name: str
    status: StatusLevel
    status_label: str
    response_time_ms: int = 0
    updated_at: datetime | None = Field(
        default=None, description="Timestamp of the latest check; null before the first one"
    )
    uptime_30d: float = Field(ge=0, le=100)


class StatusResponse(BaseModel):
    status: StatusLevel
    status_label: str
    message: str
    components: list[ComponentStatus]
    active_incidents: int = Field(ge=0)
    upcoming_maintenance: int = Field(ge=0)
    updated_at: datetime


class UptimeWindows(BaseModel):
    """Uptime percentages over the standard 1/7/30/90 day windows."""

    h24: float = Field(alias="24h", ge=0, le=100)
    d7: float = Field(alias="7d", ge=0, le=100)
    d30: float = Field(alias="30d", ge=0, le=100)
    d90: float = Field(alias="90d", ge=0, le=100)

    model_config = ConfigDict(populate_by_name=True)


class ComponentDetail(BaseModel):
    component: ComponentType
    name: str
    status: StatusLevel
    status_label: str
    response_time_ms: int = 0
    avg_response_time_24h: int = 0
    uptime: UptimeWindows
    last_checked: datetime | None = None


class ComponentsResponse(BaseModel):
    components: list[ComponentDetail]
    updated_at: datetime


class ResponseTimePoint(BaseModel):
    timestamp: datetime
    response_time_ms: int


class ResponseTimesResponse(BaseModel):
    component: ComponentType
    hours: int
    data: list[ResponseTimePoint]


class DailyUptimeSchema(BaseModel):
    date: str = Field(description="UTC day, YYYY-MM-DD")
    status: StatusLevel
    uptime_percentage: float = Field(ge=0, le=100)
    total_checks: int = 0
    has_data: bool = True


class ComponentHistory(BaseModel):
    component: ComponentType
    name: str
    history: list[DailyUptimeSchema]


class HistoryResponse(BaseModel):
    days: int
    history: list[ComponentHistory]
    updated_at: datetime
