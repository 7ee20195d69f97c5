"""Pydantic schemas for the incidents feature."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from status_page.features.status.levels import ComponentType, IncidentSeverity, IncidentStatus
from status_page.utils.dates import format_duration


def _dedupe(components: list[ComponentType]) -> list[ComponentType]:
    return list(dict.fromkeys(components))


class IncidentCreate(BaseModel):
    """Payload for opening an incident."""

    title: str = Field(..., min_length=1, max_length=200)
    severity: IncidentSeverity
    affected_components: list[ComponentType] = Field(..., min_length=1)
    message: str | None = Field(default=None, max_length=5000)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "Title is required"
            raise ValueError(msg)
        return v

    @field_validator("affected_components")
    @classmethod
    def unique_components(cls, v: list[ComponentType]) -> list[ComponentType]:
        return _dedupe(v)


class IncidentPatch(BaseModel):
    """Partial update: new status, timeline message and/or postmortem."""

    status: IncidentStatus | None = None
    message: str | None = Field(default=None, min_length=1, max_length=5000)
    postmortem: str | None = None


class IncidentUpdateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status: IncidentStatus
    message: str
    timestamp: datetime


class IncidentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    status: IncidentStatus
    severity: IncidentSeverity
    affected_components: list[ComponentType]
    updates: list[IncidentUpdateResponse] = Field(default_factory=list)
    started_at: datetime
    resolved_at: datetime | None = None
    postmortem: str | None = None
    created_by: str
    created_at: datetime
    updated_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def duration(self) -> str:
        """Time from start until resolution (or now while ongoing)."""
        return format_duration(self.started_at, self.resolved_at)


class IncidentListResponse(BaseModel):
    items: list[IncidentResponse]
    total: int
    page: int
    limit: int
    pages: int


class IncidentCollection(BaseModel):
    """Unpaginated admin listing."""

    items: list[IncidentResponse]
