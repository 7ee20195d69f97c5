"""Pydantic schemas for maintenance windows."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from status_page.features.status.levels import ComponentType, MaintenanceStatus
from status_page.utils.dates import format_duration


class MaintenanceCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=5000)
    affected_components: list[ComponentType] = Field(..., min_length=1)
    scheduled_start: datetime
    scheduled_end: datetime

    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "Value must not be blank"
            raise ValueError(msg)
        return v

    @field_validator("affected_components")
    @classmethod
    def unique_components(cls, v: list[ComponentType]) -> list[ComponentType]:
        return list(dict.fromkeys(v))

    @field_validator("scheduled_start", "scheduled_end")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Naive timestamps are taken as UTC."""
        return v.replace(tzinfo=UTC) if v.tzinfo is None else v.astimezone(UTC)


class MaintenancePatch(BaseModel):
    status: MaintenanceStatus


class MaintenanceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    affected_components: list[ComponentType]
    scheduled_start: datetime
    scheduled_end: datetime
    status: MaintenanceStatus
    created_by: str
    created_at: datetime
    updated_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def duration(self) -> str:
        return format_duration(self.scheduled_start, self.scheduled_end)


class MaintenanceListResponse(BaseModel):
    maintenance: list[MaintenanceResponse]


class MaintenanceCollection(BaseModel):
    """Unpaginated admin listing."""

    items: list[MaintenanceResponse]
