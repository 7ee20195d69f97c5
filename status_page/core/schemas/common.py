"""Common schemas shared across features."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class HealthStatus(str, Enum):
    """Service health check status values."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str = Field(min_length=1, max_length=1000, description="Response message")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"message": "Please check your email to verify your subscription."}
        },
    )


class SuccessResponse(BaseModel):
    """Acknowledgement for delete-style operations."""

    success: bool = Field(default=True, description="Operation success status")


__all__ = ["HealthStatus", "MessageResponse", "SuccessResponse"]
