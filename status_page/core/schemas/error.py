"""RFC 7807 Problem Details schemas for error responses."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    See: https://datatracker.ietf.org/doc/html/rfc7807
    """

    DEFAULT_TITLES: ClassVar[dict[int, str]] = {
        400: "Bad Request",
        401: "Unauthorized",
        403: "Forbidden",
        404: "Not Found",
        409: "Conflict",
        422: "Unprocessable Entity",
        500: "Internal Server Error",
        503: "Service Unavailable",
    }

    type: str = Field(
        default="about:blank",
        min_length=1,
        max_length=200,
        description="URI reference identifying the problem type",
    )
    title: str = Field(
        min_length=1, max_length=200, description="Short, human-readable summary of the problem"
    )
    status: int = Field(ge=100, le=599, description="HTTP status code")
    detail: str | None = Field(
        default=None,
        max_length=2000,
        description="Human-readable explanation specific to this occurrence",
    )
    instance: str | None = Field(
        default=None,
        max_length=500,
        description="URI reference identifying the specific occurrence",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "incident-not-found",
                "title": "Not Found",
                "status": 404,
                "detail": "Incident not found with id=42",
                "instance": "/api/incidents/42",
            }
        },
    )

    @classmethod
    def default_title(cls, status_code: int) -> str:
        """Return the canonical title for an HTTP status code."""
        return cls.DEFAULT_TITLES.get(status_code, "Error")


class ValidationError(BaseModel):
    """A single field-level validation failure."""

    field: str = Field(description="Dotted path to the offending field")
    message: str = Field(description="Validation message")
    type: str = Field(description="Validation error type")
    value: Any | None = Field(default=None, description="Rejected input value")


class ValidationProblemDetail(ProblemDetail):
    """Problem Details carrying field-level validation errors."""

    errors: list[ValidationError] = Field(default_factory=list)


__all__ = ["ProblemDetail", "ValidationError", "ValidationProblemDetail"]
