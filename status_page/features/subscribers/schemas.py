"""Pydantic schemas for subscription endpoints."""

from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field, field_validator

from status_page.features.status.levels import ComponentType


class SubscribeRequest(BaseModel):
    """Subscribe an address; an empty component list means every component."""

    email: EmailStr
    components: list[ComponentType] = Field(default_factory=list)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("components")
    @classmethod
    def unique_components(cls, v: list[ComponentType]) -> list[ComponentType]:
        return list(dict.fromkeys(v))


class UnsubscribeRequest(BaseModel):
    token: str = Field(..., min_length=1, max_length=128)
