"""
Pydantic schemas for user administration and profile updates.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from apps.api.core.serializers import PHONE_PATTERN, AddressSchema


class RoleUpdateRequest(BaseModel):
    """Request body for PATCH /api/users/{id}/role."""

    role: Literal["customer", "employee", "admin"]


class ActivationRequest(BaseModel):
    """Request body for PATCH /api/users/{id}/activate."""

    is_active: bool


class ProfileUpdateRequest(BaseModel):
    """Request body for PATCH /api/users/me. Only provided fields change."""

    name: str | None = Field(default=None, min_length=2, max_length=50)
    phone: str | None = Field(default=None, pattern=rf"^$|{PHONE_PATTERN}")
    address: AddressSchema | None = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class UserQuery(BaseModel):
    """Query parameters for GET /api/users."""

    role: Literal["customer", "employee", "admin"] | None = None
