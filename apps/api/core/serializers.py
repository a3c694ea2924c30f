"""
Pydantic schemas for authentication and user payloads.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
PHONE_PATTERN = r"^\+?[1-9]\d{0,15}$"


class AddressSchema(BaseModel):
    """Postal address embedded in users and delivery orders."""

    street: str = Field(default="", max_length=200)
    city: str = Field(default="", max_length=100)
    state: str = Field(default="", max_length=100)
    zip_code: str = Field(default="", max_length=20)
    country: str = Field(default="", max_length=100)
    phone: str = Field(default="", max_length=20)


class RegisterRequest(BaseModel):
    """Request body for POST /api/auth/register."""

    name: str = Field(..., min_length=2, max_length=50)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6)
    phone: str = Field(default="", pattern=rf"^$|{PHONE_PATTERN}")

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return value.strip()

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.strip().lower()


class LoginRequest(BaseModel):
    """Request body for POST /api/auth/login."""

    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.strip().lower()


class UserSchema(BaseModel):
    """Public representation of a user. Never includes the password."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str
    phone: str
    address: dict[str, Any]
    avatar: str
    is_active: bool
    last_login: datetime | None
    preferences: dict[str, Any]
    date_joined: datetime


class AuthResponse(BaseModel):
    """Response data for register and login."""

    user: UserSchema
    token: str
