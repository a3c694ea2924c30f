"""
Pydantic schemas for reservation API requests and responses.
"""

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from apps.api.core.serializers import EMAIL_PATTERN, PHONE_PATTERN
from apps.api.reservations.models import TIME_PATTERN

OccasionName = Literal["birthday", "anniversary", "business", "casual", "other"]
ReservationStatusName = Literal["pending", "confirmed", "cancelled", "completed"]


class ReservationCreateRequest(BaseModel):
    """Request body for POST /api/reservations."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    phone: str = Field(..., pattern=PHONE_PATTERN)
    date: dt.date
    time: str = Field(..., pattern=TIME_PATTERN)
    party_size: int = Field(..., ge=1, le=20)
    special_requests: str = Field(default="", max_length=500)
    occasion: OccasionName = "casual"

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


class ReservationStatusRequest(BaseModel):
    """Request body for PATCH /api/reservations/{id}/status."""

    status: ReservationStatusName
    table_number: int | None = Field(default=None, ge=1)
    notes: str | None = Field(default=None, max_length=1000)


class ReservationQuery(BaseModel):
    """Query parameters for GET /api/reservations/all."""

    date: dt.date | None = None


class ReservationCustomerSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: str | None = None


class ReservationSchema(BaseModel):
    """A reservation as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    customer: ReservationCustomerSchema
    name: str
    email: str
    phone: str
    date: dt.date
    time: str
    party_size: int
    table_number: int | None
    status: str
    special_requests: str
    occasion: str
    confirmation_code: str
    assigned_employee_id: int | None
    notes: str
    reminder_sent: bool
    created_at: dt.datetime
    updated_at: dt.datetime
