"""
Pydantic schemas for order API requests and responses.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from apps.api.core.serializers import PHONE_PATTERN

OrderTypeName = Literal["dine_in", "takeaway", "delivery"]
PaymentMethodName = Literal["cash", "card", "upi", "online"]


class SelectedCustomization(BaseModel):
    """A customization chosen for a line item."""

    name: str = Field(..., min_length=1, max_length=100)
    option: str | None = Field(default=None, max_length=100)
    price: Decimal = Field(default=Decimal("0"), ge=0)


class DeliveryAddressSchema(BaseModel):
    """Where a delivery order goes."""

    street: str = Field(..., min_length=1, max_length=200)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(default="", max_length=100)
    zip_code: str = Field(default="", max_length=20)
    country: str = Field(default="", max_length=100)
    phone: str | None = Field(default=None, pattern=PHONE_PATTERN)


class OrderLineRequest(BaseModel):
    """One requested cart line."""

    menu_item_id: int = Field(..., ge=1)
    quantity: int = Field(..., ge=1, le=100)
    customizations: list[SelectedCustomization] = Field(default_factory=list)
    special_instructions: str = Field(default="", max_length=200)


class OrderCreateRequest(BaseModel):
    """Request body for POST /api/orders."""

    items: list[OrderLineRequest] = Field(..., min_length=1)
    order_type: OrderTypeName
    payment_method: PaymentMethodName
    delivery_address: DeliveryAddressSchema | None = None
    special_instructions: str = Field(default="", max_length=500)


class StatusUpdateRequest(BaseModel):
    """Request body for PATCH /api/orders/{id}/status."""

    status: str = Field(..., min_length=1)
    estimated_delivery_time: datetime | None = None


class RateOrderRequest(BaseModel):
    """Request body for POST /api/orders/{id}/rate."""

    rating: int = Field(..., ge=1, le=5)
    review: str = Field(default="", max_length=500)


class OrderQuery(BaseModel):
    """Query parameters for order listings."""

    status: str | None = None
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1, le=100)


class PersonSchema(BaseModel):
    """Compact user reference embedded in orders."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: str | None = None


class OrderItemSchema(BaseModel):
    """A line item with its price snapshot."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    menu_item_id: int | None
    item_name: str
    quantity: int
    unit_price: Decimal
    customizations: list[SelectedCustomization]
    special_instructions: str
    line_total: Decimal


class OrderSchema(BaseModel):
    """An order with its line items."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    order_number: str
    customer: PersonSchema
    items: list[OrderItemSchema]
    subtotal: Decimal
    tax: Decimal
    delivery_fee: Decimal
    total: Decimal
    status: str
    order_type: str
    payment_method: str
    payment_status: str
    delivery_address: DeliveryAddressSchema | None
    special_instructions: str
    assigned_employee: PersonSchema | None
    estimated_delivery_time: datetime | None
    actual_delivery_time: datetime | None
    rating: int | None
    review: str
    created_at: datetime
    updated_at: datetime

    @field_validator("items", mode="before")
    @classmethod
    def load_items(cls, value: Any) -> Any:
        # Related managers are not iterable as-is
        return list(value.all()) if hasattr(value, "all") else value
