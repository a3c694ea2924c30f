"""
Pydantic schemas for menu API requests and responses.

These schemas define the public API contract for catalog data.
"""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

CategoryName = Literal["appetizers", "main-course", "desserts", "drinks", "beverages"]
AllergenName = Literal["nuts", "dairy", "eggs", "soy", "wheat", "fish", "shellfish"]


class CustomizationOptionSchema(BaseModel):
    """An option a customer may pick for an item."""

    name: str = Field(..., min_length=1, max_length=100)
    price: Decimal = Field(default=Decimal("0"), ge=0)
    is_required: bool = False


class NutritionalInfoSchema(BaseModel):
    """Per-serving nutrition facts."""

    calories: float | None = Field(default=None, ge=0)
    protein: float | None = Field(default=None, ge=0)
    carbs: float | None = Field(default=None, ge=0)
    fat: float | None = Field(default=None, ge=0)
    fiber: float | None = Field(default=None, ge=0)


class MenuItemSchema(BaseModel):
    """A menu item with full details."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    price: Decimal
    category: str
    image: str
    is_vegetarian: bool
    is_vegan: bool
    is_gluten_free: bool
    is_spicy: bool
    allergens: list[str]
    nutritional_info: dict[str, float | None]
    preparation_time: int
    is_available: bool
    popularity: int
    tags: list[str]
    customizations: list[CustomizationOptionSchema]
    created_at: datetime
    updated_at: datetime


class MenuItemCreateRequest(BaseModel):
    """Request body for POST /api/menu."""

    name: str = Field(..., min_length=2, max_length=100)
    description: str = Field(..., min_length=10, max_length=500)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    category: CategoryName = "main-course"
    image: HttpUrl
    is_vegetarian: bool = False
    is_vegan: bool = False
    is_gluten_free: bool = False
    is_spicy: bool = False
    allergens: list[AllergenName] = Field(default_factory=list)
    nutritional_info: NutritionalInfoSchema = Field(
        default_factory=NutritionalInfoSchema
    )
    preparation_time: int = Field(default=15, ge=0)
    is_available: bool = True
    tags: list[str] = Field(default_factory=list)
    customizations: list[CustomizationOptionSchema] = Field(default_factory=list)

    @field_validator("name", "description", mode="before")
    @classmethod
    def strip_text(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class MenuItemUpdateRequest(BaseModel):
    """Request body for PUT /api/menu/{id}. Only provided fields change."""

    name: str | None = Field(default=None, min_length=2, max_length=100)
    description: str | None = Field(default=None, min_length=10, max_length=500)
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    category: CategoryName | None = None
    image: HttpUrl | None = None
    is_vegetarian: bool | None = None
    is_vegan: bool | None = None
    is_gluten_free: bool | None = None
    is_spicy: bool | None = None
    allergens: list[AllergenName] | None = None
    nutritional_info: NutritionalInfoSchema | None = None
    preparation_time: int | None = Field(default=None, ge=0)
    is_available: bool | None = None
    tags: list[str] | None = None
    customizations: list[CustomizationOptionSchema] | None = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def strip_text(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class MenuQuery(BaseModel):
    """Query parameters for GET /api/menu."""

    category: str | None = None
    is_available: bool | None = None
    search: str | None = Field(default=None, max_length=100)
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=50, ge=1, le=100)
