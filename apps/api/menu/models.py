"""
Menu models - the catalog of orderable items.
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from apps.api.core.models import TimestampedModel


class Category(models.TextChoices):
    """Menu sections."""

    APPETIZERS = "appetizers", "Appetizers"
    MAIN_COURSE = "main-course", "Main Course"
    DESSERTS = "desserts", "Desserts"
    DRINKS = "drinks", "Drinks"
    BEVERAGES = "beverages", "Beverages"


class Allergen(models.TextChoices):
    """Allergens a menu item can declare."""

    NUTS = "nuts", "Nuts"
    DAIRY = "dairy", "Dairy"
    EGGS = "eggs", "Eggs"
    SOY = "soy", "Soy"
    WHEAT = "wheat", "Wheat"
    FISH = "fish", "Fish"
    SHELLFISH = "shellfish", "Shellfish"


class MenuItem(TimestampedModel):
    """
    Individual menu item.

    Availability is a boolean gate checked by the order engine, not a
    stock count.
    """

    name = models.CharField(max_length=100)
    description = models.TextField(max_length=500)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    category = models.CharField(
        max_length=20,
        choices=Category.choices,
        default=Category.MAIN_COURSE,
    )
    image = models.URLField(max_length=500)

    # Dietary information
    is_vegetarian = models.BooleanField(default=False)
    is_vegan = models.BooleanField(default=False)
    is_gluten_free = models.BooleanField(default=False)
    is_spicy = models.BooleanField(default=False)
    allergens = models.JSONField(
        default=list,
        blank=True,
        help_text='List of allergens (e.g., ["nuts", "dairy"])',
    )
    nutritional_info = models.JSONField(
        default=dict,
        blank=True,
        help_text="calories, protein, carbs, fat, fiber",
    )

    preparation_time = models.PositiveIntegerField(
        default=15,
        help_text="Minutes",
    )
    is_available = models.BooleanField(
        default=True,
        help_text="False = cannot currently be ordered",
    )
    popularity = models.PositiveIntegerField(default=0)
    tags = models.JSONField(default=list, blank=True)
    customizations = models.JSONField(
        default=list,
        blank=True,
        help_text="Offered options: name, price, is_required",
    )

    class Meta:
        ordering = ["-popularity", "name"]
        indexes = [
            models.Index(fields=["category"]),
            models.Index(fields=["is_available"]),
        ]

    def __str__(self) -> str:
        return self.name
