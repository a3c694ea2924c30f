"""
Core models - Users and shared base classes.

All domain models inherit timestamps from TimestampedModel.
"""

from django.contrib.auth.models import AbstractUser
from django.db import models

from .managers import UserManager

DEFAULT_AVATAR_URL = (
    "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e"
    "?w=150&h=150&fit=crop&crop=face"
)


class TimestampedModel(models.Model):
    """
    Abstract base for all domain models.

    Provides created/updated timestamps.
    """

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class User(AbstractUser):
    """
    Custom user model keyed by email.

    Customers place orders and reservations; employees and admins
    ("staff") run the restaurant.
    """

    class Role(models.TextChoices):
        CUSTOMER = "customer", "Customer"
        EMPLOYEE = "employee", "Employee"
        ADMIN = "admin", "Admin"

    STAFF_ROLES = (Role.EMPLOYEE, Role.ADMIN)

    username = None  # type: ignore[assignment]
    first_name = None  # type: ignore[assignment]
    last_name = None  # type: ignore[assignment]

    name = models.CharField(max_length=50)
    email = models.EmailField(unique=True)
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.CUSTOMER,
    )
    phone = models.CharField(max_length=20, blank=True)
    address = models.JSONField(
        default=dict,
        blank=True,
        help_text="street, city, state, zip_code, country",
    )
    avatar = models.URLField(max_length=500, default=DEFAULT_AVATAR_URL)
    preferences = models.JSONField(
        default=dict,
        blank=True,
        help_text="dietary_restrictions and favorite_items",
    )
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    objects = UserManager()  # type: ignore[misc]

    class Meta:
        ordering = ["email"]
        indexes = [
            models.Index(fields=["role"]),
        ]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"

    def save(self, *args, **kwargs) -> None:  # type: ignore[no-untyped-def]
        self.email = self.email.lower()
        super().save(*args, **kwargs)

    @property
    def is_restaurant_staff(self) -> bool:
        """Employees and admins operate orders and reservations."""
        return self.role in self.STAFF_ROLES
