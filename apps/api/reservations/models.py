"""
Reservation models - table bookings made by customers.
"""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator, RegexValidator
from django.db import models

from apps.api.core.models import TimestampedModel

TIME_PATTERN = r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$"
CONFIRMATION_CODE_LENGTH = 6


class ReservationStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    CONFIRMED = "confirmed", "Confirmed"
    CANCELLED = "cancelled", "Cancelled"
    COMPLETED = "completed", "Completed"


class Occasion(models.TextChoices):
    BIRTHDAY = "birthday", "Birthday"
    ANNIVERSARY = "anniversary", "Anniversary"
    BUSINESS = "business", "Business"
    CASUAL = "casual", "Casual"
    OTHER = "other", "Other"


class Reservation(TimestampedModel):
    """
    A table booking.

    Contact details are stored on the reservation since they may differ
    from the booking customer's profile.
    """

    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reservations",
    )

    # Contact
    name = models.CharField(max_length=100)
    email = models.EmailField()
    phone = models.CharField(max_length=20)

    # Booking
    date = models.DateField()
    time = models.CharField(
        max_length=5,
        validators=[RegexValidator(TIME_PATTERN, "Time must be in HH:MM format")],
    )
    party_size = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(20)]
    )
    table_number = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1)],
    )
    status = models.CharField(
        max_length=20,
        choices=ReservationStatus.choices,
        default=ReservationStatus.PENDING,
    )
    special_requests = models.TextField(blank=True, max_length=500)
    occasion = models.CharField(
        max_length=20,
        choices=Occasion.choices,
        default=Occasion.CASUAL,
    )
    confirmation_code = models.CharField(
        max_length=CONFIRMATION_CODE_LENGTH,
        unique=True,
    )

    # Staff handling
    assigned_employee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_reservations",
    )
    notes = models.TextField(blank=True)
    reminder_sent = models.BooleanField(default=False)

    class Meta:
        ordering = ["-date", "-time"]
        indexes = [
            models.Index(fields=["date", "time"]),
            models.Index(fields=["customer"]),
            models.Index(fields=["status"]),
        ]

    def __str__(self) -> str:
        return f"{self.confirmation_code} - {self.name} ({self.date} {self.time})"

    def save(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        self.email = self.email.lower()
        super().save(*args, **kwargs)
