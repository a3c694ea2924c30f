"""Django app configuration for reservations module."""

from django.apps import AppConfig


class ReservationsConfig(AppConfig):
    """Reservations app configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.api.reservations"
    verbose_name = "Reservations"
