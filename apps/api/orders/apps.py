"""Django app configuration for orders module."""

from django.apps import AppConfig


class OrdersConfig(AppConfig):
    """Orders app configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.api.orders"
    verbose_name = "Orders"
