"""Django app configuration for menu module."""

from django.apps import AppConfig


class MenuConfig(AppConfig):
    """Menu app configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.api.menu"
    verbose_name = "Menu"
