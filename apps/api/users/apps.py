"""Django app configuration for users module."""

from django.apps import AppConfig


class UsersConfig(AppConfig):
    """User administration app configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.api.users"
    verbose_name = "Users"
