"""Admin registration for menu models."""

from django.contrib import admin

from apps.api.menu.models import MenuItem


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    """Admin for menu items."""

    list_display = ["name", "category", "price", "is_available", "popularity"]
    list_filter = ["category", "is_available", "is_vegetarian", "is_vegan"]
    list_editable = ["is_available"]
    search_fields = ["name", "description"]
    readonly_fields = ["created_at", "updated_at"]
