"""Admin registration for reservation models."""

from django.contrib import admin

from apps.api.reservations.models import Reservation


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    """Admin for reservations."""

    list_display = [
        "confirmation_code",
        "name",
        "date",
        "time",
        "party_size",
        "status",
        "occasion",
    ]
    list_filter = ["status", "occasion", "date"]
    search_fields = ["confirmation_code", "name", "email", "phone"]
    readonly_fields = ["confirmation_code", "created_at", "updated_at"]
