"""
URL routing for reservation API endpoints.
"""

from django.urls import path

from apps.api.reservations import views

app_name = "reservations"

urlpatterns = [
    path("reservations", views.reservations_collection, name="collection"),
    path("reservations/all", views.all_reservations, name="all"),
    path(
        "reservations/<int:reservation_id>/status",
        views.update_status,
        name="status",
    ),
    path("reservations/<int:reservation_id>", views.cancel, name="cancel"),
]
