"""
URL routing for menu API endpoints.

Reads are public; writes require the admin role.
"""

from django.urls import path

from apps.api.menu import views

app_name = "menu"

urlpatterns = [
    path("menu", views.menu_collection, name="collection"),
    path("menu/categories", views.categories, name="categories"),
    path("menu/<int:item_id>", views.menu_detail, name="detail"),
    path(
        "menu/<int:item_id>/availability",
        views.toggle_availability,
        name="availability",
    ),
]
