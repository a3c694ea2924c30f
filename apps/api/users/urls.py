"""
URL routing for user administration endpoints.
"""

from django.urls import path

from apps.api.users import views

app_name = "users"

urlpatterns = [
    path("users", views.list_users, name="list"),
    path("users/me", views.update_profile, name="me"),
    path("users/<int:user_id>/role", views.update_role, name="role"),
    path("users/<int:user_id>/activate", views.set_active, name="activate"),
]
