"""
URL routing for health and authentication endpoints.
"""

from django.urls import path

from apps.api.core import views

app_name = "auth"

urlpatterns = [
    path("health", views.health, name="health"),
    path("auth/register", views.register, name="register"),
    path("auth/login", views.login, name="login"),
    path("auth/me", views.me, name="me"),
    path("auth/logout", views.logout, name="logout"),
]
