"""
URL configuration for Tavola.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    # JSON API
    path("api/", include("apps.api.core.urls")),
    path("api/", include("apps.api.users.urls")),
    path("api/", include("apps.api.menu.urls")),
    path("api/", include("apps.api.orders.urls")),
    path("api/", include("apps.api.reservations.urls")),
    path("api/", include("apps.api.dashboard.urls")),
]

handler404 = "apps.api.core.views.not_found"
