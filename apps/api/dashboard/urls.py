"""
Dashboard URL routes.
"""

from django.urls import path

from . import views

app_name = "dashboard"

urlpatterns = [
    path("dashboard/admin", views.admin_dashboard, name="admin"),
    path("dashboard/employee", views.employee_dashboard, name="employee"),
    path("dashboard/customer", views.customer_dashboard, name="customer"),
]
