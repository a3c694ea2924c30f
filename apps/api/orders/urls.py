"""
URL routing for order API endpoints.
"""

from django.urls import path

from apps.api.orders import views

app_name = "orders"

urlpatterns = [
    path("orders", views.orders_collection, name="collection"),
    path("orders/admin/all", views.all_orders, name="all"),
    path("orders/<int:order_id>", views.order_detail, name="detail"),
    path("orders/<int:order_id>/status", views.update_status, name="status"),
    path("orders/<int:order_id>/rate", views.rate_order, name="rate"),
]
