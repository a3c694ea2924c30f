"""Admin registration for order models."""

from django.contrib import admin

from apps.api.orders.models import Order, OrderItem, OrderNumberSequence


class OrderItemInline(admin.TabularInline):  # type: ignore[type-arg]
    """Line items within an order."""

    model = OrderItem
    extra = 0
    fields = ["item_name", "quantity", "unit_price", "line_total"]
    readonly_fields = ["item_name", "quantity", "unit_price", "line_total"]


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    """Admin for orders."""

    list_display = [
        "order_number",
        "customer",
        "status",
        "order_type",
        "total",
        "payment_status",
        "created_at",
    ]
    list_filter = ["status", "order_type", "payment_status"]
    search_fields = ["order_number", "customer__email", "customer__name"]
    readonly_fields = [
        "order_number",
        "subtotal",
        "tax",
        "delivery_fee",
        "total",
        "created_at",
        "updated_at",
    ]
    inlines = [OrderItemInline]


@admin.register(OrderNumberSequence)
class OrderNumberSequenceAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["day", "last_value"]
    readonly_fields = ["day", "last_value"]
