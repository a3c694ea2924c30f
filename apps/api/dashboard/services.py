"""
Dashboard services - summary counts and sums per role.

Revenue and spend exclude cancelled orders.
"""

from decimal import Decimal
from typing import Any

from django.db.models import Count, QuerySet, Sum
from django.utils import timezone

from apps.api.core.models import User
from apps.api.orders.models import Order, OrderStatus
from apps.api.reservations.models import Reservation


def _revenue(orders: QuerySet[Order]) -> Decimal:
    total = (
        orders.exclude(status=OrderStatus.CANCELLED)
        .aggregate(total=Sum("total"))["total"]
    )
    return total or Decimal("0.00")


def admin_summary() -> dict[str, Any]:
    """Restaurant-wide totals."""
    return {
        "total_users": User.objects.count(),
        "total_orders": Order.objects.count(),
        "total_revenue": _revenue(Order.objects.all()),
        "total_reservations": Reservation.objects.count(),
    }


def employee_summary() -> dict[str, Any]:
    """Today's reservations and open work by order status."""
    by_status = {status: 0 for status in OrderStatus.values}
    rows = Order.objects.order_by().values("status").annotate(count=Count("pk"))
    for row in rows:
        by_status[row["status"]] = row["count"]

    today_reservations = (
        Reservation.objects.filter(date=timezone.localdate())
        .select_related("customer")
        .order_by("time")
    )
    return {
        "today_reservations": list(today_reservations),
        "orders_by_status": by_status,
    }


def customer_summary(customer: User) -> dict[str, Any]:
    """The customer's order count, spend and reservations."""
    orders = Order.objects.filter(customer=customer)
    reservations = (
        Reservation.objects.filter(customer=customer)
        .select_related("customer")
        .order_by("-date", "-time")
    )
    return {
        "total_orders": orders.count(),
        "total_spent": _revenue(orders),
        "reservations": list(reservations),
    }
