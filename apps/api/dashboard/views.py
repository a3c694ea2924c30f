"""
Dashboard API views - role-specific summaries.
"""

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET

from apps.api.core.decorators import admin_only, customer_only, staff_only
from apps.api.core.responses import dump, success
from apps.api.reservations.serializers import ReservationSchema

from . import services


@require_GET
@admin_only
def admin_dashboard(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/dashboard/admin

    Totals of users, orders, reservations and revenue.
    """
    summary = services.admin_summary()
    summary["total_revenue"] = str(summary["total_revenue"])
    return success(summary)


@require_GET
@staff_only
def employee_dashboard(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/dashboard/employee

    Today's reservations and order counts by status.
    """
    summary = services.employee_summary()
    summary["today_reservations"] = [
        dump(ReservationSchema.model_validate(r))
        for r in summary["today_reservations"]
    ]
    return success(summary)


@require_GET
@customer_only
def customer_dashboard(request: HttpRequest) -> JsonResponse:
    """
    GET /api/dashboard/customer

    The caller's order count, total spent and reservations.
    """
    summary = services.customer_summary(request.user)
    summary["total_spent"] = str(summary["total_spent"])
    summary["reservations"] = [
        dump(ReservationSchema.model_validate(r)) for r in summary["reservations"]
    ]
    return success(summary)
