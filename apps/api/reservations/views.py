"""
Reservation API views.
"""

from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from apps.api.core.decorators import auth_required, customer_only, staff_only
from apps.api.core.responses import dump, parse_body, parse_query, success

from . import services
from .models import Reservation
from .serializers import (
    ReservationCreateRequest,
    ReservationQuery,
    ReservationSchema,
    ReservationStatusRequest,
)


def _serialize(reservation: Reservation) -> dict[str, Any]:
    return dump(ReservationSchema.model_validate(reservation))


@customer_only
def _create(request: HttpRequest) -> JsonResponse:
    """POST /api/reservations"""
    payload = parse_body(request, ReservationCreateRequest)
    reservation = services.create_reservation(request.user, payload)
    return success(
        {"reservation": _serialize(reservation)},
        message="Reservation created",
        status=201,
    )


@customer_only
def _list_own(request: HttpRequest) -> JsonResponse:
    """GET /api/reservations"""
    reservations = services.reservations_for(request.user)
    return success({"reservations": [_serialize(r) for r in reservations]})


@csrf_exempt
@require_http_methods(["GET", "POST"])
def reservations_collection(request: HttpRequest) -> JsonResponse:
    """Dispatch /api/reservations by method."""
    if request.method == "POST":
        return _create(request)
    return _list_own(request)


@require_GET
@staff_only
def all_reservations(request: HttpRequest) -> JsonResponse:
    """
    GET /api/reservations/all

    Staff only. Optional ?date=YYYY-MM-DD filter.
    """
    query = parse_query(request, ReservationQuery)
    reservations = services.all_reservations(query.date)
    return success({"reservations": [_serialize(r) for r in reservations]})


@csrf_exempt
@require_http_methods(["PATCH"])
@staff_only
def update_status(request: HttpRequest, reservation_id: int) -> JsonResponse:
    """PATCH /api/reservations/{id}/status"""
    payload = parse_body(request, ReservationStatusRequest)
    reservation = services.update_status(reservation_id, payload, request.user)
    return success(
        {"reservation": _serialize(reservation)},
        message="Reservation status updated",
    )


@csrf_exempt
@require_http_methods(["DELETE"])
@auth_required
def cancel(request: HttpRequest, reservation_id: int) -> JsonResponse:
    """
    DELETE /api/reservations/{id}

    Owner or staff. The reservation is kept with status cancelled.
    """
    reservation = services.cancel_reservation(reservation_id, request.user)
    return success(
        {"reservation": _serialize(reservation)},
        message="Reservation cancelled",
    )
