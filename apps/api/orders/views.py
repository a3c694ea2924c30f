"""
Order API views - checkout, listings, status updates and ratings.
"""

from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.api.core.decorators import auth_required, customer_only, idempotent, staff_only
from apps.api.core.responses import dump, paginate, parse_body, parse_query, success

from . import services
from .models import Order
from .serializers import (
    OrderCreateRequest,
    OrderQuery,
    OrderSchema,
    RateOrderRequest,
    StatusUpdateRequest,
)

CUSTOMER_PAGE_SIZE = 10
STAFF_PAGE_SIZE = 20


def _serialize_order(order: Order) -> dict[str, Any]:
    return dump(OrderSchema.model_validate(order))


def _order_page(request: HttpRequest, default_limit: int, own: bool) -> JsonResponse:
    query = parse_query(request, OrderQuery)
    orders = services.orders_for(
        user=request.user if own else None,
        status=query.status,
    )
    page_items, pagination = paginate(orders, query.page, query.limit or default_limit)
    return success(
        {
            "orders": [_serialize_order(order) for order in page_items],
            "pagination": pagination,
        }
    )


@customer_only
@idempotent
def _create_order(request: HttpRequest) -> JsonResponse:
    """
    POST /api/orders

    Customers only. Honors an optional Idempotency-Key header.
    """
    payload = parse_body(request, OrderCreateRequest)
    order = services.create_order(request.user, payload)
    return success(
        {"order": _serialize_order(order)},
        message="Order created successfully",
        status=201,
    )


@auth_required
def _list_own_orders(request: HttpRequest) -> JsonResponse:
    """
    GET /api/orders

    The caller's orders, newest first. Optional status filter.
    """
    return _order_page(request, CUSTOMER_PAGE_SIZE, own=True)


@csrf_exempt
@require_http_methods(["GET", "POST"])
def orders_collection(request: HttpRequest) -> JsonResponse:
    """Dispatch /api/orders by method."""
    if request.method == "POST":
        return _create_order(request)
    return _list_own_orders(request)


@require_GET
@staff_only
def all_orders(request: HttpRequest) -> JsonResponse:
    """
    GET /api/orders/admin/all

    Staff only. Every order, newest first.
    """
    return _order_page(request, STAFF_PAGE_SIZE, own=False)


@require_GET
@auth_required
def order_detail(request: HttpRequest, order_id: int) -> JsonResponse:
    """
    GET /api/orders/{id}

    Customers may only read their own orders.
    """
    order = services.get_order_for_user(order_id, request.user)
    return success({"order": _serialize_order(order)})


@csrf_exempt
@require_http_methods(["PATCH"])
@staff_only
def update_status(request: HttpRequest, order_id: int) -> JsonResponse:
    """
    PATCH /api/orders/{id}/status

    Staff only. Follows the order lifecycle; illegal moves return 409.
    """
    payload = parse_body(request, StatusUpdateRequest)
    order = services.transition_status(
        order_id,
        payload.status,
        request.user,
        estimated_delivery_time=payload.estimated_delivery_time,
    )
    return success(
        {"order": _serialize_order(order)},
        message="Order status updated successfully",
    )


@csrf_exempt
@require_POST
@customer_only
def rate_order(request: HttpRequest, order_id: int) -> JsonResponse:
    """
    POST /api/orders/{id}/rate

    Owner only, once, after delivery.
    """
    payload = parse_body(request, RateOrderRequest)
    order = services.rate_order(order_id, request.user, payload.rating, payload.review)
    return success(
        {"order": _serialize_order(order)},
        message="Order rated successfully",
    )
