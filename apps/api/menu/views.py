"""
Menu API views - public catalog reads and admin maintenance.
"""

import logging
from decimal import Decimal
from typing import Any

from django.db.models import Q
from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from pydantic import BaseModel

from apps.api.core.decorators import admin_only
from apps.api.core.exceptions import NotFoundError
from apps.api.core.responses import dump, paginate, parse_body, parse_query, success
from apps.api.menu.models import MenuItem
from apps.api.menu.serializers import (
    MenuItemCreateRequest,
    MenuItemSchema,
    MenuItemUpdateRequest,
    MenuQuery,
)

logger = logging.getLogger(__name__)


def _serialize_item(item: MenuItem) -> dict[str, Any]:
    return dump(MenuItemSchema.model_validate(item))


def _field_values(payload: BaseModel, exclude_unset: bool = False) -> dict[str, Any]:
    """Model field values from a request schema (URLs as str, price as Decimal)."""
    values = payload.model_dump(mode="json", exclude_unset=exclude_unset)
    if values.get("price") is not None:
        values["price"] = Decimal(values["price"])
    return values


def _get_item_or_404(item_id: int) -> MenuItem:
    try:
        return MenuItem.objects.get(pk=item_id)
    except MenuItem.DoesNotExist as exc:
        raise NotFoundError("Menu item not found") from exc


def _list_items(request: HttpRequest) -> JsonResponse:
    """
    GET /api/menu

    Filter by category, availability and a search term; sorted by
    popularity then name.
    """
    query = parse_query(request, MenuQuery)

    items = MenuItem.objects.all()
    if query.category and query.category != "all":
        items = items.filter(category=query.category)
    if query.is_available is not None:
        items = items.filter(is_available=query.is_available)
    if query.search:
        term = query.search.strip()
        items = items.filter(
            Q(name__icontains=term)
            | Q(description__icontains=term)
            | Q(tags__icontains=term)
        )

    page_items, pagination = paginate(
        items.order_by("-popularity", "name"), query.page, query.limit
    )
    return success(
        {
            "menu_items": [_serialize_item(item) for item in page_items],
            "pagination": pagination,
        }
    )


@admin_only
def _create_item(request: HttpRequest) -> JsonResponse:
    """
    POST /api/menu

    Admin only.
    """
    payload = parse_body(request, MenuItemCreateRequest)
    item = MenuItem.objects.create(**_field_values(payload))
    logger.info("Menu item %s created by user %s", item.pk, request.user.pk)
    return success(
        {"menu_item": _serialize_item(item)},
        message="Menu item created successfully",
        status=201,
    )


@csrf_exempt
@require_http_methods(["GET", "POST"])
def menu_collection(request: HttpRequest) -> JsonResponse:
    """Dispatch /api/menu by method."""
    if request.method == "POST":
        return _create_item(request)
    return _list_items(request)


@require_GET
def categories(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/menu/categories

    Distinct categories currently in use.
    """
    names = sorted(
        MenuItem.objects.order_by().values_list("category", flat=True).distinct()
    )
    return success({"categories": names})


def _get_item(_request: HttpRequest, item_id: int) -> JsonResponse:
    """GET /api/menu/{id}"""
    return success({"menu_item": _serialize_item(_get_item_or_404(item_id))})


@admin_only
def _update_item(request: HttpRequest, item_id: int) -> JsonResponse:
    """
    PUT /api/menu/{id}

    Admin only. Partial update: omitted fields keep their values.
    """
    item = _get_item_or_404(item_id)
    payload = parse_body(request, MenuItemUpdateRequest)
    values = {
        field: value
        for field, value in _field_values(payload, exclude_unset=True).items()
        if value is not None
    }

    for field, value in values.items():
        setattr(item, field, value)
    if values:
        item.save(update_fields=[*values, "updated_at"])
        item.refresh_from_db()

    logger.info("Menu item %s updated by user %s", item.pk, request.user.pk)
    return success(
        {"menu_item": _serialize_item(item)},
        message="Menu item updated successfully",
    )


@admin_only
def _delete_item(request: HttpRequest, item_id: int) -> JsonResponse:
    """
    DELETE /api/menu/{id}

    Admin only. Existing orders keep their line snapshots.
    """
    item = _get_item_or_404(item_id)
    item.delete()
    logger.info("Menu item %s deleted by user %s", item_id, request.user.pk)
    return success(message="Menu item deleted successfully")


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
def menu_detail(request: HttpRequest, item_id: int) -> JsonResponse:
    """Dispatch /api/menu/{id} by method."""
    if request.method == "PUT":
        return _update_item(request, item_id)
    if request.method == "DELETE":
        return _delete_item(request, item_id)
    return _get_item(request, item_id)


@csrf_exempt
@require_http_methods(["PATCH"])
@admin_only
def toggle_availability(request: HttpRequest, item_id: int) -> JsonResponse:
    """
    PATCH /api/menu/{id}/availability

    Admin only. Flips the availability flag.
    """
    item = _get_item_or_404(item_id)
    item.is_available = not item.is_available
    item.save(update_fields=["is_available", "updated_at"])

    state = "made available" if item.is_available else "made unavailable"
    logger.info("Menu item %s %s by user %s", item.pk, state, request.user.pk)
    return success(
        {"menu_item": _serialize_item(item)},
        message=f"Menu item {state}",
    )
