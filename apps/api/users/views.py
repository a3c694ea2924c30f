"""
User administration API views - admin user management and self-service
profile updates.
"""

import logging
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from apps.api.core.decorators import admin_only, auth_required
from apps.api.core.exceptions import NotFoundError, ValidationError
from apps.api.core.models import User
from apps.api.core.responses import dump, parse_body, parse_query, success
from apps.api.core.serializers import UserSchema

from .serializers import (
    ActivationRequest,
    ProfileUpdateRequest,
    RoleUpdateRequest,
    UserQuery,
)

logger = logging.getLogger(__name__)


def _serialize_user(user: User) -> dict[str, Any]:
    return dump(UserSchema.model_validate(user))


def _get_user_or_404(user_id: int) -> User:
    try:
        return User.objects.get(pk=user_id)
    except User.DoesNotExist as exc:
        raise NotFoundError("User not found") from exc


@require_GET
@admin_only
def list_users(request: HttpRequest) -> JsonResponse:
    """
    GET /api/users

    Admin only. Optional ?role= filter.
    """
    query = parse_query(request, UserQuery)
    users = User.objects.order_by("-date_joined")
    if query.role:
        users = users.filter(role=query.role)
    return success({"users": [_serialize_user(user) for user in users]})


@csrf_exempt
@require_http_methods(["PATCH"])
@auth_required
def update_profile(request: HttpRequest) -> JsonResponse:
    """
    PATCH /api/users/me

    Update the caller's name, phone or address.
    """
    payload = parse_body(request, ProfileUpdateRequest)
    user = request.user

    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in changes.items():
        setattr(user, field, value)
    if changes:
        user.save(update_fields=[*changes, "updated_at"])

    return success({"user": _serialize_user(user)}, message="Profile updated")


@csrf_exempt
@require_http_methods(["PATCH"])
@admin_only
def update_role(request: HttpRequest, user_id: int) -> JsonResponse:
    """
    PATCH /api/users/{id}/role

    Admin only. Admins cannot change their own role.
    """
    payload = parse_body(request, RoleUpdateRequest)
    user = _get_user_or_404(user_id)
    if user.pk == request.user.pk and payload.role != user.role:
        raise ValidationError.for_field("role", "You cannot change your own role")

    user.role = payload.role
    user.save(update_fields=["role", "updated_at"])

    logger.info("User %s role set to %s by admin %s", user.pk, user.role, request.user.pk)
    return success({"user": _serialize_user(user)}, message="User role updated")


@csrf_exempt
@require_http_methods(["PATCH"])
@admin_only
def set_active(request: HttpRequest, user_id: int) -> JsonResponse:
    """
    PATCH /api/users/{id}/activate

    Admin only. Deactivated users can no longer authenticate.
    """
    payload = parse_body(request, ActivationRequest)
    user = _get_user_or_404(user_id)
    if user.pk == request.user.pk and not payload.is_active:
        raise ValidationError.for_field("is_active", "You cannot deactivate yourself")

    user.is_active = payload.is_active
    user.save(update_fields=["is_active", "updated_at"])

    state = "activated" if user.is_active else "deactivated"
    logger.info("User %s %s by admin %s", user.pk, state, request.user.pk)
    return success({"user": _serialize_user(user)}, message=f"User {state}")
