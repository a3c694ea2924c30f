"""
Authentication API views - register, login, current user, logout.
"""

import logging
from datetime import UTC, datetime

from django.conf import settings
from django.contrib.auth import authenticate
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from .auth import issue_token
from .decorators import auth_required
from .exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    error_payload,
)
from .models import User
from .responses import dump, parse_body, success
from .serializers import AuthResponse, LoginRequest, RegisterRequest, UserSchema

logger = logging.getLogger(__name__)


def _auth_response(user: User, message: str, status: int = 200) -> JsonResponse:
    """Build register/login response and set the token cookie."""
    token = issue_token(user)
    body = AuthResponse(user=UserSchema.model_validate(user), token=token)
    response = success(dump(body), message=message, status=status)
    response.set_cookie(
        settings.JWT_COOKIE_NAME,
        token,
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="Lax",
        secure=not settings.DEBUG,
    )
    return response


@require_GET
def health(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/health

    Liveness check.
    """
    return success(
        {"timestamp": datetime.now(UTC).isoformat()},
        message="Restaurant Management API is running",
    )


@csrf_exempt
@require_POST
def register(request: HttpRequest) -> JsonResponse:
    """
    POST /api/auth/register

    Create a customer account. Roles are only granted by admins.
    """
    payload = parse_body(request, RegisterRequest)

    if User.objects.filter(email=payload.email).exists():
        raise ConflictError("User already exists with this email")

    user = User.objects.create_user(
        email=payload.email,
        password=payload.password,
        name=payload.name,
        phone=payload.phone,
        role=User.Role.CUSTOMER,
    )
    user.last_login = timezone.now()
    user.save(update_fields=["last_login"])

    logger.info("Registered customer %s", user.pk)
    return _auth_response(user, "User registered successfully", status=201)


@csrf_exempt
@require_POST
def login(request: HttpRequest) -> JsonResponse:
    """
    POST /api/auth/login

    Exchange email and password for a bearer token.
    """
    payload = parse_body(request, LoginRequest)

    user = authenticate(request, email=payload.email, password=payload.password)
    if user is None:
        inactive = User.objects.filter(email=payload.email, is_active=False).first()
        if inactive is not None and inactive.check_password(payload.password):
            raise AuthenticationError(
                "Account is deactivated. Please contact support."
            )
        logger.warning("Failed login for %s", payload.email)
        raise AuthenticationError("Invalid credentials")

    user.last_login = timezone.now()
    user.save(update_fields=["last_login"])

    return _auth_response(user, "Login successful")


@require_GET
@auth_required
def me(request: HttpRequest) -> JsonResponse:
    """
    GET /api/auth/me

    Return the authenticated user.
    """
    return success({"user": dump(UserSchema.model_validate(request.user))})


@csrf_exempt
@require_POST
def logout(_request: HttpRequest) -> JsonResponse:
    """
    POST /api/auth/logout

    Clear the token cookie. Bearer tokens expire on their own.
    """
    response = success(message="Logged out successfully")
    response.delete_cookie(settings.JWT_COOKIE_NAME)
    return response


def not_found(request: HttpRequest, exception: Exception | None = None) -> JsonResponse:
    """Fallback 404 handler for unmatched routes."""
    error = NotFoundError(f"Route {request.path} not found")
    return JsonResponse(error_payload(error), status=error.status_code)
