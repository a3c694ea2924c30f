"""
Bearer credential handling - JWT issue and resolution.

Tokens are HS256 JWTs carrying the user id, email and role. They are read
from the Authorization header first, then from the token cookie.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

from django.conf import settings
from django.http import HttpRequest

import jwt

from .exceptions import AuthenticationError, AuthorizationError
from .models import User

logger = logging.getLogger(__name__)


def issue_token(user: User, expires_delta: timedelta | None = None) -> str:
    """
    Create a signed access token for a user.

    Args:
        user: The authenticated user
        expires_delta: Override for the configured token lifetime

    Returns:
        Encoded JWT string
    """
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)

    payload: dict[str, Any] = {
        "id": user.pk,
        "email": user.email,
        "role": user.role,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def get_request_token(request: HttpRequest) -> str | None:
    """Extract the bearer token from the header or the token cookie."""
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer"):
        parts = header.split(" ", 1)
        token = parts[1].strip() if len(parts) == 2 else ""
        if token:
            return token
    return request.COOKIES.get(settings.JWT_COOKIE_NAME) or None


def resolve(token: str) -> User:
    """
    Resolve a bearer token to an active user.

    Raises:
        AuthenticationError: If the token is invalid or expired, the user no
            longer exists, or the account is deactivated
    """
    try:
        payload = jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
    except jwt.ExpiredSignatureError as exc:
        raise AuthenticationError("Token expired. Please login again.") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthenticationError("Invalid token.") from exc

    try:
        user = User.objects.get(pk=payload.get("id"))
    except (User.DoesNotExist, ValueError, TypeError) as exc:
        raise AuthenticationError("Invalid token. User not found.") from exc

    if not user.is_active:
        raise AuthenticationError("Account is deactivated. Please contact support.")

    return user


def authenticate_request(request: HttpRequest) -> User:
    """Resolve the request's credential or raise AuthenticationError."""
    token = get_request_token(request)
    if not token:
        raise AuthenticationError("Access denied. No token provided.")
    try:
        return resolve(token)
    except AuthenticationError as e:
        logger.warning("Rejected credential on %s: %s", request.path, e.message)
        raise


def authorize(user: User, allowed_roles: tuple[str, ...]) -> None:
    """
    Check a user's role against an allow-list.

    Raises:
        AuthorizationError: If the role is not allowed
    """
    if user.role not in allowed_roles:
        raise AuthorizationError(
            f"Access denied. {user.role} role is not authorized "
            "to access this resource."
        )
