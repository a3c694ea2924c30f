"""
Decorators for request authentication, authorization and idempotency.
"""

import hashlib
import json
from collections.abc import Callable
from functools import wraps
from typing import Any

from django.core.cache import cache
from django.http import HttpRequest, JsonResponse

from .auth import authenticate_request, authorize
from .exceptions import ConflictError


def auth_required(view_func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator that resolves the bearer credential and sets request.user.

    Usage:
        @auth_required
        def me(request):
            ...
    """

    @wraps(view_func)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> Any:
        request.user = authenticate_request(request)
        return view_func(request, *args, **kwargs)

    return wrapper


def roles_required(*roles: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator that authenticates the request and checks the user's role.

    Usage:
        @roles_required("employee", "admin")
        def update_status(request, order_id):
            ...
    """

    def decorator(view_func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(view_func)
        def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> Any:
            user = authenticate_request(request)
            authorize(user, roles)
            request.user = user
            return view_func(request, *args, **kwargs)

        return wrapper

    return decorator


admin_only = roles_required("admin")
staff_only = roles_required("employee", "admin")
customer_only = roles_required("customer")


def idempotent(view_func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator that replays the first response for a repeated Idempotency-Key.

    The key is optional. When present it is scoped to the authenticated
    user, and successful responses are cached for 24 hours together with a
    hash of the request body. Reusing a key with a different body is a 409.

    Must be applied inside an authentication decorator.
    """

    @wraps(view_func)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> Any:
        key = request.headers.get("Idempotency-Key")
        if not key:
            return view_func(request, *args, **kwargs)

        cache_key = f"idempotency:{request.user.pk}:{key}"
        body_hash = hashlib.sha256(request.body).hexdigest()
        cached = cache.get(cache_key)

        if cached:
            if cached["body_hash"] != body_hash:
                raise ConflictError(
                    "Idempotency-Key was already used with a different request body"
                )
            return JsonResponse(
                cached["data"],
                status=cached["status"],
            )

        response = view_func(request, *args, **kwargs)

        if response.status_code < 400:
            cache.set(
                cache_key,
                {
                    "data": json.loads(response.content),
                    "status": response.status_code,
                    "body_hash": body_hash,
                },
                timeout=86400,  # 24 hours
            )

        return response

    return wrapper
