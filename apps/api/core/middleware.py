"""
API middleware - CORS headers and error envelope rendering.
"""

import logging
from collections.abc import Callable

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.http import (
    Http404,
    HttpRequest,
    HttpResponse,
    HttpResponseNotAllowed,
    JsonResponse,
)

from pydantic import ValidationError as PydanticValidationError

from .exceptions import (
    ApiError,
    AuthorizationError,
    InternalError,
    MethodNotAllowed,
    NotFoundError,
    ValidationError,
    error_payload,
)
from .responses import field_errors

logger = logging.getLogger(__name__)


def _is_api_request(request: HttpRequest) -> bool:
    return request.path.startswith("/api/")


class CorsMiddleware:
    """
    Middleware that adds CORS headers for the frontend origin.

    Answers preflight OPTIONS requests under /api/ directly.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        if not _is_api_request(request):
            return self.get_response(request)

        if request.method == "OPTIONS":
            response: HttpResponse = JsonResponse({})
        else:
            response = self.get_response(request)

        response["Access-Control-Allow-Origin"] = settings.CORS_ALLOWED_ORIGIN
        response["Access-Control-Allow-Credentials"] = "true"
        response["Access-Control-Allow-Methods"] = (
            "GET, POST, PUT, PATCH, DELETE, OPTIONS"
        )
        response["Access-Control-Allow-Headers"] = (
            "Authorization, Content-Type, Idempotency-Key"
        )
        return response


class ApiErrorMiddleware:
    """
    Middleware that renders exceptions raised by API views as the error envelope.

    ApiError subclasses keep their status and message. Anything unexpected
    becomes a 500 with a generic message; the traceback is only logged.
    405 responses from the require_* decorators are rewritten as envelopes.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        response = self.get_response(request)
        if _is_api_request(request) and isinstance(response, HttpResponseNotAllowed):
            error = MethodNotAllowed()
            envelope = JsonResponse(error_payload(error), status=error.status_code)
            envelope["Allow"] = response["Allow"]
            return envelope
        return response

    def process_exception(
        self, request: HttpRequest, exception: Exception
    ) -> HttpResponse | None:
        if not _is_api_request(request):
            return None

        if isinstance(exception, ApiError):
            error = exception
        elif isinstance(exception, Http404):
            error = NotFoundError(str(exception) or None)
        elif isinstance(exception, PermissionDenied):
            error = AuthorizationError(str(exception) or None)
        elif isinstance(exception, PydanticValidationError):
            error = ValidationError("Validation failed", errors=field_errors(exception))
        else:
            logger.exception(
                "Unhandled error on %s %s", request.method, request.path
            )
            error = InternalError()

        if error.status_code >= 500 and error is exception:
            logger.error("%s on %s: %s", type(error).__name__, request.path, error)

        return JsonResponse(error_payload(error), status=error.status_code)
