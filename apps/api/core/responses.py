"""
Response envelope, request parsing and pagination helpers shared by all views.

Every API response is {status, data?, message?, errors?}.
"""

import json
import math
from typing import Any, TypeVar

from django.db.models import QuerySet
from django.http import HttpRequest, JsonResponse

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import FieldError, ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def success(
    data: dict[str, Any] | None = None,
    message: str | None = None,
    status: int = 200,
) -> JsonResponse:
    """Create a success envelope response."""
    payload: dict[str, Any] = {"status": "success"}
    if message:
        payload["message"] = message
    if data is not None:
        payload["data"] = data
    return JsonResponse(payload, status=status)


def dump(schema: BaseModel) -> dict[str, Any]:
    """Serialize a response schema to JSON-compatible data."""
    return schema.model_dump(mode="json")


def field_errors(exc: PydanticValidationError) -> list[FieldError]:
    """Convert pydantic errors into field descriptors."""
    return [
        FieldError(
            field=".".join(str(loc) for loc in err["loc"]) or "body",
            message=err["msg"],
        )
        for err in exc.errors()
    ]


def parse_body(request: HttpRequest, schema: type[SchemaT]) -> SchemaT:
    """
    Parse and validate a JSON request body.

    Raises:
        ValidationError: If the body is not JSON or fails schema validation
    """
    try:
        body = json.loads(request.body or b"{}")
    except ValueError as exc:
        raise ValidationError("Invalid JSON in request body") from exc

    try:
        return schema.model_validate(body)
    except PydanticValidationError as e:
        raise ValidationError("Validation failed", errors=field_errors(e)) from e


def parse_query(request: HttpRequest, schema: type[SchemaT]) -> SchemaT:
    """Validate query-string parameters against a schema."""
    try:
        return schema.model_validate(request.GET.dict())
    except PydanticValidationError as e:
        raise ValidationError("Validation failed", errors=field_errors(e)) from e


def paginate(
    queryset: QuerySet[Any], page: int, limit: int
) -> tuple[list[Any], dict[str, int]]:
    """
    Slice a queryset and build pagination metadata.

    Returns:
        Tuple of (page_items, pagination)
    """
    total = queryset.count()
    offset = (page - 1) * limit
    items = list(queryset[offset : offset + limit])
    pagination = {
        "current_page": page,
        "total_pages": math.ceil(total / limit) if limit else 0,
        "total_items": total,
        "items_per_page": limit,
    }
    return items, pagination
