"""Order engine exceptions.

Each maps onto one of the API error categories so the middleware can render
it without extra translation.
"""

from apps.api.core.exceptions import (
    AuthorizationError,
    ConflictError,
    FieldError,
    NotFoundError,
    ValidationError,
)


class OrderNotFound(NotFoundError):
    """Order does not exist."""

    default_message = "Order not found"


class ItemNotFound(ValidationError):
    """A cart line references a menu item that does not exist."""

    def __init__(self, menu_item_id: int, index: int) -> None:
        message = f"Menu item with ID {menu_item_id} not found"
        super().__init__(
            message, errors=[FieldError(f"items.{index}.menu_item_id", message)]
        )
        self.menu_item_id = menu_item_id


class ItemUnavailable(ValidationError):
    """A cart line references a menu item that is switched off."""

    def __init__(self, name: str, menu_item_id: int, index: int) -> None:
        message = f"{name} is currently unavailable"
        super().__init__(
            message, errors=[FieldError(f"items.{index}.menu_item_id", message)]
        )
        self.menu_item_id = menu_item_id


class InvalidStatus(ValidationError):
    """Requested status is not one of the lifecycle statuses."""

    def __init__(self, status: str) -> None:
        message = f"Invalid status: {status}"
        super().__init__(message, errors=[FieldError("status", message)])


class NotAuthorized(AuthorizationError):
    """Caller may not act on this order."""

    default_message = "Not authorized to view this order"


class IllegalTransition(ConflictError):
    """Requested status change is not in the lifecycle table."""


class OrderNotDeliverable(ConflictError):
    """Order cannot be rated before it is delivered."""

    default_message = "Can only rate delivered orders"


class AlreadyRated(ConflictError):
    """Order already carries a rating."""

    default_message = "Order has already been rated"


class DuplicateOrderNumber(ConflictError):
    """The order number counter produced a value already in use."""

    default_message = "Could not allocate an order number"
