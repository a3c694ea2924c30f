"""Reservation exceptions."""

from apps.api.core.exceptions import ConflictError, NotFoundError


class ReservationNotFound(NotFoundError):
    default_message = "Reservation not found"


class ConfirmationCodeExhausted(ConflictError):
    """Every generated confirmation code collided with an existing one."""

    default_message = "Could not generate a unique confirmation code"
