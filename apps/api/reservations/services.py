"""
Reservation services - booking creation with confirmation codes, status
updates and cancellation.
"""

import logging
import secrets
import string
from datetime import date

from django.db import IntegrityError, transaction
from django.db.models import QuerySet

from apps.api.core.exceptions import AuthorizationError
from apps.api.core.models import User

from .exceptions import ConfirmationCodeExhausted, ReservationNotFound
from .models import CONFIRMATION_CODE_LENGTH, Reservation, ReservationStatus
from .serializers import ReservationCreateRequest, ReservationStatusRequest

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits
MAX_CODE_ATTEMPTS = 5


def generate_confirmation_code() -> str:
    """Random code like 'K7Q2ZD'."""
    return "".join(
        secrets.choice(CODE_ALPHABET) for _ in range(CONFIRMATION_CODE_LENGTH)
    )


def create_reservation(
    customer: User, request: ReservationCreateRequest
) -> Reservation:
    """
    Book a table for a customer.

    A fresh confirmation code is drawn whenever the previous one collides
    with an existing reservation.

    Raises:
        ConfirmationCodeExhausted: If every attempt collided
    """
    for attempt in range(1, MAX_CODE_ATTEMPTS + 1):
        code = generate_confirmation_code()
        try:
            with transaction.atomic():
                reservation = Reservation.objects.create(
                    customer=customer,
                    confirmation_code=code,
                    **request.model_dump(),
                )
        except IntegrityError:
            logger.warning(
                "Confirmation code collision on attempt %s of %s",
                attempt,
                MAX_CODE_ATTEMPTS,
            )
            continue

        logger.info(
            "Reservation %s created for customer %s",
            reservation.confirmation_code,
            customer.pk,
        )
        return reservation

    raise ConfirmationCodeExhausted()


def reservations_for(customer: User) -> QuerySet[Reservation]:
    """The customer's reservations, latest date first."""
    return (
        Reservation.objects.filter(customer=customer)
        .select_related("customer")
        .order_by("-date", "-time")
    )


def all_reservations(on_date: date | None = None) -> QuerySet[Reservation]:
    """Every reservation, optionally for a single day."""
    reservations = Reservation.objects.select_related("customer")
    if on_date is not None:
        reservations = reservations.filter(date=on_date)
    return reservations.order_by("-date", "-time")


def _get_reservation(reservation_id: int) -> Reservation:
    try:
        return Reservation.objects.select_related("customer").get(pk=reservation_id)
    except Reservation.DoesNotExist as exc:
        raise ReservationNotFound() from exc


def update_status(
    reservation_id: int, request: ReservationStatusRequest, actor: User
) -> Reservation:
    """
    Set a reservation's status. Any status may follow any other.

    Raises:
        ReservationNotFound: If the reservation does not exist
    """
    reservation = _get_reservation(reservation_id)
    reservation.status = request.status
    update_fields = ["status", "updated_at"]

    if request.table_number is not None:
        reservation.table_number = request.table_number
        update_fields.append("table_number")
    if request.notes is not None:
        reservation.notes = request.notes
        update_fields.append("notes")
    if reservation.assigned_employee_id is None:
        reservation.assigned_employee = actor
        update_fields.append("assigned_employee")

    reservation.save(update_fields=update_fields)
    logger.info(
        "Reservation %s set to %s by user %s",
        reservation.confirmation_code,
        request.status,
        actor.pk,
    )
    return reservation


def cancel_reservation(reservation_id: int, user: User) -> Reservation:
    """
    Cancel a reservation. Customers may only cancel their own.

    Raises:
        ReservationNotFound: If the reservation does not exist
        AuthorizationError: If a customer cancels someone else's reservation
    """
    reservation = _get_reservation(reservation_id)
    if not user.is_restaurant_staff and reservation.customer_id != user.pk:
        raise AuthorizationError("Not authorized")

    reservation.status = ReservationStatus.CANCELLED
    reservation.save(update_fields=["status", "updated_at"])
    logger.info(
        "Reservation %s cancelled by user %s", reservation.confirmation_code, user.pk
    )
    return reservation
