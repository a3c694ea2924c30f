"""
Order services - pricing, order creation, status lifecycle and ratings.

Order creation resolves every cart line against the catalog, prices it,
allocates a per-day order number and persists the order in one transaction.
"""

import logging
from collections.abc import Iterable
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import F, QuerySet
from django.utils import timezone

from pydantic import BaseModel, Field

from apps.api.core.exceptions import ValidationError
from apps.api.core.models import User
from apps.api.menu.models import MenuItem

from .exceptions import (
    AlreadyRated,
    DuplicateOrderNumber,
    InvalidStatus,
    ItemNotFound,
    ItemUnavailable,
    NotAuthorized,
    OrderNotDeliverable,
    OrderNotFound,
)
from .lifecycle import check_transition
from .models import Order, OrderItem, OrderNumberSequence, OrderStatus, OrderType
from .serializers import OrderCreateRequest, OrderLineRequest

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class PricedLine(BaseModel):
    """A cart line resolved against the catalog."""

    menu_item_id: int
    item_name: str
    quantity: int
    unit_price: Decimal
    customizations: list[dict] = Field(default_factory=list)
    special_instructions: str = ""
    line_total: Decimal


class OrderTotals(BaseModel):
    """Computed order amounts."""

    subtotal: Decimal
    tax: Decimal
    delivery_fee: Decimal
    total: Decimal


def calculate_totals(line_totals: Iterable[Decimal], order_type: str) -> OrderTotals:
    """
    Compute subtotal, tax, delivery fee and total.

    Tax is rounded half-up to the cent. Customization prices are not part
    of the line totals.

    Args:
        line_totals: unit_price * quantity for each line, in submission order
        order_type: One of OrderType

    Returns:
        OrderTotals where total == subtotal + tax + delivery_fee
    """
    subtotal = sum(line_totals, Decimal("0")).quantize(CENT)
    tax = (subtotal * Decimal(settings.ORDER_TAX_RATE)).quantize(
        CENT, rounding=ROUND_HALF_UP
    )
    delivery_fee = (
        Decimal(settings.ORDER_DELIVERY_FEE).quantize(CENT)
        if order_type == OrderType.DELIVERY
        else Decimal("0.00")
    )
    return OrderTotals(
        subtotal=subtotal,
        tax=tax,
        delivery_fee=delivery_fee,
        total=subtotal + tax + delivery_fee,
    )


def price_lines(lines: list[OrderLineRequest]) -> list[PricedLine]:
    """
    Resolve cart lines against the catalog and snapshot their prices.

    Raises:
        ItemNotFound: If a line references a missing menu item
        ItemUnavailable: If a line references an unavailable menu item
    """
    catalog = MenuItem.objects.in_bulk({line.menu_item_id for line in lines})

    priced = []
    for index, line in enumerate(lines):
        menu_item = catalog.get(line.menu_item_id)
        if menu_item is None:
            raise ItemNotFound(line.menu_item_id, index)
        if not menu_item.is_available:
            raise ItemUnavailable(menu_item.name, menu_item.pk, index)

        priced.append(
            PricedLine(
                menu_item_id=menu_item.pk,
                item_name=menu_item.name,
                quantity=line.quantity,
                unit_price=menu_item.price,
                customizations=[
                    c.model_dump(mode="json") for c in line.customizations
                ],
                special_instructions=line.special_instructions,
                line_total=(menu_item.price * line.quantity).quantize(CENT),
            )
        )
    return priced


def next_order_number(day: date | None = None) -> str:
    """
    Allocate the next order number for a calendar day.

    Must run inside a transaction: the day's counter row stays locked until
    the caller commits.

    Returns:
        Order number like ORD20240115007
    """
    day = day or timezone.localdate()
    sequence, _ = OrderNumberSequence.objects.select_for_update().get_or_create(
        day=day
    )
    sequence.last_value = F("last_value") + 1
    sequence.save(update_fields=["last_value"])
    sequence.refresh_from_db(fields=["last_value"])
    return f"ORD{day:%Y%m%d}{sequence.last_value:03d}"


def create_order(customer: User, request: OrderCreateRequest) -> Order:
    """
    Create a pending order for a customer.

    Args:
        customer: The ordering user
        request: Validated cart, order type, payment method and address

    Returns:
        The persisted Order with its line items

    Raises:
        ValidationError: If the cart is empty or a delivery address is missing
        ItemNotFound: If a menu item does not exist
        ItemUnavailable: If a menu item is unavailable
        DuplicateOrderNumber: If the allocated order number is already taken
    """
    if not request.items:
        raise ValidationError.for_field("items", "Order must contain at least one item")

    is_delivery = request.order_type == OrderType.DELIVERY
    if is_delivery and request.delivery_address is None:
        raise ValidationError.for_field(
            "delivery_address", "Delivery address is required for delivery orders"
        )

    with transaction.atomic():
        lines = price_lines(request.items)
        totals = calculate_totals(
            (line.line_total for line in lines), request.order_type
        )
        order_number = next_order_number()

        try:
            with transaction.atomic():
                order = Order.objects.create(
                    order_number=order_number,
                    customer=customer,
                    subtotal=totals.subtotal,
                    tax=totals.tax,
                    delivery_fee=totals.delivery_fee,
                    total=totals.total,
                    order_type=request.order_type,
                    payment_method=request.payment_method,
                    delivery_address=(
                        request.delivery_address.model_dump(mode="json")
                        if is_delivery and request.delivery_address
                        else None
                    ),
                    special_instructions=request.special_instructions,
                )
        except IntegrityError as exc:
            logger.error("Order number %s already in use", order_number)
            raise DuplicateOrderNumber() from exc

        OrderItem.objects.bulk_create(
            [
                OrderItem(
                    order=order,
                    menu_item_id=line.menu_item_id,
                    item_name=line.item_name,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    customizations=line.customizations,
                    special_instructions=line.special_instructions,
                    line_total=line.line_total,
                )
                for line in lines
            ]
        )

    logger.info(
        "Order %s created for customer %s (total %s)",
        order.order_number,
        customer.pk,
        order.total,
    )
    return order


def _get_order(order_id: int, for_update: bool = False) -> Order:
    queryset = Order.objects.select_related("customer", "assigned_employee")
    if for_update:
        queryset = queryset.select_for_update(of=("self",))
    try:
        return queryset.get(pk=order_id)
    except Order.DoesNotExist as exc:
        raise OrderNotFound() from exc


def get_order_for_user(order_id: int, user: User) -> Order:
    """
    Fetch an order the user may read.

    Raises:
        OrderNotFound: If the order does not exist
        NotAuthorized: If a customer asks for someone else's order
    """
    order = _get_order(order_id)
    if not user.is_restaurant_staff and order.customer_id != user.pk:
        raise NotAuthorized()
    return order


def transition_status(
    order_id: int,
    target: str,
    actor: User,
    estimated_delivery_time: datetime | None = None,
) -> Order:
    """
    Move an order to a new lifecycle status.

    Stamps the delivery time when the order is delivered and assigns the
    acting staff member if nobody is assigned yet.

    Raises:
        InvalidStatus: If target is not a lifecycle status
        OrderNotFound: If the order does not exist
        IllegalTransition: If the lifecycle does not allow the change
    """
    if target not in OrderStatus.values:
        raise InvalidStatus(target)

    with transaction.atomic():
        order = _get_order(order_id, for_update=True)
        previous = order.status
        check_transition(previous, target)

        order.status = target
        update_fields = ["status", "updated_at"]

        if target == OrderStatus.DELIVERED:
            order.actual_delivery_time = timezone.now()
            update_fields.append("actual_delivery_time")
        if estimated_delivery_time is not None:
            order.estimated_delivery_time = estimated_delivery_time
            update_fields.append("estimated_delivery_time")
        if order.assigned_employee_id is None:
            order.assigned_employee = actor
            update_fields.append("assigned_employee")

        order.save(update_fields=update_fields)

    logger.info(
        "Order %s moved from %s to %s by user %s",
        order.order_number,
        previous,
        target,
        actor.pk,
    )
    return order


def rate_order(order_id: int, customer: User, rating: int, review: str = "") -> Order:
    """
    Attach a rating and review to a delivered order, once.

    Raises:
        OrderNotFound: If the order does not exist
        NotAuthorized: If the caller does not own the order
        OrderNotDeliverable: If the order has not been delivered
        AlreadyRated: If the order already carries a rating
    """
    with transaction.atomic():
        order = _get_order(order_id, for_update=True)

        if order.customer_id != customer.pk:
            raise NotAuthorized("Not authorized to rate this order")
        if order.status != OrderStatus.DELIVERED:
            raise OrderNotDeliverable()
        if order.is_rated:
            raise AlreadyRated()

        order.rating = rating
        order.review = review
        order.save(update_fields=["rating", "review", "updated_at"])

    logger.info("Order %s rated %s by customer %s", order.order_number, rating, customer.pk)
    return order


def orders_for(user: User | None = None, status: str | None = None) -> QuerySet[Order]:
    """
    Orders newest first, optionally limited to one customer and status.

    Raises:
        InvalidStatus: If status is not a lifecycle status
    """
    orders = Order.objects.select_related("customer", "assigned_employee")
    if user is not None:
        orders = orders.filter(customer=user)
    if status:
        if status not in OrderStatus.values:
            raise InvalidStatus(status)
        orders = orders.filter(status=status)
    return orders.prefetch_related("items").order_by("-created_at", "-pk")
