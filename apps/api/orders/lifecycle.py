"""
Order lifecycle - the allowed status transitions.

pending -> confirmed -> preparing -> ready -> out_for_delivery -> delivered,
with cancelled reachable from every non-terminal status. Orders that are not
delivered to an address may go straight from ready to delivered.
"""

from apps.api.orders.exceptions import IllegalTransition
from apps.api.orders.models import OrderStatus

TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})

TRANSITIONS: dict[str, frozenset[str]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PREPARING, OrderStatus.CANCELLED}),
    OrderStatus.PREPARING: frozenset({OrderStatus.READY, OrderStatus.CANCELLED}),
    OrderStatus.READY: frozenset(
        {
            OrderStatus.OUT_FOR_DELIVERY,
            OrderStatus.DELIVERED,
            OrderStatus.CANCELLED,
        }
    ),
    OrderStatus.OUT_FOR_DELIVERY: frozenset(
        {OrderStatus.DELIVERED, OrderStatus.CANCELLED}
    ),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def allowed_targets(current: str) -> frozenset[str]:
    """Statuses reachable from the current one."""
    return TRANSITIONS.get(current, frozenset())


def can_transition(current: str, target: str) -> bool:
    return target in allowed_targets(current)


def check_transition(current: str, target: str) -> None:
    """
    Validate a status change.

    Raises:
        IllegalTransition: If the change is not in the transition table
    """
    if not can_transition(current, target):
        if current in TERMINAL_STATUSES:
            raise IllegalTransition(f"Order is already {current}")
        raise IllegalTransition(f"Cannot change order status from {current} to {target}")
