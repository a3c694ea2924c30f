"""
Tests for order pricing, creation, status transitions and ratings.
"""

import threading
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from django.db import connection, connections
from django.utils import timezone

import pytest

from apps.api.core.exceptions import ValidationError
from apps.api.core.tests.factories import UserFactory
from apps.api.menu.tests.factories import MenuItemFactory
from apps.api.orders import services
from apps.api.orders.exceptions import (
    AlreadyRated,
    DuplicateOrderNumber,
    IllegalTransition,
    InvalidStatus,
    ItemNotFound,
    ItemUnavailable,
    NotAuthorized,
    OrderNotDeliverable,
)
from apps.api.orders.models import Order, OrderItem, OrderNumberSequence, OrderStatus
from apps.api.orders.serializers import OrderCreateRequest
from apps.api.orders.tests.factories import OrderFactory


def _cart(*lines, order_type="takeaway", **extra) -> OrderCreateRequest:
    return OrderCreateRequest.model_validate(
        {
            "items": [
                {"menu_item_id": item.pk, "quantity": quantity}
                for item, quantity in lines
            ],
            "order_type": order_type,
            "payment_method": "card",
            **extra,
        }
    )


DELIVERY_ADDRESS = {
    "street": "1 Main St",
    "city": "Springfield",
    "state": "IL",
    "zip_code": "62701",
    "country": "US",
}


@pytest.fixture
def caesar_salad():
    return MenuItemFactory(name="Caesar Salad", price=Decimal("12.99"))


class TestCalculateTotals:
    """Tests for subtotal, tax, fee and total arithmetic."""

    def test_takeaway(self):
        totals = services.calculate_totals([Decimal("25.98")], "takeaway")

        assert totals.subtotal == Decimal("25.98")
        assert totals.tax == Decimal("1.30")
        assert totals.delivery_fee == Decimal("0.00")
        assert totals.total == Decimal("27.28")

    def test_delivery_adds_flat_fee(self):
        totals = services.calculate_totals([Decimal("25.98")], "delivery")

        assert totals.delivery_fee == Decimal("50.00")
        assert totals.total == Decimal("77.28")

    def test_tax_rounds_half_up(self):
        # 0.10 * 0.05 = 0.005
        totals = services.calculate_totals([Decimal("0.10")], "dine_in")

        assert totals.tax == Decimal("0.01")

    @pytest.mark.parametrize(
        "line_totals",
        [
            [Decimal("0.00")],
            [Decimal("3.33"), Decimal("3.33"), Decimal("3.34")],
            [Decimal("19.99")] * 7,
            [Decimal("1234.57"), Decimal("0.01")],
        ],
    )
    @pytest.mark.parametrize("order_type", ["dine_in", "takeaway", "delivery"])
    def test_total_is_sum_of_parts(self, line_totals, order_type):
        totals = services.calculate_totals(line_totals, order_type)

        assert totals.total == totals.subtotal + totals.tax + totals.delivery_fee
        assert totals.tax == (totals.subtotal * Decimal("0.05")).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )

    def test_rates_come_from_settings(self, settings):
        settings.ORDER_TAX_RATE = Decimal("0.10")
        settings.ORDER_DELIVERY_FEE = Decimal("5")

        totals = services.calculate_totals([Decimal("10.00")], "delivery")

        assert totals.tax == Decimal("1.00")
        assert totals.total == Decimal("16.00")


@pytest.mark.django_db
class TestCreateOrder:
    """Tests for order creation."""

    def test_caesar_salad_takeaway(self, customer, caesar_salad):
        order = services.create_order(customer, _cart((caesar_salad, 2)))

        assert order.status == OrderStatus.PENDING
        assert order.subtotal == Decimal("25.98")
        assert order.tax == Decimal("1.30")
        assert order.delivery_fee == Decimal("0.00")
        assert order.total == Decimal("27.28")
        assert order.delivery_address is None

        line = order.items.get()
        assert line.item_name == "Caesar Salad"
        assert line.unit_price == Decimal("12.99")
        assert line.line_total == Decimal("25.98")

    def test_caesar_salad_delivery(self, customer, caesar_salad):
        order = services.create_order(
            customer,
            _cart(
                (caesar_salad, 2),
                order_type="delivery",
                delivery_address=DELIVERY_ADDRESS,
            ),
        )

        assert order.delivery_fee == Decimal("50.00")
        assert order.total == Decimal("77.28")
        assert order.delivery_address["city"] == "Springfield"

    def test_address_dropped_for_non_delivery(self, customer, caesar_salad):
        order = services.create_order(
            customer,
            _cart((caesar_salad, 1), order_type="dine_in", delivery_address=DELIVERY_ADDRESS),
        )

        assert order.delivery_address is None

    def test_delivery_requires_address(self, customer, caesar_salad):
        with pytest.raises(ValidationError) as exc_info:
            services.create_order(customer, _cart((caesar_salad, 1), order_type="delivery"))

        assert exc_info.value.errors[0].field == "delivery_address"
        assert not Order.objects.exists()

    def test_price_snapshot_survives_catalog_change(self, customer, caesar_salad):
        order = services.create_order(customer, _cart((caesar_salad, 2)))

        caesar_salad.price = Decimal("99.00")
        caesar_salad.save()

        order.refresh_from_db()
        assert order.items.get().unit_price == Decimal("12.99")
        assert order.total == Decimal("27.28")

    def test_lines_keep_submission_order(self, customer, caesar_salad):
        soup = MenuItemFactory(name="Soup", price=Decimal("5.00"))

        order = services.create_order(customer, _cart((soup, 1), (caesar_salad, 1)))

        assert [line.item_name for line in order.items.all()] == ["Soup", "Caesar Salad"]
        assert order.subtotal == Decimal("17.99")

    def test_customizations_recorded_but_not_priced(self, customer, caesar_salad):
        request = OrderCreateRequest.model_validate(
            {
                "items": [
                    {
                        "menu_item_id": caesar_salad.pk,
                        "quantity": 1,
                        "customizations": [
                            {"name": "Extra chicken", "price": "4.00"}
                        ],
                        "special_instructions": "Dressing on the side",
                    }
                ],
                "order_type": "takeaway",
                "payment_method": "cash",
            }
        )

        order = services.create_order(customer, request)

        line = order.items.get()
        assert line.customizations == [
            {"name": "Extra chicken", "option": None, "price": "4.00"}
        ]
        assert line.special_instructions == "Dressing on the side"
        assert order.subtotal == Decimal("12.99")

    def test_unavailable_item_writes_nothing(self, customer, caesar_salad):
        closed = MenuItemFactory(name="Lobster", is_available=False)

        with pytest.raises(ItemUnavailable, match="Lobster is currently unavailable"):
            services.create_order(customer, _cart((caesar_salad, 1), (closed, 1)))

        assert not Order.objects.exists()
        assert not OrderItem.objects.exists()
        assert not OrderNumberSequence.objects.exists()

    def test_missing_item(self, customer, caesar_salad):
        with pytest.raises(ItemNotFound) as exc_info:
            services.create_order(
                customer,
                OrderCreateRequest.model_validate(
                    {
                        "items": [
                            {"menu_item_id": caesar_salad.pk, "quantity": 1},
                            {"menu_item_id": 987654, "quantity": 1},
                        ],
                        "order_type": "takeaway",
                        "payment_method": "card",
                    }
                ),
            )

        assert exc_info.value.message == "Menu item with ID 987654 not found"
        assert exc_info.value.errors[0].field == "items.1.menu_item_id"
        assert not Order.objects.exists()

    def test_empty_cart_rejected_before_store_access(
        self, customer, django_assert_num_queries
    ):
        request = OrderCreateRequest.model_construct(
            items=[], order_type="takeaway", payment_method="card"
        )

        with django_assert_num_queries(0):
            with pytest.raises(ValidationError) as exc_info:
                services.create_order(customer, request)

        assert exc_info.value.errors[0].field == "items"


@pytest.mark.django_db
class TestOrderNumbers:
    """Tests for the per-day order number sequence."""

    def test_format(self, customer, caesar_salad):
        order = services.create_order(customer, _cart((caesar_salad, 1)))

        assert order.order_number == f"ORD{timezone.localdate():%Y%m%d}001"

    def test_sequence_increments(self, customer, caesar_salad):
        numbers = [
            services.create_order(customer, _cart((caesar_salad, 1))).order_number
            for _ in range(3)
        ]

        assert [number[-3:] for number in numbers] == ["001", "002", "003"]

    def test_deleted_orders_do_not_free_numbers(self, customer, caesar_salad):
        first = services.create_order(customer, _cart((caesar_salad, 1)))
        first.delete()

        second = services.create_order(customer, _cart((caesar_salad, 1)))

        assert second.order_number.endswith("002")

    def test_sequence_is_per_day(self):
        assert services.next_order_number(date(2024, 1, 15)) == "ORD20240115001"
        assert services.next_order_number(date(2024, 1, 16)) == "ORD20240116001"
        assert services.next_order_number(date(2024, 1, 15)) == "ORD20240115002"

    def test_sequence_grows_past_three_digits(self):
        OrderNumberSequence.objects.create(day=date(2024, 1, 15), last_value=999)

        assert services.next_order_number(date(2024, 1, 15)) == "ORD202401151000"

    def test_repeated_allocation_never_repeats(self):
        numbers = [services.next_order_number(date(2024, 1, 15)) for _ in range(50)]

        assert len(set(numbers)) == 50
        assert numbers[-1] == "ORD20240115050"

    def test_taken_number_rolls_back_the_order(self, customer, caesar_salad):
        taken = OrderFactory(order_number=f"ORD{timezone.localdate():%Y%m%d}001")

        with pytest.raises(DuplicateOrderNumber) as exc_info:
            services.create_order(customer, _cart((caesar_salad, 2)))

        assert exc_info.value.status_code == 409
        assert list(Order.objects.all()) == [taken]
        assert not OrderItem.objects.exists()
        assert not OrderNumberSequence.objects.filter(
            day=timezone.localdate()
        ).exists()


@pytest.mark.integration
@pytest.mark.django_db(transaction=True)
class TestConcurrentOrderNumbers:
    """Concurrent creation against a database with row locking."""

    def test_concurrent_orders_get_unique_numbers(self):
        if connection.vendor == "sqlite":
            pytest.skip("needs a database with row-level locking")

        customer = UserFactory()
        item = MenuItemFactory(price=Decimal("10.00"))
        errors: list[Exception] = []

        def place_order() -> None:
            try:
                services.create_order(customer, _cart((item, 1)))
            except Exception as exc:
                errors.append(exc)
            finally:
                connections.close_all()

        threads = [threading.Thread(target=place_order) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        numbers = list(Order.objects.values_list("order_number", flat=True))
        assert len(numbers) == 10
        assert len(set(numbers)) == 10


@pytest.mark.django_db
class TestTransitionStatus:
    """Tests for moving orders through the lifecycle."""

    def test_first_transition_assigns_staff(self, employee):
        order = OrderFactory()

        updated = services.transition_status(order.pk, "confirmed", employee)

        assert updated.status == OrderStatus.CONFIRMED
        assert updated.assigned_employee == employee

    def test_existing_assignee_kept(self, employee, admin_user):
        order = OrderFactory(status=OrderStatus.CONFIRMED, assigned_employee=employee)

        updated = services.transition_status(order.pk, "preparing", admin_user)

        assert updated.assigned_employee == employee

    def test_delivery_stamps_time(self, employee):
        order = OrderFactory(status=OrderStatus.OUT_FOR_DELIVERY)

        updated = services.transition_status(order.pk, "delivered", employee)

        assert updated.actual_delivery_time is not None
        order.refresh_from_db()
        assert order.status == OrderStatus.DELIVERED
        assert order.actual_delivery_time is not None

    def test_illegal_transition(self, employee):
        order = OrderFactory(status=OrderStatus.PENDING)

        with pytest.raises(IllegalTransition):
            services.transition_status(order.pk, "delivered", employee)

        order.refresh_from_db()
        assert order.status == OrderStatus.PENDING
        assert order.assigned_employee is None

    def test_unknown_status(self, employee):
        order = OrderFactory()

        with pytest.raises(InvalidStatus):
            services.transition_status(order.pk, "teleported", employee)

    def test_amounts_never_change(self, employee):
        order = OrderFactory(total=Decimal("21.00"))

        services.transition_status(order.pk, "cancelled", employee)

        order.refresh_from_db()
        assert order.total == Decimal("21.00")


@pytest.mark.django_db
class TestRateOrder:
    """Tests for post-delivery ratings."""

    def test_rate_once(self, customer):
        order = OrderFactory(customer=customer, status=OrderStatus.DELIVERED)

        rated = services.rate_order(order.pk, customer, 5, "Lovely")

        assert rated.rating == 5
        assert rated.review == "Lovely"

        with pytest.raises(AlreadyRated) as exc_info:
            services.rate_order(order.pk, customer, 1, "Changed my mind")

        assert exc_info.value.status_code == 409
        order.refresh_from_db()
        assert order.rating == 5

    def test_not_delivered(self, customer):
        order = OrderFactory(customer=customer, status=OrderStatus.READY)

        with pytest.raises(OrderNotDeliverable):
            services.rate_order(order.pk, customer, 4)

    def test_ownership_checked_first(self, customer, other_customer):
        order = OrderFactory(customer=customer, status=OrderStatus.PENDING)

        with pytest.raises(NotAuthorized):
            services.rate_order(order.pk, other_customer, 4)


@pytest.mark.django_db
class TestGetOrderForUser:
    """Tests for read access to single orders."""

    def test_owner_can_read(self, customer):
        order = OrderFactory(customer=customer)
        assert services.get_order_for_user(order.pk, customer) == order

    def test_other_customer_rejected(self, customer, other_customer):
        order = OrderFactory(customer=customer)

        with pytest.raises(NotAuthorized):
            services.get_order_for_user(order.pk, other_customer)

    def test_staff_can_read_any(self, customer, employee, admin_user):
        order = OrderFactory(customer=customer)

        assert services.get_order_for_user(order.pk, employee) == order
        assert services.get_order_for_user(order.pk, admin_user) == order
