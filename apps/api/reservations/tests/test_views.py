"""
Tests for reservation API views.
"""

import datetime
import json

import pytest

from apps.api.reservations.models import Reservation, ReservationStatus
from apps.api.reservations.tests.factories import ReservationFactory


def _json(data: dict) -> dict:
    return {"data": json.dumps(data), "content_type": "application/json"}


def _booking(**overrides) -> dict:
    payload = {
        "name": "Casey Customer",
        "email": "casey@example.com",
        "phone": "+15551234567",
        "date": "2030-05-01",
        "time": "19:30",
        "party_size": 4,
    }
    payload.update(overrides)
    return payload


@pytest.mark.django_db
class TestCreateReservation:
    """Tests for POST /api/reservations."""

    def test_create(self, api_client, customer, auth_header):
        response = api_client.post(
            "/api/reservations", **_json(_booking()), **auth_header(customer)
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Reservation created"
        reservation = body["data"]["reservation"]
        assert reservation["status"] == "pending"
        assert reservation["occasion"] == "casual"
        assert reservation["customer"]["id"] == customer.pk

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("time", "25:00"),
            ("time", "7pm"),
            ("party_size", 0),
            ("party_size", 21),
            ("email", "nope"),
            ("occasion", "wedding"),
        ],
    )
    def test_invalid_fields(self, api_client, customer, auth_header, field, value):
        response = api_client.post(
            "/api/reservations",
            **_json(_booking(**{field: value})),
            **auth_header(customer),
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == field

    def test_staff_cannot_book(self, api_client, employee, auth_header):
        response = api_client.post(
            "/api/reservations", **_json(_booking()), **auth_header(employee)
        )

        assert response.status_code == 403


@pytest.mark.django_db
class TestListReservations:
    """Tests for GET /api/reservations and /api/reservations/all."""

    def test_own_only(self, api_client, customer, other_customer, auth_header):
        mine = ReservationFactory(customer=customer)
        ReservationFactory(customer=other_customer)

        response = api_client.get("/api/reservations", **auth_header(customer))

        ids = [r["id"] for r in response.json()["data"]["reservations"]]
        assert ids == [mine.pk]

    def test_all_with_date_filter(self, api_client, employee, auth_header):
        day = datetime.date(2030, 5, 1)
        on_day = ReservationFactory(date=day)
        ReservationFactory(date=day + datetime.timedelta(days=1))

        everything = api_client.get("/api/reservations/all", **auth_header(employee))
        filtered = api_client.get(
            "/api/reservations/all?date=2030-05-01", **auth_header(employee)
        )

        assert len(everything.json()["data"]["reservations"]) == 2
        assert [r["id"] for r in filtered.json()["data"]["reservations"]] == [on_day.pk]

    def test_all_forbidden_for_customers(self, api_client, customer, auth_header):
        response = api_client.get("/api/reservations/all", **auth_header(customer))

        assert response.status_code == 403


@pytest.mark.django_db
class TestReservationStatus:
    """Tests for PATCH /api/reservations/{id}/status."""

    def test_update(self, api_client, employee, auth_header):
        reservation = ReservationFactory()

        response = api_client.patch(
            f"/api/reservations/{reservation.pk}/status",
            **_json({"status": "confirmed", "table_number": 7}),
            **auth_header(employee),
        )

        assert response.status_code == 200
        reservation.refresh_from_db()
        assert reservation.status == ReservationStatus.CONFIRMED
        assert reservation.table_number == 7
        assert reservation.assigned_employee == employee

    def test_any_status_may_follow_any_other(self, api_client, employee, auth_header):
        reservation = ReservationFactory(status=ReservationStatus.COMPLETED)

        response = api_client.patch(
            f"/api/reservations/{reservation.pk}/status",
            **_json({"status": "pending"}),
            **auth_header(employee),
        )

        assert response.status_code == 200

    def test_invalid_status(self, api_client, employee, auth_header):
        reservation = ReservationFactory()

        response = api_client.patch(
            f"/api/reservations/{reservation.pk}/status",
            **_json({"status": "no_show"}),
            **auth_header(employee),
        )

        assert response.status_code == 400

    def test_missing(self, api_client, employee, auth_header):
        response = api_client.patch(
            "/api/reservations/99999/status",
            **_json({"status": "confirmed"}),
            **auth_header(employee),
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Reservation not found"


@pytest.mark.django_db
class TestCancelReservation:
    """Tests for DELETE /api/reservations/{id}."""

    def test_owner_cancels(self, api_client, customer, auth_header):
        reservation = ReservationFactory(customer=customer)

        response = api_client.delete(
            f"/api/reservations/{reservation.pk}", **auth_header(customer)
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Reservation cancelled"
        reservation.refresh_from_db()
        assert reservation.status == ReservationStatus.CANCELLED

    def test_staff_cancels(self, api_client, customer, employee, auth_header):
        reservation = ReservationFactory(customer=customer)

        response = api_client.delete(
            f"/api/reservations/{reservation.pk}", **auth_header(employee)
        )

        assert response.status_code == 200

    def test_other_customer_forbidden(
        self, api_client, customer, other_customer, auth_header
    ):
        reservation = ReservationFactory(customer=customer)

        response = api_client.delete(
            f"/api/reservations/{reservation.pk}", **auth_header(other_customer)
        )

        assert response.status_code == 403
        assert Reservation.objects.get(pk=reservation.pk).status == "pending"
