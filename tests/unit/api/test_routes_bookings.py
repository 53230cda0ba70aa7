"""Unit tests for booking and guest routes with mocked services."""

from collections.abc import Generator
from datetime import UTC, date, datetime
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from portal_shared.models import (
    ActionResult,
    Booking,
    BookingLinkResult,
    BookingStatus,
    ErrorCode,
    GuestBookingDataResult,
)

NOW = datetime(2025, 5, 20, 9, 15, tzinfo=UTC)

LINK_FORM = {
    "guest_name": "Alice Doe",
    "check_in": "2025-06-01",
    "check_out": "2025-06-05",
    "room_type": "Suite",
    "language": "en",
}

GUEST_FORM = {
    "first_name": "Alice",
    "last_name": "Doe",
    "email": "alice@example.com",
    "phone": "+1-555",
}


def _booking(hotel_id: str = "h1", status: BookingStatus = BookingStatus.PENDING_GUEST) -> Booking:
    return Booking(
        booking_id="b1",
        hotel_id=hotel_id,
        guest_name="Alice Doe",
        check_in=date(2025, 6, 1),
        check_out=date(2025, 6, 5),
        room_type="Suite",
        status=status,
        guest_link_id="l1",
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def mock_booking_service() -> MagicMock:
    return MagicMock()


@pytest.fixture
def client(mock_booking_service: MagicMock) -> Generator[TestClient, None, None]:
    """Test client with the booking service replaced by a mock."""
    from portal_api.dependencies import get_booking_service
    from portal_api.main import app

    app.dependency_overrides[get_booking_service] = lambda: mock_booking_service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestCreateBookingLinkRoute:
    """Tests for POST /api/hotels/{hotel_id}/booking-links."""

    def test_created(self, client: TestClient, mock_booking_service: MagicMock) -> None:
        mock_booking_service.create_booking_link.return_value = BookingLinkResult(
            success=True,
            message="Booking link created successfully!",
            link="/guest/l1",
            booking_id="b1",
            link_id="l1",
        )

        response = client.post("/api/hotels/h1/booking-links", json=LINK_FORM)

        assert response.status_code == 201
        assert response.json()["link"] == "/guest/l1"
        hotel_id, form = mock_booking_service.create_booking_link.call_args[0]
        assert hotel_id == "h1"
        assert form.room_type == "Suite"

    def test_inverted_dates_are_422(
        self, client: TestClient, mock_booking_service: MagicMock
    ) -> None:
        response = client.post(
            "/api/hotels/h1/booking-links",
            json={**LINK_FORM, "check_in": "2025-06-05", "check_out": "2025-06-01"},
        )

        assert response.status_code == 422
        mock_booking_service.create_booking_link.assert_not_called()

    def test_write_failure_is_payload(
        self, client: TestClient, mock_booking_service: MagicMock
    ) -> None:
        mock_booking_service.create_booking_link.return_value = BookingLinkResult(
            success=False, message="Failed to create booking link due to a server error."
        )

        response = client.post("/api/hotels/h1/booking-links", json=LINK_FORM)

        assert response.status_code == 200
        assert response.json()["success"] is False


class TestBookingDetailRoutes:
    """Tests for hotel-scoped booking detail, update and cancel."""

    def test_get_booking(self, client: TestClient, mock_booking_service: MagicMock) -> None:
        mock_booking_service.get_booking.return_value = _booking()

        response = client.get("/api/hotels/h1/bookings/b1")

        assert response.status_code == 200
        assert response.json()["booking_id"] == "b1"

    def test_booking_of_other_hotel_is_404(
        self, client: TestClient, mock_booking_service: MagicMock
    ) -> None:
        mock_booking_service.get_booking.return_value = _booking(hotel_id="h2")

        response = client.get("/api/hotels/h1/bookings/b1")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "ERR_BOOKING_NOT_FOUND"
        assert body["message"] == "Booking not found."

    def test_missing_booking_is_404(
        self, client: TestClient, mock_booking_service: MagicMock
    ) -> None:
        mock_booking_service.get_booking.return_value = None

        response = client.get("/api/hotels/h1/bookings/missing")

        assert response.status_code == 404

    def test_update_cancelled_booking_is_409(
        self, client: TestClient, mock_booking_service: MagicMock
    ) -> None:
        mock_booking_service.get_booking.return_value = _booking()
        mock_booking_service.update_booking.return_value = (None, ErrorCode.BOOKING_CANCELLED)

        response = client.patch("/api/hotels/h1/bookings/b1", json={"guest_name": "Bob"})

        assert response.status_code == 409
        assert response.json()["error_code"] == "ERR_BOOKING_CANCELLED"

    def test_cancel_passes_reason(
        self, client: TestClient, mock_booking_service: MagicMock
    ) -> None:
        mock_booking_service.get_booking.return_value = _booking()
        mock_booking_service.cancel_booking.return_value = (
            _booking(status=BookingStatus.CANCELLED),
            None,
        )

        response = client.delete("/api/hotels/h1/bookings/b1", params={"reason": "No-show"})

        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"
        mock_booking_service.cancel_booking.assert_called_once_with("b1", "No-show")

    def test_list_bookings(self, client: TestClient, mock_booking_service: MagicMock) -> None:
        mock_booking_service.list_bookings.return_value = [_booking()]

        response = client.get("/api/hotels/h1/bookings")

        assert response.status_code == 200
        assert response.json()["total_count"] == 1


class TestGuestRoutes:
    """Tests for the public guest endpoints."""

    def test_submit_success_redirects_to_thank_you(
        self, client: TestClient, mock_booking_service: MagicMock
    ) -> None:
        mock_booking_service.submit_guest_booking.return_value = ActionResult(
            success=True, message="Booking completed successfully!"
        )

        response = client.post("/api/guest/l1", json=GUEST_FORM)

        assert response.status_code == 200
        assert response.json()["redirect_to"] == "/guest/l1/thank-you"

    def test_submit_already_completed_is_payload(
        self, client: TestClient, mock_booking_service: MagicMock
    ) -> None:
        mock_booking_service.submit_guest_booking.return_value = ActionResult(
            success=False, message="This booking has already been completed."
        )

        response = client.post("/api/guest/l1", json=GUEST_FORM)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "This booking has already been completed."
        assert body["redirect_to"] is None

    def test_submit_invalid_email_is_422(
        self, client: TestClient, mock_booking_service: MagicMock
    ) -> None:
        response = client.post("/api/guest/l1", json={**GUEST_FORM, "email": "nope"})

        assert response.status_code == 422
        mock_booking_service.submit_guest_booking.assert_not_called()

    def test_load_unknown_link(
        self, client: TestClient, mock_booking_service: MagicMock
    ) -> None:
        mock_booking_service.get_booking_data_for_guest.return_value = GuestBookingDataResult(
            success=False, message="This booking link is invalid or has expired."
        )

        response = client.get("/api/guest/unknown")

        assert response.status_code == 200
        assert response.json()["success"] is False


class TestCorrelationId:
    """Tests for the correlation id middleware."""

    def test_incoming_id_is_echoed(
        self, client: TestClient, mock_booking_service: MagicMock
    ) -> None:
        mock_booking_service.list_bookings.return_value = []

        response = client.get(
            "/api/hotels/h1/bookings", headers={"X-Correlation-ID": "req-123"}
        )

        assert response.headers["X-Correlation-ID"] == "req-123"

    def test_id_generated_when_missing(
        self, client: TestClient, mock_booking_service: MagicMock
    ) -> None:
        mock_booking_service.list_bookings.return_value = []

        response = client.get("/api/hotels/h1/bookings")

        assert response.headers["X-Correlation-ID"]
