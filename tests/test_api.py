"""
Tests for the HTTP API used by the booking form and the management dashboard.
"""

import pytest
from fastapi.testclient import TestClient

from apps.api.deps import get_clock
from apps.api.main import create_app
from db.session import get_session


API = "/api/v1"


@pytest.fixture(scope="function")
def client(session_factory, seeded_restaurant, base_time):
    """Test client bound to the in-memory database with a frozen clock."""
    app = create_app()

    def override_session():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_clock] = lambda: (lambda: base_time)
    return TestClient(app)


def booking_payload(**overrides):
    payload = {
        "restaurant_id": "rest-1",
        "party_size": 2,
        "reservation_date": "2024-01-02",
        "reservation_time": "18:00",
        "customer_name": "John Doe",
        "customer_phone": "+905551234567",
        "customer_email": "john@example.com",
    }
    payload.update(overrides)
    return payload


# ============================================================================
# Availability Endpoints
# ============================================================================

class TestAvailabilityEndpoints:
    """Tests for the booking form pickers."""

    def test_health(self, client):
        """Health check responds."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_list_areas(self, client):
        """Only active areas are listed, in display order."""
        response = client.get(f"{API}/restaurants/rest-1/areas")

        assert response.status_code == 200
        assert [area["id"] for area in response.json()] == ["area-terrace", "area-bar"]

    def test_unknown_restaurant_is_404(self, client):
        """Unknown restaurants return 404."""
        assert client.get(f"{API}/restaurants/missing/areas").status_code == 404
        assert client.get(f"{API}/restaurants/missing/availability/dates").status_code == 404

    def test_effective_rules(self, client):
        """Rules are merged and serialized."""
        response = client.get(f"{API}/restaurants/rest-1/rules", params={"area_id": "area-bar"})

        body = response.json()
        assert body["max_party_size"] == 4
        assert body["opening_time"] == "17:00"
        assert body["blocked_dates"] == ["2024-01-05"]

    def test_dates(self, client):
        """Dates come back as ISO strings without the blocked date."""
        response = client.get(f"{API}/restaurants/rest-1/availability/dates")

        body = response.json()
        assert response.status_code == 200
        assert body["dates"][0] == "2024-01-01"
        assert "2024-01-05" not in body["dates"]

    def test_dates_for_terrace(self, client):
        """The terrace includes the restaurant's blocked date."""
        response = client.get(
            f"{API}/restaurants/rest-1/availability/dates", params={"area_id": "area-terrace"}
        )

        assert "2024-01-05" in response.json()["dates"]

    def test_slots(self, client):
        """Slots are HH:MM strings."""
        response = client.get(f"{API}/restaurants/rest-1/availability/slots", params={"date": "2024-01-02"})

        body = response.json()
        assert body["reservation_date"] == "2024-01-02"
        assert body["slots"][0] == "17:00"
        assert len(body["slots"]) == 16

    def test_slots_require_date(self, client):
        """The date query parameter is mandatory."""
        response = client.get(f"{API}/restaurants/rest-1/availability/slots")

        assert response.status_code == 422

    def test_party_sizes(self, client):
        """Party sizes include the overflow label and reservation types."""
        response = client.get(f"{API}/restaurants/rest-1/availability/party-sizes")

        body = response.json()
        assert body["options"][-1] == {"value": 13, "label": "13+"}
        assert body["reservation_types"] == ["meal", "drinks"]

    def test_terrace_is_meal_only(self, client):
        """The terrace offers meal reservations only."""
        response = client.get(
            f"{API}/restaurants/rest-1/availability/party-sizes", params={"area_id": "area-terrace"}
        )

        assert response.json()["reservation_types"] == ["meal"]

    def test_misconfigured_rules_are_500(self, client, seeded_restaurant, db_session):
        """Configuration defects surface as a server error."""
        seeded_restaurant.slot_duration_minutes = 0
        db_session.commit()

        response = client.get(f"{API}/restaurants/rest-1/availability/dates")

        assert response.status_code == 500


# ============================================================================
# Reservation Endpoints
# ============================================================================

class TestReservationEndpoints:
    """Tests for submission and management edits."""

    def test_validate_accepts(self, client):
        """A valid request checks out."""
        response = client.post(f"{API}/reservations/validate", json=booking_payload())

        assert response.json() == {"valid": True, "reason": None, "message": None}

    def test_validate_rejects_with_reason(self, client):
        """Rejections carry the reason code."""
        response = client.post(
            f"{API}/reservations/validate",
            json=booking_payload(area_id="area-bar", party_size=6),
        )

        body = response.json()
        assert body["valid"] is False
        assert body["reason"] == "party_size_out_of_range"

    def test_create_and_get(self, client):
        """Created reservations are pending and readable."""
        response = client.post(f"{API}/reservations", json=booking_payload(area_id="area-bar"))

        assert response.status_code == 201
        created = response.json()
        assert created["status"] == "pending"
        assert created["reservation_time"] == "18:00:00"

        fetched = client.get(f"{API}/reservations/{created['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["customer_name"] == "John Doe"

    def test_create_rejected(self, client):
        """A rejected booking returns 422 with the reason."""
        response = client.post(
            f"{API}/reservations",
            json=booking_payload(reservation_date="2024-01-05"),
        )

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["reason"] == "date_not_available"
        assert detail["field"] == "reservation_date"

    def test_create_requires_contact_details(self, client):
        """Missing customer fields fail request validation."""
        payload = booking_payload()
        del payload["customer_phone"]

        response = client.post(f"{API}/reservations", json=payload)

        assert response.status_code == 422

    def test_create_bad_email(self, client):
        """Malformed emails fail request validation."""
        response = client.post(f"{API}/reservations", json=booking_payload(customer_email="not-an-email"))

        assert response.status_code == 422

    def test_update_and_status(self, client):
        """Edits are re-validated and status can be changed."""
        created = client.post(f"{API}/reservations", json=booking_payload()).json()

        updated = client.patch(f"{API}/reservations/{created['id']}", json={"reservation_time": "19:15"})
        assert updated.status_code == 200
        assert updated.json()["reservation_time"] == "19:15:00"

        rejected = client.patch(f"{API}/reservations/{created['id']}", json={"reservation_time": "22:00"})
        assert rejected.status_code == 422
        assert rejected.json()["detail"]["reason"] == "time_not_available"

        confirmed = client.patch(f"{API}/reservations/{created['id']}/status", json={"status": "confirmed"})
        assert confirmed.json()["status"] == "confirmed"

    def test_update_with_nulls(self, client):
        """null leaves required fields alone and clears the area."""
        created = client.post(f"{API}/reservations", json=booking_payload(area_id="area-bar")).json()

        response = client.patch(
            f"{API}/reservations/{created['id']}",
            json={"party_size": None, "customer_name": None, "area_id": None},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["party_size"] == 2
        assert body["customer_name"] == "John Doe"
        assert body["area_id"] is None

    def test_missing_reservation_is_404(self, client):
        """Unknown reservations return 404."""
        assert client.get(f"{API}/reservations/999").status_code == 404
        assert client.patch(f"{API}/reservations/999/status", json={"status": "cancelled"}).status_code == 404
