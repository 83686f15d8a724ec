"""
HTTP-level tests for the booking API.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from salon_booking.main import app
from salon_booking.wiring.dependencies import get_availability_use_case, get_booking_use_case

CUSTOMER = {"X-User-Id": "c1", "X-User-Role": "customer"}
OTHER_CUSTOMER = {"X-User-Id": "c2", "X-User-Role": "customer"}
ASSISTANT = {"X-User-Id": "a1", "X-User-Role": "assistant"}


@pytest.fixture
def client(use_case, availability):
    app.dependency_overrides[get_booking_use_case] = lambda: use_case
    app.dependency_overrides[get_availability_use_case] = lambda: availability
    yield TestClient(app)
    app.dependency_overrides.clear()


def _create(client, start_time="14:00", headers=CUSTOMER, **overrides):
    body = {"assistant_id": "a1", "service_id": "cut", "date": "2025-03-10", "start_time": start_time}
    body.update(overrides)
    return client.post("/api/v1/bookings", json=body, headers=headers)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_list_services(client):
    response = client.get("/api/v1/services")
    assert response.status_code == 200
    assert {s["service_id"] for s in response.json()} == {"cut", "color", "perm", "treatment", "shampoo-blow"}


def test_create_booking(client):
    response = _create(client, notes="Short layers")

    assert response.status_code == 201
    data = response.json()
    assert data["customer_id"] == "c1"
    assert data["end_time"] == "15:00"
    assert data["total_price"] == 2000
    assert data["status"] == "pending"
    assert data["notes"] == "Short layers"


def test_create_conflict_returns_409(client):
    assert _create(client).status_code == 201
    response = _create(client, start_time="14:30", headers=OTHER_CUSTOMER)
    assert response.status_code == 409


def test_create_validation_errors_return_400(client):
    assert _create(client, start_time="08:00").status_code == 400
    assert _create(client, date="2025-02-01").status_code == 400
    assert _create(client, assistant_id=None).status_code == 400


def test_create_unknown_service_returns_404(client):
    assert _create(client, service_id="massage").status_code == 404


def test_only_customers_create_bookings(client):
    assert _create(client, headers=ASSISTANT).status_code == 403


def test_missing_identity_returns_401(client):
    assert client.get("/api/v1/bookings").status_code == 401
    assert client.get("/api/v1/bookings", headers={"X-User-Id": "c1", "X-User-Role": "admin"}).status_code == 401


def test_booking_visible_only_to_its_parties(client):
    booking_id = _create(client).json()["id"]

    assert client.get(f"/api/v1/bookings/{booking_id}", headers=CUSTOMER).status_code == 200
    assert client.get(f"/api/v1/bookings/{booking_id}", headers=ASSISTANT).status_code == 200
    assert client.get(f"/api/v1/bookings/{booking_id}", headers=OTHER_CUSTOMER).status_code == 403
    assert client.get("/api/v1/bookings/booking_missing", headers=CUSTOMER).status_code == 404


def test_status_changes_respect_roles(client):
    booking_id = _create(client).json()["id"]
    url = f"/api/v1/bookings/{booking_id}/status"

    assert client.patch(url, json={"status": "confirmed"}, headers=CUSTOMER).status_code == 403

    response = client.patch(url, json={"status": "confirmed"}, headers=ASSISTANT)
    assert response.status_code == 200
    assert response.json()["status"] == "confirmed"

    assert client.patch(url, json={"status": "pending"}, headers=ASSISTANT).status_code == 400
    assert client.patch(url, json={"status": "archived"}, headers=ASSISTANT).status_code == 400


def test_cancel_with_reason(client):
    booking_id = _create(client).json()["id"]

    response = client.post(
        f"/api/v1/bookings/{booking_id}/cancel",
        json={"reason": "Feeling unwell"},
        headers=CUSTOMER,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "cancelled"
    assert data["cancellation_reason"] == "Feeling unwell"
    assert data["notes"] == "Cancellation reason: Feeling unwell"

    again = client.post(f"/api/v1/bookings/{booking_id}/cancel", json={}, headers=CUSTOMER)
    assert again.status_code == 400


def test_reschedule(client):
    booking_id = _create(client).json()["id"]

    response = client.put(
        f"/api/v1/bookings/{booking_id}/schedule",
        json={"start_time": "16:00"},
        headers=CUSTOMER,
    )
    assert response.status_code == 200
    assert response.json()["end_time"] == "17:00"


def test_list_bookings_paginates(client):
    for start in ("09:00", "11:00", "13:00"):
        assert _create(client, start_time=start).status_code == 201

    response = client.get("/api/v1/bookings", params={"page": 2, "limit": 2}, headers=CUSTOMER)
    assert response.status_code == 200
    data = response.json()
    assert data["pagination"] == {"page": 2, "limit": 2, "total": 3, "total_pages": 2}
    assert [b["start_time"] for b in data["bookings"]] == ["09:00"]

    assert client.get("/api/v1/bookings", headers=ASSISTANT).json()["pagination"]["total"] == 3
    assert client.get("/api/v1/bookings", headers=OTHER_CUSTOMER).json()["bookings"] == []


def test_day_availability(client):
    _create(client)

    response = client.get("/api/v1/assistants/a1/availability", params={"date": "2025-03-10"})
    assert response.status_code == 200
    slots = response.json()["slots"]
    assert len(slots) == 18
    assert slots[0]["time"] == "09:00"
    booked = [s["time"] for s in slots if s["booked"]]
    assert booked == ["14:00", "14:30"]


def test_schedule_range(client):
    response = client.get(
        "/api/v1/assistants/a1/schedule",
        params={"start_date": "2025-03-10", "end_date": "2025-03-12"},
    )
    assert response.status_code == 200
    assert list(response.json()["days"]) == ["2025-03-10", "2025-03-11", "2025-03-12"]

    too_long = client.get(
        "/api/v1/assistants/a1/schedule",
        params={"start_date": "2025-03-10", "end_date": "2025-12-31"},
    )
    assert too_long.status_code == 400
