#!/usr/bin/env python3
"""Smoke test for the booking API against a running server."""

import sys
from datetime import date, timedelta

import httpx


BASE_URL = "http://127.0.0.1:8000"
CUSTOMER = {"X-User-Id": "smoke_customer", "X-User-Role": "customer"}
ASSISTANT = {"X-User-Id": "smoke_assistant", "X-User-Role": "assistant"}


def test_create(booking_date: str) -> str | None:
    """Create a booking as a customer."""
    print("=" * 60)
    print("Testing POST /api/v1/bookings")
    print("=" * 60)

    payload = {
        "assistant_id": ASSISTANT["X-User-Id"],
        "service_id": "cut",
        "date": booking_date,
        "start_time": "14:00",
        "notes": "Smoke test booking",
    }

    try:
        response = httpx.post(f"{BASE_URL}/api/v1/bookings", json=payload, headers=CUSTOMER, timeout=10.0)
        response.raise_for_status()
        data = response.json()
        print(f"✅ Created {data['id']}: {data['start_time']}-{data['end_time']} price={data['total_price']}")
        return data["id"]
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return None


def test_conflict(booking_date: str) -> bool:
    """An overlapping request must be rejected with 409."""
    print("\n" + "=" * 60)
    print("Testing overlapping POST /api/v1/bookings")
    print("=" * 60)

    payload = {
        "assistant_id": ASSISTANT["X-User-Id"],
        "service_id": "shampoo-blow",
        "date": booking_date,
        "start_time": "14:30",
    }
    response = httpx.post(f"{BASE_URL}/api/v1/bookings", json=payload, headers=CUSTOMER, timeout=10.0)
    if response.status_code == 409:
        print(f"✅ Rejected: {response.json()['detail']}")
        return True
    print(f"❌ Expected 409, got {response.status_code}")
    return False


def test_availability(booking_date: str) -> None:
    print("\n" + "=" * 60)
    print("Testing GET /api/v1/assistants/{id}/availability")
    print("=" * 60)

    response = httpx.get(
        f"{BASE_URL}/api/v1/assistants/{ASSISTANT['X-User-Id']}/availability",
        params={"date": booking_date},
        timeout=10.0,
    )
    response.raise_for_status()
    slots = response.json()["slots"]
    print("  " + " ".join(f"{s['time']}{'x' if s['booked'] else '.'}" for s in slots))


def test_lifecycle(booking_id: str) -> None:
    print("\n" + "=" * 60)
    print("Testing status changes")
    print("=" * 60)

    response = httpx.patch(
        f"{BASE_URL}/api/v1/bookings/{booking_id}/status",
        json={"status": "confirmed"},
        headers=ASSISTANT,
        timeout=10.0,
    )
    print(f"  confirm -> {response.status_code} {response.json().get('status')}")

    response = httpx.post(
        f"{BASE_URL}/api/v1/bookings/{booking_id}/cancel",
        json={"reason": "Smoke test cleanup"},
        headers=CUSTOMER,
        timeout=10.0,
    )
    print(f"  cancel  -> {response.status_code} {response.json().get('status')}")


def main():
    print("\n🚀 Testing Booking API\n")

    try:
        httpx.get(f"{BASE_URL}/health", timeout=5.0)
        print("✅ Server is running\n")
    except Exception:
        print("❌ Server is not running!")
        print("   Please start it with: uvicorn salon_booking.main:app --reload --port 8000")
        sys.exit(1)

    booking_date = (date.today() + timedelta(days=7)).isoformat()
    booking_id = test_create(booking_date)
    if not booking_id:
        sys.exit(1)
    test_conflict(booking_date)
    test_availability(booking_date)
    test_lifecycle(booking_id)

    print("\n" + "=" * 60)
    print("✅ Smoke test complete!")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    main()
