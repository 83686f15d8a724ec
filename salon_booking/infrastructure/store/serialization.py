from __future__ import annotations

from datetime import date, datetime
from typing import Any

from salon_booking.domain.entities.booking import Booking, BookingStatus


def booking_to_dict(booking: Booking) -> dict[str, Any]:
    """Serialize Booking to a JSON-safe dict with ISO string conversion."""
    return {
        "id": booking.id,
        "customer_id": booking.customer_id,
        "assistant_id": booking.assistant_id,
        "service_id": booking.service_id,
        "date": booking.date.isoformat(),
        "start_time": booking.start_time,
        "end_time": booking.end_time,
        "status": booking.status.value,
        "total_price": booking.total_price,
        "notes": booking.notes,
        "cancellation_reason": booking.cancellation_reason,
        "created_at": booking.created_at.isoformat(),
        "updated_at": booking.updated_at.isoformat(),
    }


def booking_from_dict(data: dict[str, Any]) -> Booking:
    """Deserialize dict to Booking. Raises KeyError/ValueError on malformed data."""
    return Booking(
        id=data["id"],
        customer_id=data["customer_id"],
        assistant_id=data["assistant_id"],
        service_id=data["service_id"],
        date=date.fromisoformat(data["date"]),
        start_time=data["start_time"],
        end_time=data["end_time"],
        status=BookingStatus(data["status"]),
        total_price=int(data["total_price"]),
        notes=data.get("notes"),
        cancellation_reason=data.get("cancellation_reason"),
        created_at=datetime.fromisoformat(data["created_at"]),
        updated_at=datetime.fromisoformat(data["updated_at"]),
    )
