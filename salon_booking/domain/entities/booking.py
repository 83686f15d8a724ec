from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    completed = "completed"
    cancelled = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (BookingStatus.completed, BookingStatus.cancelled)


@dataclass(frozen=True)
class Booking:
    id: str
    customer_id: str
    assistant_id: str
    service_id: str
    date: date
    start_time: str  # HH:MM
    end_time: str  # HH:MM
    status: BookingStatus
    total_price: int
    created_at: datetime
    updated_at: datetime
    notes: str | None = None
    cancellation_reason: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status != BookingStatus.cancelled

    @property
    def calendar_key(self) -> tuple[str, date]:
        return (self.assistant_id, self.date)
