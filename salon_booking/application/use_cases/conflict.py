from __future__ import annotations

from datetime import date

from salon_booking.application.ports.booking_store import BookingStorePort
from salon_booking.application.utils.time_arithmetic import time_to_minutes


def intervals_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Half-open overlap of [a_start, a_end) and [b_start, b_end). Touching ends do not overlap."""
    return a_start < b_end and a_end > b_start


class ConflictDetector:
    def __init__(self, store: BookingStorePort) -> None:
        self._store = store

    def has_conflict(
        self,
        assistant_id: str,
        day: date,
        start_time: str,
        end_time: str,
        exclude_booking_id: str | None = None,
    ) -> bool:
        """
        Check a candidate interval against the assistant's active bookings on that date.
        Callers committing a booking must hold store.lock(assistant_id, day) around this call and the write.
        """
        start = time_to_minutes(start_time)
        end = time_to_minutes(end_time)
        for booking in self._store.list_for_day(assistant_id, day):
            if not booking.is_active or booking.id == exclude_booking_id:
                continue
            if intervals_overlap(start, end, time_to_minutes(booking.start_time), time_to_minutes(booking.end_time)):
                return True
        return False
