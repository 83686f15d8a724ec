from __future__ import annotations

from salon_booking.application.exceptions import BookingError, SyncFailure
from salon_booking.application.ports.booking_source import BookingSourcePort
from salon_booking.application.use_cases.booking import BookingUseCase
from salon_booking.domain.entities.actor import Role
from salon_booking.domain.entities.booking import Booking


class LocalBookingSource(BookingSourcePort):
    """Reads bookings straight from the in-process booking use case."""

    def __init__(self, use_case: BookingUseCase) -> None:
        self._use_case = use_case

    def fetch_bookings(self, user_id: str, role: Role) -> list[Booking]:
        try:
            return self._use_case.list_bookings(user_id, role)
        except BookingError as e:
            raise SyncFailure(str(e)) from e
