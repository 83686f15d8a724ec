from __future__ import annotations

from abc import ABC, abstractmethod

from salon_booking.domain.entities.actor import Role
from salon_booking.domain.entities.booking import Booking


class BookingSourcePort(ABC):
    @abstractmethod
    def fetch_bookings(self, user_id: str, role: Role) -> list[Booking]:
        """
        Fetch the authoritative booking list for a user, scoped by role.
        Raises SyncFailure when the source cannot be read.
        """
        raise NotImplementedError

    def close(self) -> None:
        """Release any connections held by the source."""
