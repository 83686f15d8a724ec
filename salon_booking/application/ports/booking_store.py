from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import ContextManager

from salon_booking.domain.entities.booking import Booking


class BookingStorePort(ABC):
    @abstractmethod
    def add(self, booking: Booking) -> None:
        raise NotImplementedError

    @abstractmethod
    def save(self, booking: Booking) -> None:
        """Replace a stored booking with a new version carrying the same id."""
        raise NotImplementedError

    @abstractmethod
    def get(self, booking_id: str) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def list_for_day(self, assistant_id: str, day: date) -> list[Booking]:
        """All bookings (any status) of an assistant on one date."""
        raise NotImplementedError

    @abstractmethod
    def list_for_customer(self, customer_id: str) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def list_for_assistant(self, assistant_id: str) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def lock(self, assistant_id: str, day: date) -> ContextManager[None]:
        """
        Serialization point for one assistant's calendar on one date.
        Conflict checks and the write they guard must both happen while it is held.
        """
        raise NotImplementedError
