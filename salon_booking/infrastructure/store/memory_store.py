from __future__ import annotations

import threading
from datetime import date
from typing import ContextManager

from salon_booking.application.ports.booking_store import BookingStorePort
from salon_booking.domain.entities.booking import Booking
from salon_booking.infrastructure.store.locks import KeyedLocks


class MemoryBookingStore(BookingStorePort):
    def __init__(self) -> None:
        self._bookings: dict[str, Booking] = {}
        self._by_day: dict[tuple[str, date], list[str]] = {}
        self._by_customer: dict[str, list[str]] = {}
        self._by_assistant: dict[str, list[str]] = {}
        self._data_lock = threading.Lock()
        self._calendar_locks = KeyedLocks()

    def add(self, booking: Booking) -> None:
        with self._data_lock:
            if booking.id in self._bookings:
                raise ValueError(f"Booking {booking.id} already exists")
            self._bookings[booking.id] = booking
            self._by_day.setdefault(booking.calendar_key, []).append(booking.id)
            self._by_customer.setdefault(booking.customer_id, []).append(booking.id)
            self._by_assistant.setdefault(booking.assistant_id, []).append(booking.id)

    def save(self, booking: Booking) -> None:
        with self._data_lock:
            previous = self._bookings.get(booking.id)
            if previous is None:
                raise KeyError(booking.id)
            if previous.calendar_key != booking.calendar_key:
                self._by_day[previous.calendar_key].remove(booking.id)
                self._by_day.setdefault(booking.calendar_key, []).append(booking.id)
            self._bookings[booking.id] = booking

    def get(self, booking_id: str) -> Booking | None:
        with self._data_lock:
            return self._bookings.get(booking_id)

    def list_for_day(self, assistant_id: str, day: date) -> list[Booking]:
        return self._collect(self._by_day, (assistant_id, day))

    def list_for_customer(self, customer_id: str) -> list[Booking]:
        return self._collect(self._by_customer, customer_id)

    def list_for_assistant(self, assistant_id: str) -> list[Booking]:
        return self._collect(self._by_assistant, assistant_id)

    def list_all(self) -> list[Booking]:
        with self._data_lock:
            return list(self._bookings.values())

    def lock(self, assistant_id: str, day: date) -> ContextManager[None]:
        return self._calendar_locks.get((assistant_id, day))

    def _collect(self, index: dict, key: object) -> list[Booking]:
        with self._data_lock:
            return [self._bookings[booking_id] for booking_id in index.get(key, [])]
