from __future__ import annotations

import logging
from contextlib import ExitStack, contextmanager
from dataclasses import replace
from datetime import date, datetime
from typing import Iterator
from uuid import uuid4

from salon_booking.application.exceptions import (
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from salon_booking.application.ports.booking_store import BookingStorePort
from salon_booking.application.ports.clock import ClockPort
from salon_booking.application.ports.rate_card import RateCardPort
from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.application.use_cases.booking_lifecycle import apply_transition
from salon_booking.application.use_cases.conflict import ConflictDetector
from salon_booking.application.utils.pricing import compute_price
from salon_booking.application.utils.time_arithmetic import (
    combine,
    minutes_to_time,
    normalize_time,
    parse_iso_date,
    time_to_minutes,
)
from salon_booking.domain.entities.actor import Role
from salon_booking.domain.entities.booking import Booking, BookingStatus
from salon_booking.domain.entities.business_hours import BusinessHours
from salon_booking.domain.entities.service_catalog import Service

CONFLICT_MESSAGE = "The requested time overlaps an existing booking. Please choose another time."


def generate_booking_id() -> str:
    return f"booking_{uuid4().hex}"


class BookingUseCase:
    def __init__(
        self,
        store: BookingStorePort,
        catalog: ServiceCatalogPort,
        rate_card: RateCardPort,
        clock: ClockPort,
        hours: BusinessHours | None = None,
        notes_max_length: int = 500,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._rate_card = rate_card
        self._clock = clock
        self._hours = hours or BusinessHours()
        self._notes_max_length = notes_max_length
        self._conflicts = ConflictDetector(store)
        self._logger = logging.getLogger(__name__)

    def list_services(self) -> list[Service]:
        return self._catalog.list_services()

    def create_booking(
        self,
        customer_id: str | None,
        assistant_id: str | None,
        service_id: str | None,
        booking_date: str | None,
        start_time: str | None,
        notes: str | None = None,
    ) -> Booking:
        """
        Create a pending booking.

        Everything that can be checked without the calendar lock is validated first.
        The conflict check and the write then run under the (assistant, date) lock,
        so two overlapping requests can never both succeed.
        """
        customer_id = _require(customer_id, "customer_id")
        assistant_id = _require(assistant_id, "assistant_id")
        service = self._resolve_service(_require(service_id, "service_id"))
        day = self._parse_date(_require(booking_date, "date"))
        start = self._parse_time(_require(start_time, "start_time"))
        duration = service.duration_minutes
        if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
            raise ValidationError(f"Service {service.service_id} has an invalid duration")

        start_minutes = time_to_minutes(start)
        end_minutes = start_minutes + duration
        self._ensure_bookable(day, start_minutes, end_minutes)
        end = minutes_to_time(end_minutes)
        notes = self._clean_notes(notes)

        hourly_rate = self._rate_card.get_hourly_rate(assistant_id)
        total_price = compute_price(service.service_id, duration, hourly_rate)

        with self._store.lock(assistant_id, day):
            if self._conflicts.has_conflict(assistant_id, day, start, end):
                self._logger.info(
                    "Booking rejected: time conflict",
                    extra={"assistant_id": assistant_id, "date": day.isoformat(), "start_time": start},
                )
                raise ConflictError(CONFLICT_MESSAGE)
            now = self._clock.now()
            booking = Booking(
                id=generate_booking_id(),
                customer_id=customer_id,
                assistant_id=assistant_id,
                service_id=service.service_id,
                date=day,
                start_time=start,
                end_time=end,
                status=BookingStatus.pending,
                total_price=total_price,
                notes=notes,
                created_at=now,
                updated_at=now,
            )
            self._store.add(booking)

        self._logger.info(
            "Booking created",
            extra={
                "booking_id": booking.id,
                "assistant_id": assistant_id,
                "date": day.isoformat(),
                "start_time": start,
                "end_time": end,
            },
        )
        return booking

    def list_bookings(
        self,
        user_id: str,
        role: Role | str,
        status: BookingStatus | str | None = None,
    ) -> list[Booking]:
        """Bookings of a customer or assistant, newest date and start time first."""
        role = _parse_role(role)
        if role == Role.customer:
            bookings = self._store.list_for_customer(user_id)
        else:
            bookings = self._store.list_for_assistant(user_id)
        if status is not None:
            wanted = _parse_status(status)
            bookings = [b for b in bookings if b.status == wanted]
        return sorted(bookings, key=lambda b: (b.date, b.start_time), reverse=True)

    def get_booking(self, booking_id: str) -> Booking:
        booking = self._store.get(booking_id)
        if booking is None:
            raise NotFoundError(f"Booking {booking_id} not found")
        return booking

    def update_booking_status(self, booking_id: str, new_status: BookingStatus | str) -> Booking:
        target = _parse_status(new_status)
        if target == BookingStatus.cancelled:
            return self.cancel_booking(booking_id)
        with self._locked_booking(booking_id) as current:
            updated = apply_transition(current, target, self._clock.now())
            self._store.save(updated)
        self._log_transition(current, updated)
        return updated

    def cancel_booking(self, booking_id: str, reason: str | None = None) -> Booking:
        reason = reason.strip() if reason else None
        with self._locked_booking(booking_id) as current:
            updated = apply_transition(current, BookingStatus.cancelled, self._clock.now(), reason=reason)
            self._store.save(updated)
        self._log_transition(current, updated, reason=reason)
        return updated

    def complete_due_bookings(self, now: datetime | None = None) -> list[Booking]:
        """Advance confirmed bookings whose appointment has ended to completed. Pending ones are left alone."""
        now = now or self._clock.now()
        completed: list[Booking] = []
        for booking in self._store.list_all():
            if booking.status != BookingStatus.confirmed:
                continue
            if combine(booking.date, booking.end_time, self._clock.timezone) > now:
                continue
            with self._locked_booking(booking.id) as current:
                if current.status != BookingStatus.confirmed:
                    continue
                updated = apply_transition(current, BookingStatus.completed, now)
                self._store.save(updated)
            self._log_transition(current, updated)
            completed.append(updated)
        return completed

    def reschedule_booking(
        self,
        booking_id: str,
        new_date: str | None = None,
        new_start_time: str | None = None,
    ) -> Booking:
        """Move an active booking to a new date and/or start time. The price is kept."""
        if not new_date and not new_start_time:
            raise ValidationError("Provide a new date or a new start time")
        booking = self.get_booking(booking_id)
        if booking.status.is_terminal:
            raise InvalidTransitionError(f"Cannot reschedule a {booking.status.value} booking")

        service = self._resolve_service(booking.service_id)
        day = self._parse_date(new_date) if new_date else booking.date
        start = self._parse_time(new_start_time) if new_start_time else booking.start_time
        start_minutes = time_to_minutes(start)
        end_minutes = start_minutes + service.duration_minutes
        self._ensure_bookable(day, start_minutes, end_minutes)
        end = minutes_to_time(end_minutes)

        keys = sorted({booking.calendar_key, (booking.assistant_id, day)})
        with ExitStack() as stack:
            for assistant_id, key_day in keys:
                stack.enter_context(self._store.lock(assistant_id, key_day))
            current = self.get_booking(booking_id)
            if current.status.is_terminal:
                raise InvalidTransitionError(f"Cannot reschedule a {current.status.value} booking")
            if current.calendar_key != booking.calendar_key:
                raise ConflictError("Booking was changed by another request. Please retry.")
            if self._conflicts.has_conflict(current.assistant_id, day, start, end, exclude_booking_id=booking_id):
                raise ConflictError(CONFLICT_MESSAGE)
            updated = replace(current, date=day, start_time=start, end_time=end, updated_at=self._clock.now())
            self._store.save(updated)

        self._logger.info(
            "Booking rescheduled",
            extra={"booking_id": booking_id, "date": day.isoformat(), "start_time": start},
        )
        return updated

    @contextmanager
    def _locked_booking(self, booking_id: str) -> Iterator[Booking]:
        """Hold the calendar lock of a booking and yield its current version."""
        while True:
            booking = self.get_booking(booking_id)
            with self._store.lock(*booking.calendar_key):
                current = self.get_booking(booking_id)
                # A concurrent reschedule may have moved it to another date.
                if current.calendar_key == booking.calendar_key:
                    yield current
                    return

    def _resolve_service(self, service_id: str) -> Service:
        service = self._catalog.get_service(service_id)
        if service is None:
            raise NotFoundError(f"Service {service_id} not found")
        return service

    def _parse_date(self, value: str) -> date:
        try:
            return parse_iso_date(value)
        except ValueError as e:
            raise ValidationError(str(e)) from None

    def _parse_time(self, value: str) -> str:
        try:
            return normalize_time(value)
        except ValueError as e:
            raise ValidationError(str(e)) from None

    def _ensure_bookable(self, day: date, start_minutes: int, end_minutes: int) -> None:
        if day < self._clock.today():
            raise ValidationError("Bookings cannot be made for a past date")
        if not self._hours.contains(start_minutes, end_minutes):
            raise ValidationError(
                "Booking must fall within business hours "
                f"({minutes_to_time(self._hours.open_minutes)}-{minutes_to_time(self._hours.close_minutes)})"
            )

    def _clean_notes(self, notes: str | None) -> str | None:
        if notes is None or not notes.strip():
            return None
        if len(notes) > self._notes_max_length:
            raise ValidationError(f"Notes must be at most {self._notes_max_length} characters")
        return notes

    def _log_transition(self, before: Booking, after: Booking, reason: str | None = None) -> None:
        self._logger.info(
            "Booking status changed",
            extra={
                "booking_id": after.id,
                "from_status": before.status.value,
                "status": after.status.value,
                "reason": reason,
            },
        )


def _require(value: str | None, field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required")
    return str(value).strip()


def _parse_role(role: Role | str) -> Role:
    try:
        return Role(role)
    except ValueError:
        raise ValidationError(f"Unknown role {role!r}") from None


def _parse_status(status: BookingStatus | str) -> BookingStatus:
    try:
        return BookingStatus(status)
    except ValueError:
        raise ValidationError(f"Unknown booking status {status!r}") from None
