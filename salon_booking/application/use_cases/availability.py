from __future__ import annotations

import logging
from datetime import date

from salon_booking.application.exceptions import ValidationError
from salon_booking.application.ports.booking_store import BookingStorePort
from salon_booking.application.utils.time_arithmetic import iter_dates, minutes_to_time, time_to_minutes
from salon_booking.domain.entities.business_hours import BusinessHours
from salon_booking.domain.entities.time_slot import TimeSlot


class AvailabilityUseCase:
    def __init__(
        self,
        store: BookingStorePort,
        hours: BusinessHours | None = None,
        max_range_days: int = 90,
    ) -> None:
        self._store = store
        self._hours = hours or BusinessHours()
        self._max_range_days = max_range_days
        self._logger = logging.getLogger(__name__)

    def compute_day_availability(self, assistant_id: str, day: date) -> list[TimeSlot]:
        """
        Slots for one assistant on one date, recomputed from the live booking set.
        A slot is booked when an active booking satisfies start <= slot < end.
        """
        intervals = [
            (time_to_minutes(b.start_time), time_to_minutes(b.end_time))
            for b in self._store.list_for_day(assistant_id, day)
            if b.is_active
        ]
        slots: list[TimeSlot] = []
        for minute in self._hours.slot_starts():
            booked = any(start <= minute < end for start, end in intervals)
            slots.append(TimeSlot(time=minutes_to_time(minute), available=not booked, booked=booked))
        return slots

    def compute_range_availability(
        self,
        assistant_id: str,
        start_date: date,
        end_date: date,
    ) -> dict[date, list[TimeSlot]]:
        """Per-day slots for every date from start_date to end_date inclusive, in date order."""
        if end_date < start_date:
            raise ValidationError("end_date must not be before start_date")
        span_days = (end_date - start_date).days + 1
        if span_days > self._max_range_days:
            raise ValidationError(f"Date range may cover at most {self._max_range_days} days")

        self._logger.debug(
            "Computing range availability",
            extra={"assistant_id": assistant_id, "days": span_days},
        )
        return {day: self.compute_day_availability(assistant_id, day) for day in iter_dates(start_date, end_date)}
