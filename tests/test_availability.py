"""
Tests for per-day slot generation and multi-day schedule aggregation.
"""

from __future__ import annotations

from datetime import date

import pytest

from salon_booking.application.exceptions import ValidationError
from salon_booking.application.use_cases.availability import AvailabilityUseCase
from salon_booking.domain.entities.business_hours import BusinessHours

DAY = date(2025, 3, 10)


def _slot(slots, time):
    return next(s for s in slots if s.time == time)


def test_empty_calendar_all_available(availability):
    slots = availability.compute_day_availability("a1", DAY)

    assert len(slots) == 18
    assert slots[0].time == "09:00"
    assert slots[-1].time == "17:30"
    assert all(s.available and not s.booked for s in slots)


def test_booked_slots_marked(use_case, availability):
    use_case.create_booking("c1", "a1", "cut", "2025-03-10", "14:00")
    slots = availability.compute_day_availability("a1", DAY)

    assert _slot(slots, "13:30").available is True
    assert _slot(slots, "14:00").booked is True
    assert _slot(slots, "14:30").available is False
    assert _slot(slots, "15:00").available is True


def test_partial_slot_overlap_marks_start_slot_only(use_case, availability):
    """treatment 10:00-10:45: 10:30 boundary is inside the booking, 11:00 is not."""
    use_case.create_booking("c1", "a1", "treatment", "2025-03-10", "10:00")
    slots = availability.compute_day_availability("a1", DAY)

    assert _slot(slots, "10:30").booked is True
    assert _slot(slots, "11:00").booked is False


def test_cancellation_frees_the_slot(use_case, availability):
    booking = use_case.create_booking("c1", "a1", "cut", "2025-03-10", "14:00")
    assert _slot(availability.compute_day_availability("a1", DAY), "14:00").available is False

    use_case.cancel_booking(booking.id, reason="Sick")

    slots = availability.compute_day_availability("a1", DAY)
    assert _slot(slots, "14:00").available is True
    assert _slot(slots, "14:30").available is True


def test_availability_read_is_idempotent(use_case, availability):
    use_case.create_booking("c1", "a1", "color", "2025-03-10", "09:00")

    first = availability.compute_day_availability("a1", DAY)
    second = availability.compute_day_availability("a1", DAY)
    assert first == second
    assert first is not second


def test_other_assistants_do_not_affect_slots(use_case, availability):
    use_case.create_booking("c1", "a2", "perm", "2025-03-10", "09:00")
    assert all(s.available for s in availability.compute_day_availability("a1", DAY))


def test_custom_business_hours(store):
    hours = BusinessHours(open_minutes=10 * 60, close_minutes=12 * 60, slot_minutes=60)
    slots = AvailabilityUseCase(store, hours=hours).compute_day_availability("a1", DAY)
    assert [s.time for s in slots] == ["10:00", "11:00"]


def test_range_availability_inclusive_and_ordered(use_case, availability):
    use_case.create_booking("c1", "a1", "cut", "2025-03-11", "09:00")
    schedule = availability.compute_range_availability("a1", date(2025, 3, 10), date(2025, 3, 12))

    assert list(schedule) == [date(2025, 3, 10), date(2025, 3, 11), date(2025, 3, 12)]
    assert schedule[date(2025, 3, 11)][0].booked is True
    assert schedule[date(2025, 3, 10)] == availability.compute_day_availability("a1", date(2025, 3, 10))


def test_range_single_day(availability):
    schedule = availability.compute_range_availability("a1", DAY, DAY)
    assert list(schedule) == [DAY]


def test_range_validation(store):
    uc = AvailabilityUseCase(store, max_range_days=7)

    with pytest.raises(ValidationError):
        uc.compute_range_availability("a1", date(2025, 3, 10), date(2025, 3, 9))
    with pytest.raises(ValidationError):
        uc.compute_range_availability("a1", date(2025, 3, 1), date(2025, 3, 8))
    assert len(uc.compute_range_availability("a1", date(2025, 3, 1), date(2025, 3, 7))) == 7
