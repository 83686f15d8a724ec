"""
Tests for half-open interval conflict detection.
"""

from __future__ import annotations

from datetime import date

import pytest

from salon_booking.application.use_cases.conflict import ConflictDetector, intervals_overlap

DAY = date(2025, 3, 10)


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ((840, 900), (810, 870), True),  # 14:00-15:00 vs 13:30-14:30
        ((840, 900), (900, 960), False),  # touching end
        ((840, 900), (780, 840), False),  # touching start
        ((840, 900), (850, 860), True),  # contained
        ((840, 900), (600, 1000), True),  # containing
        ((840, 900), (540, 600), False),  # disjoint
    ],
)
def test_overlap_is_symmetric(a, b, expected):
    assert intervals_overlap(*a, *b) is expected
    assert intervals_overlap(*b, *a) is expected


def test_conflict_with_active_booking(use_case, store):
    use_case.create_booking("c1", "a1", "cut", "2025-03-10", "14:00")
    detector = ConflictDetector(store)

    assert detector.has_conflict("a1", DAY, "13:30", "14:30") is True
    assert detector.has_conflict("a1", DAY, "15:00", "16:00") is False
    assert detector.has_conflict("a1", DAY, "13:00", "14:00") is False


def test_conflict_scoped_to_assistant_and_date(use_case, store):
    use_case.create_booking("c1", "a1", "cut", "2025-03-10", "14:00")
    detector = ConflictDetector(store)

    assert detector.has_conflict("a2", DAY, "14:00", "15:00") is False
    assert detector.has_conflict("a1", date(2025, 3, 11), "14:00", "15:00") is False


def test_cancelled_bookings_do_not_conflict(use_case, store):
    booking = use_case.create_booking("c1", "a1", "cut", "2025-03-10", "14:00")
    use_case.cancel_booking(booking.id)

    assert ConflictDetector(store).has_conflict("a1", DAY, "14:00", "15:00") is False


def test_excluded_booking_is_ignored(use_case, store):
    booking = use_case.create_booking("c1", "a1", "cut", "2025-03-10", "14:00")
    detector = ConflictDetector(store)

    assert detector.has_conflict("a1", DAY, "14:30", "15:30", exclude_booking_id=booking.id) is False
