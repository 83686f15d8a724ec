"""
Concurrent creation against one assistant's calendar must never double-book.
"""

from __future__ import annotations

import threading
import time
from datetime import date

from salon_booking.application.exceptions import ConflictError
from salon_booking.application.use_cases.booking import BookingUseCase
from salon_booking.application.use_cases.conflict import intervals_overlap
from salon_booking.application.utils.time_arithmetic import time_to_minutes
from salon_booking.infrastructure.knowledge.service_catalog_store import ServiceCatalogStore
from salon_booking.infrastructure.rates.settings_rate_card import SettingsRateCard
from salon_booking.infrastructure.store.memory_store import MemoryBookingStore


class SlowReadStore(MemoryBookingStore):
    """Widens the window between the conflict read and the write."""

    def list_for_day(self, assistant_id, day):
        result = super().list_for_day(assistant_id, day)
        time.sleep(0.005)
        return result


def _run_concurrently(uc: BookingUseCase, requests: list[tuple[str, str]]):
    barrier = threading.Barrier(len(requests))
    results = []
    results_lock = threading.Lock()

    def worker(customer_id: str, start_time: str) -> None:
        barrier.wait()
        try:
            booking = uc.create_booking(customer_id, "a1", "cut", "2025-03-10", start_time)
            outcome = booking
        except ConflictError as e:
            outcome = e
        with results_lock:
            results.append(outcome)

    threads = [threading.Thread(target=worker, args=req) for req in requests]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return results


def _assert_no_overlap(store):
    active = [b for b in store.list_for_day("a1", date(2025, 3, 10)) if b.is_active]
    for i, a in enumerate(active):
        for b in active[i + 1 :]:
            assert not intervals_overlap(
                time_to_minutes(a.start_time),
                time_to_minutes(a.end_time),
                time_to_minutes(b.start_time),
                time_to_minutes(b.end_time),
            )


def test_overlapping_requests_exactly_one_wins(clock):
    store = SlowReadStore()
    uc = BookingUseCase(store, ServiceCatalogStore(), SettingsRateCard(2000), clock)

    results = _run_concurrently(uc, [(f"c{i}", "14:00") for i in range(8)])

    successes = [r for r in results if not isinstance(r, ConflictError)]
    assert len(successes) == 1
    assert len(results) - len(successes) == 7
    _assert_no_overlap(store)


def test_partially_overlapping_requests_keep_invariant(clock):
    store = SlowReadStore()
    uc = BookingUseCase(store, ServiceCatalogStore(), SettingsRateCard(2000), clock)

    starts = ["13:00", "13:30", "14:00", "14:30", "15:00", "15:30"]
    _run_concurrently(uc, [(f"c{i}", s) for i, s in enumerate(starts)])

    _assert_no_overlap(store)
    assert len(store.list_all()) >= 2


def test_disjoint_requests_all_succeed(clock):
    store = SlowReadStore()
    uc = BookingUseCase(store, ServiceCatalogStore(), SettingsRateCard(2000), clock)

    starts = ["09:00", "10:00", "11:00", "12:00", "13:00"]
    results = _run_concurrently(uc, [(f"c{i}", s) for i, s in enumerate(starts)])

    assert not any(isinstance(r, ConflictError) for r in results)
    assert len(store.list_all()) == 5
