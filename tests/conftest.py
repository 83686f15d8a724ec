from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo

import pytest

from salon_booking.application.ports.clock import ClockPort
from salon_booking.application.use_cases.availability import AvailabilityUseCase
from salon_booking.application.use_cases.booking import BookingUseCase
from salon_booking.infrastructure.knowledge.service_catalog_store import ServiceCatalogStore
from salon_booking.infrastructure.rates.settings_rate_card import SettingsRateCard
from salon_booking.infrastructure.store.memory_store import MemoryBookingStore

TZ = ZoneInfo("Asia/Tokyo")


class FixedClock(ClockPort):
    def __init__(self, now: datetime) -> None:
        self._now = now

    @property
    def timezone(self) -> tzinfo:
        return self._now.tzinfo

    def now(self) -> datetime:
        return self._now

    def advance(self, **kwargs) -> None:
        self._now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2025, 3, 1, 10, 0, tzinfo=TZ))


@pytest.fixture
def store() -> MemoryBookingStore:
    return MemoryBookingStore()


@pytest.fixture
def use_case(store, clock) -> BookingUseCase:
    return BookingUseCase(
        store=store,
        catalog=ServiceCatalogStore(),
        rate_card=SettingsRateCard(default_rate=2000),
        clock=clock,
    )


@pytest.fixture
def availability(store) -> AvailabilityUseCase:
    return AvailabilityUseCase(store=store)
