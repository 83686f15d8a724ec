from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Header, HTTPException

from salon_booking.application.ports.booking_source import BookingSourcePort
from salon_booking.application.ports.booking_store import BookingStorePort
from salon_booking.application.ports.clock import ClockPort
from salon_booking.application.ports.rate_card import RateCardPort
from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.application.use_cases.availability import AvailabilityUseCase
from salon_booking.application.use_cases.booking import BookingUseCase
from salon_booking.application.use_cases.sync import SyncCoordinator
from salon_booking.application.utils.time_arithmetic import time_to_minutes
from salon_booking.core.config import settings
from salon_booking.domain.entities.actor import Actor, Role
from salon_booking.domain.entities.business_hours import BusinessHours
from salon_booking.infrastructure.clock.system_clock import SystemClock, safe_timezone
from salon_booking.infrastructure.knowledge.service_catalog_store import ServiceCatalogStore
from salon_booking.infrastructure.rates.settings_rate_card import SettingsRateCard
from salon_booking.infrastructure.store.json_store import JsonBookingStore
from salon_booking.infrastructure.store.memory_store import MemoryBookingStore
from salon_booking.infrastructure.sync.http_source import HttpBookingSource
from salon_booking.infrastructure.sync.local_source import LocalBookingSource


_booking_store: BookingStorePort | None = None
logger = logging.getLogger(__name__)


def get_booking_store() -> BookingStorePort:
    global _booking_store
    if _booking_store is None:
        provider = (settings.STORE_PROVIDER or "").lower()
        if not provider:
            provider = "json" if settings.ENV.lower() in {"dev", "local"} else "memory"
        if provider == "json":
            _booking_store = JsonBookingStore(data_dir=settings.DATA_DIR)
        elif provider == "memory":
            _booking_store = MemoryBookingStore()
        else:
            raise ValueError(f"Unknown STORE_PROVIDER {settings.STORE_PROVIDER!r}")
        logger.info("Using %s booking store", provider)
    return _booking_store


@lru_cache
def get_business_hours() -> BusinessHours:
    return BusinessHours(
        open_minutes=time_to_minutes(settings.BUSINESS_OPEN_TIME),
        close_minutes=time_to_minutes(settings.BUSINESS_CLOSE_TIME),
        slot_minutes=settings.SLOT_MINUTES,
    )


def get_clock() -> ClockPort:
    return SystemClock(safe_timezone(settings.BUSINESS_TIMEZONE))


def get_service_catalog() -> ServiceCatalogPort:
    return ServiceCatalogStore()


def get_rate_card() -> RateCardPort:
    return SettingsRateCard(
        default_rate=settings.DEFAULT_HOURLY_RATE,
        overrides=settings.ASSISTANT_HOURLY_RATES,
    )


def get_booking_use_case() -> BookingUseCase:
    return BookingUseCase(
        store=get_booking_store(),
        catalog=get_service_catalog(),
        rate_card=get_rate_card(),
        clock=get_clock(),
        hours=get_business_hours(),
        notes_max_length=settings.NOTES_MAX_LENGTH,
    )


def get_availability_use_case() -> AvailabilityUseCase:
    return AvailabilityUseCase(
        store=get_booking_store(),
        hours=get_business_hours(),
        max_range_days=settings.MAX_RANGE_DAYS,
    )


def get_actor(
    x_user_id: str | None = Header(None, alias="X-User-Id"),
    x_user_role: str | None = Header(None, alias="X-User-Role"),
) -> Actor:
    if not x_user_id or not x_user_role:
        raise HTTPException(status_code=401, detail="Authentication required")
    try:
        role = Role(x_user_role.lower())
    except ValueError:
        raise HTTPException(status_code=401, detail="Unknown user role")
    return Actor(user_id=x_user_id, role=role)


def get_booking_source(remote: bool = False) -> BookingSourcePort:
    if remote:
        return HttpBookingSource(base_url=settings.SYNC_API_BASE_URL)
    return LocalBookingSource(get_booking_use_case())


def build_sync_coordinator(
    actor: Actor,
    remote: bool = False,
    interval_seconds: float | None = None,
) -> SyncCoordinator:
    return SyncCoordinator(
        source=get_booking_source(remote),
        user_id=actor.user_id,
        role=actor.role,
        interval_seconds=interval_seconds or settings.SYNC_INTERVAL_SECONDS,
        now=get_clock().now,
    )
