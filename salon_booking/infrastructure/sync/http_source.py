from __future__ import annotations

import logging

import httpx

from salon_booking.application.exceptions import SyncFailure
from salon_booking.application.ports.booking_source import BookingSourcePort
from salon_booking.domain.entities.actor import Role
from salon_booking.domain.entities.booking import Booking
from salon_booking.infrastructure.store.serialization import booking_from_dict


class HttpBookingSource(BookingSourcePort):
    """Fetches a user's bookings from the booking API, following pagination."""

    def __init__(
        self,
        base_url: str,
        page_size: int = 100,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._page_size = page_size
        self._client = client or httpx.Client(timeout=10.0)
        self._logger = logging.getLogger(__name__)

    def fetch_bookings(self, user_id: str, role: Role) -> list[Booking]:
        url = f"{self._base_url}/api/v1/bookings"
        headers = {"X-User-Id": user_id, "X-User-Role": role.value}
        bookings: list[Booking] = []
        page = 1
        try:
            while True:
                response = self._client.get(
                    url,
                    params={"page": page, "limit": self._page_size},
                    headers=headers,
                )
                response.raise_for_status()
                data = response.json()
                bookings.extend(booking_from_dict(item) for item in data.get("bookings", []))
                total_pages = data.get("pagination", {}).get("total_pages", 1)
                if page >= total_pages:
                    return bookings
                page += 1
        except httpx.HTTPError as e:
            self._logger.error("Error fetching bookings", extra={"user_id": user_id, "error": str(e)})
            raise SyncFailure(f"Booking fetch failed: {e}") from e
        except (KeyError, ValueError, TypeError) as e:
            self._logger.error("Malformed bookings payload", extra={"user_id": user_id, "error": str(e)})
            raise SyncFailure(f"Malformed bookings payload: {e}") from e

    def close(self) -> None:
        self._client.close()
