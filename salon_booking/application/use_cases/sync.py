from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable

from salon_booking.application.ports.booking_source import BookingSourcePort
from salon_booking.domain.entities.actor import Role
from salon_booking.domain.entities.booking import Booking


class SyncCoordinator:
    """
    Keeps a session's local booking list in step with the authoritative source.

    A background thread fetches on a fixed interval; force_sync() does the same
    fetch-compare-replace immediately. Failures are logged and the next tick retries.
    """

    def __init__(
        self,
        source: BookingSourcePort,
        user_id: str,
        role: Role,
        interval_seconds: float = 30.0,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._source = source
        self._user_id = user_id
        self._role = role
        self._interval_seconds = interval_seconds
        self._now = now or datetime.now
        self._bookings: list[Booking] = []
        self._last_synced_at: datetime | None = None
        self._state_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._logger = logging.getLogger(__name__)

    @property
    def bookings(self) -> list[Booking]:
        with self._state_lock:
            return list(self._bookings)

    @property
    def last_synced_at(self) -> datetime | None:
        with self._state_lock:
            return self._last_synced_at

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            return
        # Fresh event per run so a worker that outlived stop() stays stopped.
        stop_event = threading.Event()
        self._stop_event = stop_event
        self._thread = threading.Thread(
            target=self._run,
            args=(stop_event,),
            name=f"booking-sync-{self._user_id}",
            daemon=True,
        )
        self._thread.start()
        self._logger.info("Booking sync started", extra={"user_id": self._user_id, "role": self._role.value})

    def stop(self, timeout: float | None = 5.0) -> None:
        """Tear down the timer. Safe to call more than once."""
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            if thread.is_alive():
                self._logger.warning(
                    "Booking sync worker still finishing a fetch",
                    extra={"user_id": self._user_id},
                )
        self._thread = None
        self._logger.info("Booking sync stopped", extra={"user_id": self._user_id})

    def close(self) -> None:
        """End the session: stop the timer and release the source."""
        self.stop()
        self._source.close()

    def force_sync(self) -> bool:
        """Fetch now, bypassing the timer. Returns True if the local list was replaced."""
        return self._sync_once()

    def _run(self, stop_event: threading.Event) -> None:
        self._sync_once(stop_event)
        while not stop_event.wait(self._interval_seconds):
            self._sync_once(stop_event)

    def _sync_once(self, stop_event: threading.Event | None = None) -> bool:
        try:
            fetched = self._source.fetch_bookings(self._user_id, self._role)
        except Exception as e:
            self._logger.warning(
                "Booking sync failed, will retry on next tick",
                extra={"user_id": self._user_id, "error": str(e)},
            )
            return False

        with self._state_lock:
            if stop_event is not None and stop_event.is_set():
                return False
            if fetched == self._bookings:
                return False
            self._bookings = list(fetched)
            self._last_synced_at = self._now()

        self._logger.info("Booking list updated", extra={"user_id": self._user_id, "count": len(fetched)})
        return True

    def __enter__(self) -> "SyncCoordinator":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
