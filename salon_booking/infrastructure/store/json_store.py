from __future__ import annotations

import hashlib
import json
import logging
import re
import threading
from datetime import date
from pathlib import Path
from typing import Any, ContextManager

from salon_booking.application.ports.booking_store import BookingStorePort
from salon_booking.domain.entities.booking import Booking
from salon_booking.infrastructure.store.locks import KeyedLocks
from salon_booking.infrastructure.store.serialization import booking_from_dict, booking_to_dict

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")


class JsonBookingStore(BookingStorePort):
    """
    Durable booking store with one JSON file per assistant.

    Each file holds every booking of that assistant. Writes go through a temp file
    and an atomic rename, and a per-assistant file lock guards read-modify-write cycles.
    """

    def __init__(self, data_dir: str = "./data/bookings") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._file_locks = KeyedLocks()
        self._calendar_locks = KeyedLocks()
        self._index: dict[str, str] = {}
        self._index_lock = threading.Lock()
        self._logger = logging.getLogger(__name__)
        self._build_index()

    def _build_index(self) -> None:
        """Map booking id -> assistant id for every booking already on disk."""
        for file_path in self._data_dir.glob("*.json"):
            data = self._read_file(file_path)
            for item in data.get("bookings", []):
                self._index[item["id"]] = item["assistant_id"]
        self._logger.info("Booking index loaded", extra={"count": len(self._index)})

    def _get_file_path(self, assistant_id: str) -> Path:
        # Sanitized prefix plus a digest of the raw id.
        safe_name = _UNSAFE_FILENAME_CHARS.sub("_", assistant_id)[:40]
        digest = hashlib.sha256(assistant_id.encode("utf-8")).hexdigest()[:16]
        return self._data_dir / f"{safe_name}-{digest}.json"

    def _read_file(self, file_path: Path) -> dict[str, Any]:
        if not file_path.exists():
            return {"bookings": [], "version": 1}
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            self._logger.error(
                "Booking file unreadable",
                extra={"path": str(file_path), "error": str(e)},
            )
            raise

    def _load_assistant(self, assistant_id: str) -> list[Booking]:
        data = self._read_file(self._get_file_path(assistant_id))
        return [booking_from_dict(item) for item in data.get("bookings", [])]

    def _save_assistant(self, assistant_id: str, bookings: list[Booking]) -> None:
        """Save an assistant's bookings to JSON file atomically."""
        file_path = self._get_file_path(assistant_id)
        temp_path = file_path.with_suffix(".json.tmp")
        data = {
            "assistant_id": assistant_id,
            "bookings": [booking_to_dict(b) for b in bookings],
            "version": 1,
        }
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(file_path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise

    def add(self, booking: Booking) -> None:
        with self._file_locks.get(booking.assistant_id):
            bookings = self._load_assistant(booking.assistant_id)
            if any(b.id == booking.id for b in bookings):
                raise ValueError(f"Booking {booking.id} already exists")
            bookings.append(booking)
            self._save_assistant(booking.assistant_id, bookings)
        with self._index_lock:
            self._index[booking.id] = booking.assistant_id

    def save(self, booking: Booking) -> None:
        with self._file_locks.get(booking.assistant_id):
            bookings = self._load_assistant(booking.assistant_id)
            for i, existing in enumerate(bookings):
                if existing.id == booking.id:
                    bookings[i] = booking
                    break
            else:
                raise KeyError(booking.id)
            self._save_assistant(booking.assistant_id, bookings)

    def get(self, booking_id: str) -> Booking | None:
        with self._index_lock:
            assistant_id = self._index.get(booking_id)
        if assistant_id is None:
            return None
        with self._file_locks.get(assistant_id):
            bookings = self._load_assistant(assistant_id)
        for booking in bookings:
            if booking.id == booking_id:
                return booking
        return None

    def list_for_day(self, assistant_id: str, day: date) -> list[Booking]:
        return [b for b in self.list_for_assistant(assistant_id) if b.date == day]

    def list_for_assistant(self, assistant_id: str) -> list[Booking]:
        with self._file_locks.get(assistant_id):
            bookings = self._load_assistant(assistant_id)
        return [b for b in bookings if b.assistant_id == assistant_id]

    def list_for_customer(self, customer_id: str) -> list[Booking]:
        # Customers are spread across assistant files, so this scans all of them.
        return [b for b in self.list_all() if b.customer_id == customer_id]

    def list_all(self) -> list[Booking]:
        with self._index_lock:
            assistant_ids = sorted(set(self._index.values()))
        out: list[Booking] = []
        for assistant_id in assistant_ids:
            out.extend(self.list_for_assistant(assistant_id))
        return out

    def lock(self, assistant_id: str, day: date) -> ContextManager[None]:
        return self._calendar_locks.get((assistant_id, day))
