from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TimeSlot:
    time: str  # HH:MM
    available: bool
    booked: bool
