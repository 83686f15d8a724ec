from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BusinessHours:
    open_minutes: int = 9 * 60
    close_minutes: int = 18 * 60
    slot_minutes: int = 30

    def __post_init__(self) -> None:
        if self.slot_minutes <= 0:
            raise ValueError("slot_minutes must be positive")
        if not 0 <= self.open_minutes < self.close_minutes <= 24 * 60:
            raise ValueError("Business hours must open before they close within one day")

    def contains(self, start_minutes: int, end_minutes: int) -> bool:
        return self.open_minutes <= start_minutes and end_minutes <= self.close_minutes

    def slot_starts(self) -> list[int]:
        """Every slot boundary whose full slot fits before closing."""
        starts = []
        current = self.open_minutes
        while current + self.slot_minutes <= self.close_minutes:
            starts.append(current)
            current += self.slot_minutes
        return starts
