from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Service:
    service_id: str
    name: str
    duration_minutes: int
    description: str | None = None
