from __future__ import annotations

from abc import ABC, abstractmethod


class RateCardPort(ABC):
    @abstractmethod
    def get_hourly_rate(self, assistant_id: str) -> int:
        """Hourly rate charged for an assistant's practice appointments."""
        raise NotImplementedError
