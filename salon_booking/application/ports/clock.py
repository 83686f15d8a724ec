from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime, tzinfo


class ClockPort(ABC):
    @property
    @abstractmethod
    def timezone(self) -> tzinfo:
        raise NotImplementedError

    @abstractmethod
    def now(self) -> datetime:
        """Current aware datetime in the business timezone."""
        raise NotImplementedError

    def today(self) -> date:
        return self.now().date()
