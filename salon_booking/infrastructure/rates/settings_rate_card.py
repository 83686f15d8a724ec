from __future__ import annotations

from collections.abc import Mapping

from salon_booking.application.ports.rate_card import RateCardPort


class SettingsRateCard(RateCardPort):
    def __init__(self, default_rate: int, overrides: Mapping[str, int] | None = None) -> None:
        if default_rate <= 0:
            raise ValueError("default_rate must be positive")
        self._default_rate = default_rate
        self._overrides = dict(overrides or {})

    def get_hourly_rate(self, assistant_id: str) -> int:
        return self._overrides.get(assistant_id, self._default_rate)
