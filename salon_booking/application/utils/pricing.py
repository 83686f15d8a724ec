from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def compute_price(service_id: str, duration_minutes: int, hourly_rate: int) -> int:
    """Price of a service at an hourly rate, rounded half-up to a whole unit.

    service_id is currently unused; every service is billed at the same hourly rate.
    """
    amount = Decimal(duration_minutes) / Decimal(60) * Decimal(hourly_rate)
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
