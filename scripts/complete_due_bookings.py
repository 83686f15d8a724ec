#!/usr/bin/env python3
"""
Completion process: mark confirmed bookings whose appointment has ended as completed.

Usage:
  python3 scripts/complete_due_bookings.py

Meant to be run periodically (cron or a scheduler). Pending bookings are never completed.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from salon_booking.wiring.dependencies import get_booking_use_case  # noqa: E402


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
    completed = get_booking_use_case().complete_due_bookings()
    print(f"Completed {len(completed)} booking(s)")
    for b in completed:
        print(f"  {b.id} {b.assistant_id} {b.date} {b.start_time}-{b.end_time}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
