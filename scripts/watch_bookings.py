#!/usr/bin/env python3
"""
Follow one user's bookings the way a client session does.

Usage:
  python3 scripts/watch_bookings.py --user-id user_2 --role customer [--remote] [--interval 30]

Starts a SyncCoordinator against the local store (or the HTTP API with --remote)
and prints the booking list whenever it changes. Ctrl+C ends the session.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from salon_booking.domain.entities.actor import Actor, Role  # noqa: E402
from salon_booking.wiring.dependencies import build_sync_coordinator  # noqa: E402


def _print_bookings(coordinator) -> None:
    print(f"\n[{coordinator.last_synced_at}] {len(coordinator.bookings)} booking(s)")
    print("-" * 60)
    for b in coordinator.bookings:
        print(f"{b.date} {b.start_time}-{b.end_time}  {b.service_id:<13} {b.status.value:<10} {b.total_price}")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--user-id", required=True)
    parser.add_argument("--role", choices=[r.value for r in Role], default=Role.customer.value)
    parser.add_argument("--remote", action="store_true", help="fetch through the HTTP API")
    parser.add_argument("--interval", type=float, default=None, help="override SYNC_INTERVAL_SECONDS")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")

    actor = Actor(user_id=args.user_id, role=Role(args.role))
    coordinator = build_sync_coordinator(actor, remote=args.remote, interval_seconds=args.interval)

    last_seen = None
    with coordinator:
        try:
            while True:
                if coordinator.last_synced_at != last_seen:
                    last_seen = coordinator.last_synced_at
                    _print_bookings(coordinator)
                time.sleep(1.0)
        except KeyboardInterrupt:
            print("\nSession ended")
    return 0


if __name__ == "__main__":
    sys.exit(main())
