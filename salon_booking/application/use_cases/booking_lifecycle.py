from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from salon_booking.application.exceptions import InvalidTransitionError, PermissionDeniedError
from salon_booking.domain.entities.actor import Actor, Role
from salon_booking.domain.entities.booking import Booking, BookingStatus

ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.pending: frozenset({BookingStatus.confirmed, BookingStatus.cancelled}),
    BookingStatus.confirmed: frozenset({BookingStatus.cancelled, BookingStatus.completed}),
    BookingStatus.completed: frozenset(),
    BookingStatus.cancelled: frozenset(),
}

CANCELLATION_REASON_PREFIX = "Cancellation reason: "


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def ensure_transition(current: BookingStatus, target: BookingStatus) -> None:
    if not can_transition(current, target):
        raise InvalidTransitionError(f"Cannot change booking status from {current.value} to {target.value}")


def append_cancellation_reason(notes: str | None, reason: str | None) -> str | None:
    if not reason:
        return notes
    line = f"{CANCELLATION_REASON_PREFIX}{reason}"
    return f"{notes}\n{line}" if notes else line


def apply_transition(
    booking: Booking,
    target: BookingStatus,
    now: datetime,
    reason: str | None = None,
) -> Booking:
    """Return the booking moved to target, with updated_at refreshed. Raises InvalidTransitionError."""
    ensure_transition(booking.status, target)
    if target == BookingStatus.cancelled:
        return replace(
            booking,
            status=target,
            notes=append_cancellation_reason(booking.notes, reason),
            cancellation_reason=reason or None,
            updated_at=now,
        )
    return replace(booking, status=target, updated_at=now)


def is_party(booking: Booking, actor: Actor) -> bool:
    if actor.role == Role.customer:
        return booking.customer_id == actor.user_id
    return booking.assistant_id == actor.user_id


def ensure_party(booking: Booking, actor: Actor) -> None:
    if not is_party(booking, actor):
        raise PermissionDeniedError("You do not have access to this booking")


def authorize_status_change(booking: Booking, actor: Actor, target: BookingStatus) -> None:
    """Assistants confirm and complete their own bookings; either party may cancel."""
    ensure_party(booking, actor)
    if target in (BookingStatus.confirmed, BookingStatus.completed) and actor.role != Role.assistant:
        raise PermissionDeniedError(f"Only the assistant can mark a booking {target.value}")
