from __future__ import annotations

import logging
import math

from fastapi import APIRouter, Depends, HTTPException, Query

from salon_booking.api.v1.errors import to_http_exception
from salon_booking.api.v1.schemas import (
    BookingListResponseSchema,
    BookingSchema,
    CancelBookingRequestSchema,
    CreateBookingRequestSchema,
    PaginationSchema,
    RescheduleRequestSchema,
    UpdateStatusRequestSchema,
)
from salon_booking.application.exceptions import BookingError, ValidationError
from salon_booking.application.use_cases.booking import BookingUseCase
from salon_booking.application.use_cases.booking_lifecycle import authorize_status_change, ensure_party
from salon_booking.domain.entities.actor import Actor, Role
from salon_booking.domain.entities.booking import BookingStatus
from salon_booking.wiring.dependencies import get_actor, get_booking_use_case

router = APIRouter(prefix="/bookings")
logger = logging.getLogger(__name__)


@router.post("", response_model=BookingSchema, status_code=201)
def create_booking(
    req: CreateBookingRequestSchema,
    actor: Actor = Depends(get_actor),
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    if actor.role != Role.customer:
        raise HTTPException(status_code=403, detail="Only customers can create bookings")
    try:
        booking = uc.create_booking(
            customer_id=actor.user_id,
            assistant_id=req.assistant_id,
            service_id=req.service_id,
            booking_date=req.date,
            start_time=req.start_time,
            notes=req.notes,
        )
    except BookingError as e:
        raise to_http_exception(e)
    return BookingSchema.from_entity(booking)


@router.get("", response_model=BookingListResponseSchema)
def list_bookings(
    status: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    actor: Actor = Depends(get_actor),
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    try:
        bookings = uc.list_bookings(actor.user_id, actor.role, status=status)
    except BookingError as e:
        raise to_http_exception(e)

    start = (page - 1) * limit
    return BookingListResponseSchema(
        bookings=[BookingSchema.from_entity(b) for b in bookings[start : start + limit]],
        pagination=PaginationSchema(
            page=page,
            limit=limit,
            total=len(bookings),
            total_pages=math.ceil(len(bookings) / limit),
        ),
    )


@router.get("/{booking_id}", response_model=BookingSchema)
def get_booking(
    booking_id: str,
    actor: Actor = Depends(get_actor),
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    try:
        booking = uc.get_booking(booking_id)
        ensure_party(booking, actor)
    except BookingError as e:
        raise to_http_exception(e)
    return BookingSchema.from_entity(booking)


@router.patch("/{booking_id}/status", response_model=BookingSchema)
def update_booking_status(
    booking_id: str,
    req: UpdateStatusRequestSchema,
    actor: Actor = Depends(get_actor),
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    try:
        try:
            target = BookingStatus(req.status)
        except ValueError:
            raise ValidationError(f"Unknown booking status {req.status!r}")
        authorize_status_change(uc.get_booking(booking_id), actor, target)
        booking = uc.update_booking_status(booking_id, target)
    except BookingError as e:
        raise to_http_exception(e)
    return BookingSchema.from_entity(booking)


@router.post("/{booking_id}/cancel", response_model=BookingSchema)
def cancel_booking(
    booking_id: str,
    req: CancelBookingRequestSchema,
    actor: Actor = Depends(get_actor),
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    try:
        ensure_party(uc.get_booking(booking_id), actor)
        booking = uc.cancel_booking(booking_id, reason=req.reason)
    except BookingError as e:
        raise to_http_exception(e)
    logger.info("Booking cancelled via API", extra={"booking_id": booking_id, "reason": req.reason})
    return BookingSchema.from_entity(booking)


@router.put("/{booking_id}/schedule", response_model=BookingSchema)
def reschedule_booking(
    booking_id: str,
    req: RescheduleRequestSchema,
    actor: Actor = Depends(get_actor),
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    try:
        ensure_party(uc.get_booking(booking_id), actor)
        booking = uc.reschedule_booking(booking_id, new_date=req.date, new_start_time=req.start_time)
    except BookingError as e:
        raise to_http_exception(e)
    return BookingSchema.from_entity(booking)
