from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

from salon_booking.domain.entities.booking import Booking, BookingStatus
from salon_booking.domain.entities.service_catalog import Service
from salon_booking.domain.entities.time_slot import TimeSlot


class ServiceSchema(BaseModel):
    service_id: str
    name: str
    duration_minutes: int
    description: str | None = None

    @classmethod
    def from_entity(cls, service: Service) -> "ServiceSchema":
        return cls(
            service_id=service.service_id,
            name=service.name,
            duration_minutes=service.duration_minutes,
            description=service.description,
        )


class CreateBookingRequestSchema(BaseModel):
    assistant_id: str | None = None
    service_id: str | None = None
    date: str | None = None
    start_time: str | None = None
    notes: str | None = None


class UpdateStatusRequestSchema(BaseModel):
    status: str


class CancelBookingRequestSchema(BaseModel):
    reason: str | None = None


class RescheduleRequestSchema(BaseModel):
    date: str | None = None
    start_time: str | None = None


class BookingSchema(BaseModel):
    id: str
    customer_id: str
    assistant_id: str
    service_id: str
    date: dt.date
    start_time: str
    end_time: str
    status: BookingStatus
    total_price: int
    notes: str | None = None
    cancellation_reason: str | None = None
    created_at: dt.datetime
    updated_at: dt.datetime

    @classmethod
    def from_entity(cls, booking: Booking) -> "BookingSchema":
        return cls(
            id=booking.id,
            customer_id=booking.customer_id,
            assistant_id=booking.assistant_id,
            service_id=booking.service_id,
            date=booking.date,
            start_time=booking.start_time,
            end_time=booking.end_time,
            status=booking.status,
            total_price=booking.total_price,
            notes=booking.notes,
            cancellation_reason=booking.cancellation_reason,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


class PaginationSchema(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class BookingListResponseSchema(BaseModel):
    bookings: list[BookingSchema]
    pagination: PaginationSchema


class TimeSlotSchema(BaseModel):
    time: str
    available: bool
    booked: bool

    @classmethod
    def from_entity(cls, slot: TimeSlot) -> "TimeSlotSchema":
        return cls(time=slot.time, available=slot.available, booked=slot.booked)


class DayAvailabilitySchema(BaseModel):
    assistant_id: str
    date: dt.date
    slots: list[TimeSlotSchema]


class ScheduleSchema(BaseModel):
    assistant_id: str
    start_date: dt.date
    end_date: dt.date
    days: dict[str, list[TimeSlotSchema]] = Field(default_factory=dict)
