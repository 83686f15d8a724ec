from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from salon_booking.api.v1.errors import to_http_exception
from salon_booking.api.v1.schemas import DayAvailabilitySchema, ScheduleSchema, TimeSlotSchema
from salon_booking.application.exceptions import BookingError
from salon_booking.application.use_cases.availability import AvailabilityUseCase
from salon_booking.wiring.dependencies import get_availability_use_case

router = APIRouter(prefix="/assistants/{assistant_id}")


@router.get("/availability", response_model=DayAvailabilitySchema)
def get_day_availability(
    assistant_id: str,
    day: date = Query(..., alias="date"),
    uc: AvailabilityUseCase = Depends(get_availability_use_case),
):
    slots = uc.compute_day_availability(assistant_id, day)
    return DayAvailabilitySchema(
        assistant_id=assistant_id,
        date=day,
        slots=[TimeSlotSchema.from_entity(s) for s in slots],
    )


@router.get("/schedule", response_model=ScheduleSchema)
def get_range_availability(
    assistant_id: str,
    start_date: date = Query(...),
    end_date: date = Query(...),
    uc: AvailabilityUseCase = Depends(get_availability_use_case),
):
    try:
        schedule = uc.compute_range_availability(assistant_id, start_date, end_date)
    except BookingError as e:
        raise to_http_exception(e)
    return ScheduleSchema(
        assistant_id=assistant_id,
        start_date=start_date,
        end_date=end_date,
        days={day.isoformat(): [TimeSlotSchema.from_entity(s) for s in slots] for day, slots in schedule.items()},
    )
