from __future__ import annotations

from fastapi import APIRouter, Depends

from salon_booking.api.v1.schemas import ServiceSchema
from salon_booking.application.use_cases.booking import BookingUseCase
from salon_booking.wiring.dependencies import get_booking_use_case

router = APIRouter()


@router.get("/services", response_model=list[ServiceSchema])
def list_services(uc: BookingUseCase = Depends(get_booking_use_case)):
    return [ServiceSchema.from_entity(s) for s in uc.list_services()]
