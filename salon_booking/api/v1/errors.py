from __future__ import annotations

from fastapi import HTTPException

from salon_booking.application.exceptions import (
    BookingError,
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

_STATUS_CODES: dict[type[BookingError], int] = {
    ValidationError: 400,
    InvalidTransitionError: 400,
    PermissionDeniedError: 403,
    NotFoundError: 404,
    ConflictError: 409,
}


def to_http_exception(error: BookingError) -> HTTPException:
    for error_type, status_code in _STATUS_CODES.items():
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=500, detail="Unexpected booking error")
