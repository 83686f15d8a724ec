class BookingError(Exception):
    """Base class for errors raised by the booking engine."""
    pass


class ValidationError(BookingError):
    """Raised when input is missing, malformed, in the past or outside business hours."""
    pass


class ConflictError(BookingError):
    """Raised when the requested interval overlaps an active booking."""
    pass


class InvalidTransitionError(BookingError):
    """Raised when the lifecycle does not allow the requested status change."""
    pass


class NotFoundError(BookingError):
    """Raised when a referenced booking or service does not exist."""
    pass


class PermissionDeniedError(BookingError):
    """Raised when the acting user is not allowed to read or change a booking."""
    pass


class SyncFailure(RuntimeError):
    """Raised by booking sources when a sync fetch fails (timeouts, network errors, bad payloads)."""
    pass
