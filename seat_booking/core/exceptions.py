"""
Error taxonomy for seat reservation.

Every error carries an HTTP status, a stable machine-readable ``code`` and a
``retryable`` flag so callers can tell "try again later" apart from
"this will never succeed".
"""
from typing import Optional


class SeatBookingError(Exception):
    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    retryable: bool = False

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code, "retryable": self.retryable}


class SeatLockConflictError(SeatBookingError):
    """Another client currently holds the seat lock."""

    status_code = 423
    code = "SEAT_LOCKED"
    retryable = True

    def __init__(self, message: str = "Seat is being reserved by another user") -> None:
        super().__init__(message)


class SeatAlreadyReservedError(SeatBookingError):
    status_code = 409
    code = "SEAT_ALREADY_RESERVED"

    def __init__(self, message: str = "Seat already reserved") -> None:
        super().__init__(message)


class InvalidSeatTransitionError(SeatBookingError):
    """A reserved seat can never go back to available."""

    status_code = 409
    code = "INVALID_SEAT_TRANSITION"


class SeatNotFoundError(SeatBookingError):
    status_code = 404
    code = "SEAT_NOT_FOUND"

    def __init__(self, message: str = "Seat not found") -> None:
        super().__init__(message)


class ScreenSeatsNotFoundError(SeatBookingError):
    status_code = 404
    code = "SCREEN_SEATS_NOT_FOUND"

    def __init__(self, message: str = "No seats found for this screen.") -> None:
        super().__init__(message)


class UpstreamUnavailableError(SeatBookingError):
    """Redis or the database is unreachable or returned an error."""

    status_code = 503
    code = "UPSTREAM_UNAVAILABLE"
    retryable = True
