"""
Reservation error codes.

Every expected outcome of a seat operation is raised as a ReservationError
carrying a stable code and a user-safe message. Routes map the code to an
HTTP status; anything that is not a ReservationError is an internal error.
"""

from enum import Enum


class ErrorCode(Enum):
    """Error codes surfaced to callers."""

    VALIDATION_ERROR = 'VALIDATION_ERROR'
    NOT_FOUND = 'NOT_FOUND'
    SEAT_NOT_FOUND = 'SEAT_NOT_FOUND'
    PERSON_NOT_FOUND = 'PERSON_NOT_FOUND'
    TOO_LATE = 'TOO_LATE'
    SEAT_TAKEN = 'SEAT_TAKEN'
    PERSON_ALREADY_BOOKED = 'PERSON_ALREADY_BOOKED'
    CONFLICT_RETRYABLE = 'CONFLICT_RETRYABLE'
    PERMISSION_DENIED = 'PERMISSION_DENIED'
    SEAT_EXISTS = 'SEAT_EXISTS'
    SEAT_IN_USE = 'SEAT_IN_USE'


HTTP_STATUS = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.SEAT_NOT_FOUND: 404,
    ErrorCode.PERSON_NOT_FOUND: 404,
    ErrorCode.TOO_LATE: 422,
    ErrorCode.SEAT_TAKEN: 409,
    ErrorCode.PERSON_ALREADY_BOOKED: 409,
    ErrorCode.CONFLICT_RETRYABLE: 503,
    ErrorCode.PERMISSION_DENIED: 403,
    ErrorCode.SEAT_EXISTS: 409,
    ErrorCode.SEAT_IN_USE: 409,
}


class ReservationError(ValueError):
    """Base error with code and user-safe message."""

    code = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str, code: ErrorCode = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    @property
    def http_status(self) -> int:
        return HTTP_STATUS.get(self.code, 400)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(ReservationError):
    """Malformed or missing input, rejected before any invariant check."""

    code = ErrorCode.VALIDATION_ERROR


class NotFoundError(ReservationError):
    """Referenced record does not exist or belongs to someone else."""

    code = ErrorCode.NOT_FOUND


class SeatNotFoundError(NotFoundError):
    code = ErrorCode.SEAT_NOT_FOUND

    def __init__(self, seat_id=None) -> None:
        super().__init__('Seat not found for that date')
        self.seat_id = seat_id


class PersonNotFoundError(NotFoundError):
    code = ErrorCode.PERSON_NOT_FOUND

    def __init__(self, person_id=None) -> None:
        super().__init__('Person not found')
        self.person_id = person_id


class ReservationNotFoundError(NotFoundError):
    def __init__(self, reservation_id=None) -> None:
        super().__init__('Reservation not found')
        self.reservation_id = reservation_id


class TooLateError(ReservationError):
    code = ErrorCode.TOO_LATE

    def __init__(self, lead_minutes: int) -> None:
        super().__init__(f'Seats must be booked at least {lead_minutes} minutes in advance')
        self.lead_minutes = lead_minutes


class SeatTakenError(ReservationError):
    code = ErrorCode.SEAT_TAKEN

    def __init__(self) -> None:
        super().__init__('Seat already taken for that date')


class PersonAlreadyBookedError(ReservationError):
    code = ErrorCode.PERSON_ALREADY_BOOKED

    def __init__(self) -> None:
        super().__init__('A seat is already booked for that person on that date')


class ConflictRetryableError(ReservationError):
    """The write lock could not be acquired; nothing was written."""

    code = ErrorCode.CONFLICT_RETRYABLE

    def __init__(self) -> None:
        super().__init__('The system is busy, please try again')


class PermissionDeniedError(ReservationError):
    code = ErrorCode.PERMISSION_DENIED

    def __init__(self, message: str = 'Administrator access required') -> None:
        super().__init__(message)


class SeatExistsError(ReservationError):
    code = ErrorCode.SEAT_EXISTS

    def __init__(self, seat_number: int, offered_date: str) -> None:
        super().__init__(f'Seat {seat_number} already exists for {offered_date}')


class SeatInUseError(ReservationError):
    code = ErrorCode.SEAT_IN_USE

    def __init__(self) -> None:
        super().__init__('Cannot delete a seat with active reservations')
