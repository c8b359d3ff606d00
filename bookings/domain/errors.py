"""Domain error codes for the bookings module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_INPUT = "INVALID_INPUT"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    BOOKING_CONFLICT = "BOOKING_CONFLICT"
    REPOSITORY_FAILURE = "REPOSITORY_FAILURE"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised when input is malformed or a required field is missing."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(code=ErrorCode.INVALID_INPUT, message=message)
        self.field = field


class InvalidRangeError(ValidationError):
    """Raised when a date range ends before it starts."""

    def __init__(self, start: object, end: object) -> None:
        super().__init__(message="End date must not be before start date")
        self.code = ErrorCode.INVALID_DATE_RANGE
        self.start = start
        self.end = end


class NotFoundError(DomainError):
    """Raised when an identifier is unknown to the store."""


class ResourceNotFoundError(NotFoundError):
    """Raised when a resource is not found."""

    def __init__(self, resource_id: str) -> None:
        super().__init__(
            code=ErrorCode.RESOURCE_NOT_FOUND,
            message="Resource not found",
        )
        self.resource_id = resource_id


class BookingNotFoundError(NotFoundError):
    """Raised when a booking is not found."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_NOT_FOUND,
            message="Booking not found",
        )
        self.booking_id = booking_id


class ConflictError(DomainError):
    """Raised when a requested range overlaps blocking bookings."""

    def __init__(self, conflicts: tuple = ()) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_CONFLICT,
            message="Resource is already booked for part of the requested dates",
        )
        self.conflicts = tuple(conflicts)


class RepositoryError(DomainError):
    """Wraps any failure raised by the backing store."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            code=ErrorCode.REPOSITORY_FAILURE,
            message="Booking store is unavailable",
        )
        self.operation = operation
