"""Availability checks against existing product slots."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable

from bookings.domain.models import Booking
from bookings.domain.value_objects import (
    BLOCKING_STATUSES,
    BookingStatus,
    DateRange,
    ResourceId,
)


@dataclass(frozen=True)
class AvailabilityResult:
    """Whether a range is free, and which bookings block it if not."""

    available: bool
    conflicts: tuple[Booking, ...] = ()


def check_availability(
    resource_id: ResourceId,
    start: date | datetime,
    end: date | datetime,
    existing: Iterable[Booking],
    blocking: frozenset[BookingStatus] = BLOCKING_STATUSES,
) -> AvailabilityResult:
    """Find blocking bookings of `resource_id` that overlap [start, end].

    Bookings for other resources are ignored, so callers may pass an unscoped
    list. Conflicts are returned in input order.

    Raises:
        InvalidRangeError: If end is before start.
    """
    candidate = DateRange.of(start, end)
    conflicts = tuple(
        booking
        for booking in existing
        if booking.resource_id == resource_id
        and booking.status in blocking
        and booking.period.overlaps(candidate)
    )
    return AvailabilityResult(available=not conflicts, conflicts=conflicts)
