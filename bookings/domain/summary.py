"""Roll-up of the bookings linked to a deal, contact or company."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from bookings.domain.models import Booking
from bookings.domain.value_objects import BookingStatus, Money


@dataclass(frozen=True)
class PartySummary:
    total: int
    total_value: Money
    by_status: dict[BookingStatus, int]


def summarize(bookings: Iterable[Booking]) -> PartySummary:
    counts = {status: 0 for status in BookingStatus}
    total = 0
    value = Decimal("0")
    for booking in bookings:
        total += 1
        value += booking.total_amount.amount
        counts[booking.status] += 1
    return PartySummary(total=total, total_value=Money(value), by_status=counts)
