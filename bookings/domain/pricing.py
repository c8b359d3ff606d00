"""Duration and price calculation for product slots."""

from datetime import date, datetime
from decimal import Decimal

from bookings.domain.value_objects import DateRange


def compute_duration(start: date | datetime, end: date | datetime) -> int:
    """Inclusive whole-day count of a range; a same-day booking lasts 1 day.

    Raises:
        InvalidRangeError: If end is before start.
    """
    return DateRange.of(start, end).days


def compute_price(daily_rate: Decimal, duration_days: int) -> Decimal:
    """Total price for a stay. No rounding; display code formats to cents."""
    return daily_rate * duration_days


def slot_name(resource_name: str, start: date, end: date) -> str:
    return f"{resource_name} - {start.isoformat()} to {end.isoformat()}"
