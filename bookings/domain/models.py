"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in bookings/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import date

from bookings.domain.pricing import compute_duration, compute_price
from bookings.domain.value_objects import (
    BLOCKING_STATUSES,
    BookingId,
    BookingStatus,
    DateRange,
    Money,
    PartyRef,
    ResourceId,
)


@dataclass(frozen=True)
class Resource:
    """Domain representation of a bookable product."""

    id: ResourceId
    name: str
    daily_rate: Money
    category: str | None = None
    sku: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class Booking:
    """Domain representation of a product slot.

    Duration and total are derived from the date range and the rate snapshot,
    so they cannot disagree with them.
    """

    id: BookingId | None
    resource_id: ResourceId
    start_date: date
    end_date: date
    daily_rate: Money
    status: BookingStatus = BookingStatus.ON_HOLD
    notes: str = ""
    name: str = ""
    linked_parties: frozenset[PartyRef] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        # Validates end >= start.
        DateRange(self.start_date, self.end_date)

    @property
    def period(self) -> DateRange:
        return DateRange(self.start_date, self.end_date)

    @property
    def duration_days(self) -> int:
        return compute_duration(self.start_date, self.end_date)

    @property
    def total_amount(self) -> Money:
        return Money(compute_price(self.daily_rate.amount, self.duration_days))

    @property
    def is_blocking(self) -> bool:
        return self.status in BLOCKING_STATUSES


@dataclass(frozen=True)
class LinkFailure:
    """A party link that could not be written for a booking."""

    party: PartyRef
    reason: str


@dataclass(frozen=True)
class BookingResult:
    """Outcome of creating a booking and linking it to its parties."""

    booking: Booking
    failed_links: tuple[LinkFailure, ...] = ()

    @property
    def fully_linked(self) -> bool:
        return not self.failed_links
