"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Iterator, Self

from bookings.domain.errors import InvalidRangeError


def to_day(value: date | datetime | str) -> date:
    """Normalise a date-like value to a calendar date, dropping time-of-day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    raise ValueError(f"Not a date: {value!r}")


@dataclass(frozen=True)
class ResourceId:
    """Opaque identifier of a bookable resource, assigned by the store."""

    value: str

    @classmethod
    def from_string(cls, value: str) -> Self:
        value = str(value).strip()
        if not value:
            raise ValueError("Resource ID cannot be empty")
        return cls(value=value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BookingId:
    """Opaque identifier of a booking, assigned by the store on creation."""

    value: str

    @classmethod
    def from_string(cls, value: str) -> Self:
        value = str(value).strip()
        if not value:
            raise ValueError("Booking ID cannot be empty")
        return cls(value=value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def of(cls, value: Decimal | int | str) -> Self:
        return cls(amount=Decimal(str(value)))

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


class BookingStatus(str, Enum):
    """Lifecycle status of a booking."""

    ON_HOLD = "on_hold"
    SOLD = "sold"
    CONFIGURATION = "configuration"
    DELIVERED = "delivered"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    BookingStatus.ON_HOLD: "On Hold",
    BookingStatus.SOLD: "Sold",
    BookingStatus.CONFIGURATION: "Config",
    BookingStatus.DELIVERED: "Delivered",
}

# Statuses that hold inventory; delivered slots free the resource again.
BLOCKING_STATUSES = frozenset(
    {BookingStatus.ON_HOLD, BookingStatus.SOLD, BookingStatus.CONFIGURATION}
)


class PartyType(str, Enum):
    """Kinds of external CRM records a booking can be linked to."""

    DEAL = "deal"
    CONTACT = "contact"
    COMPANY = "company"


@dataclass(frozen=True)
class PartyRef:
    """Reference to an external deal, contact or company by id."""

    party_type: PartyType
    party_id: str

    @classmethod
    def from_strings(cls, party_type: str, party_id: str) -> Self:
        party_id = str(party_id).strip()
        if not party_id:
            raise ValueError("Party ID cannot be empty")
        return cls(party_type=PartyType(party_type), party_id=party_id)


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of calendar days."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise InvalidRangeError(self.start, self.end)

    @classmethod
    def of(cls, start: date | datetime | str, end: date | datetime | str) -> Self:
        return cls(start=to_day(start), end=to_day(end))

    @classmethod
    def window(cls, start: date, days: int) -> Self:
        """Range covering `days` consecutive days beginning at `start`."""
        if days < 1:
            raise ValueError("Window must cover at least one day")
        return cls(start=start, end=start + timedelta(days=days - 1))

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def overlaps(self, other: "DateRange") -> bool:
        # Shared boundary days count as overlap.
        return self.start <= other.end and self.end >= other.start

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def clip(self, other: "DateRange") -> "DateRange | None":
        """Intersection with `other`, or None when they do not overlap."""
        if not self.overlaps(other):
            return None
        return DateRange(max(self.start, other.start), min(self.end, other.end))

    def dates(self) -> Iterator[date]:
        for offset in range(self.days):
            yield self.start + timedelta(days=offset)
