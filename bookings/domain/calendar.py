"""Calendar grid projection of product slots.

Turns a list of resources and their bookings into one row of cells per
resource over a window of consecutive days. A booking occupies every cell
in its range; the cell on its start date carries the span width so the
rendering layer can draw a single merged cell and skip the rest.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Sequence

from bookings.domain.errors import ValidationError
from bookings.domain.models import Booking, Resource
from bookings.domain.value_objects import BookingStatus, DateRange, ResourceId

DEFAULT_WINDOW_DAYS = 50


@dataclass(frozen=True)
class CalendarColumn:
    """Header entry for one day of the window."""

    date: date
    is_weekend: bool
    is_today: bool


@dataclass(frozen=True)
class CalendarCell:
    """One (resource, day) slot of the grid."""

    resource_id: ResourceId
    date: date
    booking: Booking | None = None
    is_span_start: bool = False
    span_width: int = 0

    @property
    def is_free(self) -> bool:
        return self.booking is None


@dataclass(frozen=True)
class CalendarGrid:
    """Dense grid of cells, one row per resource in input order."""

    window: DateRange
    columns: tuple[CalendarColumn, ...]
    resources: tuple[Resource, ...]
    rows: dict[ResourceId, tuple[CalendarCell, ...]]

    def row(self, resource_id: ResourceId) -> tuple[CalendarCell, ...]:
        return self.rows[resource_id]

    def cell(self, resource_id: ResourceId, day: date) -> CalendarCell:
        return self.rows[resource_id][(day - self.window.start).days]


def shift_window(window_start: date, window_days: int, pages: int) -> date:
    """Start date of the window `pages` whole windows away (negative = back)."""
    return window_start + timedelta(days=window_days * pages)


def project(
    resources: Sequence[Resource],
    window_start: date,
    window_days: int,
    bookings: Iterable[Booking],
    status_filter: BookingStatus | None = None,
    today: date | None = None,
) -> CalendarGrid:
    """Project bookings onto a `window_days`-wide grid starting at `window_start`.

    When two bookings claim the same cell the first in input order wins;
    overlaps are not re-validated here.

    Raises:
        ValidationError: If window_days is less than 1.
    """
    if window_days < 1:
        raise ValidationError("days must be at least 1", field="days")
    window = DateRange.window(window_start, window_days)
    days = list(window.dates())

    by_resource: dict[ResourceId, list[Booking]] = {}
    for booking in bookings:
        if status_filter is not None and booking.status != status_filter:
            continue
        by_resource.setdefault(booking.resource_id, []).append(booking)

    rows = {
        resource.id: _project_row(resource.id, days, window, by_resource.get(resource.id, []))
        for resource in resources
    }
    columns = tuple(
        CalendarColumn(date=day, is_weekend=day.weekday() >= 5, is_today=day == today)
        for day in days
    )
    return CalendarGrid(
        window=window,
        columns=columns,
        resources=tuple(resources),
        rows=rows,
    )


def _project_row(
    resource_id: ResourceId,
    days: list[date],
    window: DateRange,
    bookings: list[Booking],
) -> tuple[CalendarCell, ...]:
    cells = []
    for day in days:
        booking = next((b for b in bookings if b.period.contains(day)), None)
        if booking is None:
            cells.append(CalendarCell(resource_id=resource_id, date=day))
        elif day == booking.start_date:
            width = booking.period.clip(window).days
            cells.append(
                CalendarCell(
                    resource_id=resource_id,
                    date=day,
                    booking=booking,
                    is_span_start=True,
                    span_width=width,
                )
            )
        else:
            cells.append(CalendarCell(resource_id=resource_id, date=day, booking=booking))
    return tuple(cells)
