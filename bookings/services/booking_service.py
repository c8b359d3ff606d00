"""Booking service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

Input validation happens before any store call, so a rejected request
leaves no partial state behind. Creating a booking and linking it to its
parties is not atomic: link failures are reported in the result and can be
retried with `retry_links` without re-creating the booking.
"""

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable

from bookings.domain import (
    Booking,
    BookingId,
    BookingResult,
    BookingStatus,
    DateRange,
    LinkFailure,
    PartyRef,
    PartyType,
    Resource,
    ResourceId,
)
from bookings.domain.availability import AvailabilityResult, check_availability
from bookings.domain.calendar import DEFAULT_WINDOW_DAYS, CalendarGrid, project
from bookings.domain.errors import (
    ConflictError,
    DomainError,
    ValidationError,
)
from bookings.domain.pricing import slot_name
from bookings.domain.summary import PartySummary, summarize
from bookings.domain.value_objects import to_day
from bookings.stores.interfaces import BookingStore

logger = logging.getLogger(__name__)

DateLike = date | datetime | str


def _resource_id(value: str) -> ResourceId:
    try:
        return ResourceId.from_string(value)
    except ValueError as exc:
        raise ValidationError("Resource ID is required", field="resource_id") from exc


def _booking_id(value: str) -> BookingId:
    try:
        return BookingId.from_string(value)
    except ValueError as exc:
        raise ValidationError("Booking ID is required", field="booking_id") from exc


def _day(value: DateLike | None, field: str) -> date:
    if value is None or value == "":
        raise ValidationError(f"{field} is required", field=field)
    try:
        return to_day(value)
    except ValueError as exc:
        raise ValidationError(f"{field} is not a valid date", field=field) from exc


def _range(start: DateLike | None, end: DateLike | None) -> DateRange:
    return DateRange(_day(start, "start_date"), _day(end, "end_date"))


def _status(value: BookingStatus | str) -> BookingStatus:
    try:
        return BookingStatus(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown status: {value}", field="status") from exc


def _party_type(value: PartyType | str) -> PartyType:
    try:
        return PartyType(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown party type: {value}", field="party_type") from exc


def _parties(refs: Iterable[PartyRef | tuple[str, str]]) -> list[PartyRef]:
    parties = []
    for ref in refs:
        if not isinstance(ref, PartyRef):
            try:
                party_type, party_id = ref
                ref = PartyRef.from_strings(party_type, party_id)
            except (TypeError, ValueError) as exc:
                raise ValidationError("Invalid party reference", field="parties") from exc
        parties.append(ref)
    # Drop duplicates, keep request order.
    return list(dict.fromkeys(parties))


class BookingService:
    """Service for product slot booking, availability and calendar views."""

    def __init__(
        self,
        store: BookingStore,
        *,
        enforce_availability: bool = False,
        calendar_window_days: int = DEFAULT_WINDOW_DAYS,
        max_window_days: int = 366,
        resource_list_limit: int = 100,
    ) -> None:
        self._store = store
        self._enforce_availability = enforce_availability
        self._calendar_window_days = calendar_window_days
        self._max_window_days = max_window_days
        self._resource_list_limit = resource_list_limit

    def list_resources(self, limit: int | None = None, category: str | None = None) -> list[Resource]:
        """Return bookable resources, capped at the configured list limit."""
        limit = self._resource_list_limit if limit is None else limit
        if limit < 1:
            raise ValidationError("limit must be positive", field="limit")
        return self._store.list_resources(min(limit, self._resource_list_limit), category)

    def get_resource(self, resource_id: str) -> Resource:
        """Return a resource by ID.

        Raises:
            ValidationError: If the resource_id is empty.
            ResourceNotFoundError: If the resource does not exist.
        """
        return self._store.get_resource(_resource_id(resource_id))

    def get_booking(self, booking_id: str) -> Booking:
        """Return a booking by ID.

        Raises:
            ValidationError: If the booking_id is empty.
            BookingNotFoundError: If the booking does not exist.
        """
        return self._store.get_booking(_booking_id(booking_id))

    def check_availability(
        self, resource_id: str, start: DateLike, end: DateLike
    ) -> AvailabilityResult:
        """Check a candidate range against the resource's blocking bookings.

        The answer is advisory: another booking may be created before the
        caller acts on it unless creation runs with availability enforced.

        Raises:
            ValidationError: If the range is missing or inverted.
            ResourceNotFoundError: If the resource does not exist.
        """
        rid = _resource_id(resource_id)
        candidate = _range(start, end)
        self._store.get_resource(rid)
        existing = self._store.list_bookings_for_resource(rid, candidate)
        return check_availability(rid, candidate.start, candidate.end, existing)

    def create_booking(
        self,
        resource_id: str,
        party_refs: Iterable[PartyRef | tuple[str, str]],
        start: DateLike,
        end: DateLike,
        notes: str | None = None,
        enforce_availability: bool | None = None,
    ) -> BookingResult:
        """Create an on-hold booking and link it to each party.

        Raises:
            ValidationError: If any input is invalid; nothing is written.
            ResourceNotFoundError: If the resource does not exist.
            ConflictError: If availability is enforced and the range is taken.
        """
        rid = _resource_id(resource_id)
        period = _range(start, end)
        parties = _parties(party_refs)
        enforce = self._enforce_availability if enforce_availability is None else enforce_availability

        resource = self._store.get_resource(rid)
        draft = Booking(
            id=None,
            resource_id=rid,
            start_date=period.start,
            end_date=period.end,
            daily_rate=resource.daily_rate,
            status=BookingStatus.ON_HOLD,
            notes=notes or "",
            name=slot_name(resource.name, period.start, period.end),
        )

        if enforce:
            with self._store.write_lock(rid):
                existing = self._store.list_bookings_for_resource(rid, period)
                availability = check_availability(rid, period.start, period.end, existing)
                if not availability.available:
                    logger.info("Booking of %s for %s..%s rejected: %d conflicts",
                                rid, period.start, period.end, len(availability.conflicts))
                    raise ConflictError(availability.conflicts)
                booking = self._store.create_booking(draft)
        else:
            booking = self._store.create_booking(draft)

        logger.info(
            "Created booking %s of %s for %d days (%s)",
            booking.id, rid, booking.duration_days, booking.total_amount,
        )
        linked, failed = self._link(booking.id, parties)
        if linked:
            booking = replace(booking, linked_parties=booking.linked_parties | frozenset(linked))
        return BookingResult(booking=booking, failed_links=tuple(failed))

    def retry_links(
        self, booking_id: str, party_refs: Iterable[PartyRef | tuple[str, str]]
    ) -> tuple[LinkFailure, ...]:
        """Re-issue only the given party links for an existing booking.

        Raises:
            BookingNotFoundError: If the booking does not exist.
        """
        bid = _booking_id(booking_id)
        parties = _parties(party_refs)
        self._store.get_booking(bid)
        _, failed = self._link(bid, parties)
        return tuple(failed)

    def update_status(self, booking_id: str, new_status: BookingStatus | str) -> Booking:
        """Move a booking to any status; no transition graph is enforced.

        Raises:
            ValidationError: If the status is unknown.
            BookingNotFoundError: If the booking does not exist.
        """
        bid = _booking_id(booking_id)
        status = _status(new_status)
        booking = self._store.update_booking_status(bid, status)
        logger.info("Booking %s status set to %s", bid, status.value)
        return booking

    def list_bookings_for_party(self, party_type: PartyType | str, party_id: str) -> list[Booking]:
        ptype = _party_type(party_type)
        if not str(party_id).strip():
            raise ValidationError("Party ID is required", field="party_id")
        return self._store.list_bookings_for_party(ptype, str(party_id).strip())

    def party_summary(self, party_type: PartyType | str, party_id: str) -> PartySummary:
        return summarize(self.list_bookings_for_party(party_type, party_id))

    def calendar(
        self,
        window_start: DateLike | None = None,
        window_days: int | None = None,
        status_filter: BookingStatus | str | None = None,
        today: date | None = None,
    ) -> CalendarGrid:
        """Project every resource's bookings over a window of days."""
        today = today or date.today()
        start = today if window_start in (None, "") else _day(window_start, "start_date")
        days = self._calendar_window_days if window_days is None else window_days
        if not 1 <= days <= self._max_window_days:
            raise ValidationError(
                f"days must be between 1 and {self._max_window_days}", field="days"
            )
        status = None if status_filter in (None, "") else _status(status_filter)

        resources = self._store.list_resources(self._resource_list_limit)
        bookings = self._store.list_bookings(DateRange.window(start, days))
        return project(resources, start, days, bookings, status_filter=status, today=today)

    def _link(
        self, booking_id: BookingId, parties: list[PartyRef]
    ) -> tuple[list[PartyRef], list[LinkFailure]]:
        linked: list[PartyRef] = []
        failed: list[LinkFailure] = []
        for party in parties:
            try:
                self._store.link_booking_to_party(booking_id, party.party_type, party.party_id)
            except DomainError as exc:
                logger.warning(
                    "Linking booking %s to %s %s failed: %s",
                    booking_id, party.party_type.value, party.party_id, exc,
                )
                failed.append(LinkFailure(party=party, reason=exc.message))
            else:
                linked.append(party)
        return linked, failed
