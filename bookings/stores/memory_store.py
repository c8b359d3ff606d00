"""In-memory implementation of the BookingStore."""

import threading
import uuid
from collections import defaultdict
from contextlib import contextmanager
from dataclasses import replace
from typing import Iterator

from bookings.domain import (
    Booking,
    BookingId,
    BookingStatus,
    DateRange,
    PartyRef,
    PartyType,
    Resource,
    ResourceId,
)
from bookings.domain.errors import BookingNotFoundError, ResourceNotFoundError
from bookings.stores.interfaces import BookingStore


class InMemoryBookingStore(BookingStore):
    """Dict-backed store, safe to share between threads."""

    def __init__(self) -> None:
        self._resources: dict[ResourceId, Resource] = {}
        self._bookings: dict[BookingId, Booking] = {}
        self._lock = threading.RLock()
        self._resource_locks: defaultdict[ResourceId, threading.Lock] = defaultdict(threading.Lock)

    def add_resource(self, resource: Resource) -> Resource:
        with self._lock:
            self._resources[resource.id] = resource
        return resource

    def get_resource(self, resource_id: ResourceId) -> Resource:
        with self._lock:
            try:
                return self._resources[resource_id]
            except KeyError:
                raise ResourceNotFoundError(resource_id.value) from None

    def list_resources(self, limit: int, category: str | None = None) -> list[Resource]:
        with self._lock:
            resources = sorted(self._resources.values(), key=lambda r: r.name)
        if category is not None:
            resources = [r for r in resources if r.category == category]
        return resources[:limit]

    def get_booking(self, booking_id: BookingId) -> Booking:
        with self._lock:
            try:
                return self._bookings[booking_id]
            except KeyError:
                raise BookingNotFoundError(booking_id.value) from None

    def create_booking(self, booking: Booking) -> Booking:
        created = replace(booking, id=BookingId(uuid.uuid4().hex))
        with self._lock:
            self._bookings[created.id] = created
        return created

    def update_booking_status(self, booking_id: BookingId, status: BookingStatus) -> Booking:
        with self._lock:
            updated = replace(self.get_booking(booking_id), status=status)
            self._bookings[booking_id] = updated
        return updated

    def list_bookings(self, window: DateRange) -> list[Booking]:
        with self._lock:
            bookings = [b for b in self._bookings.values() if b.period.overlaps(window)]
        return sorted(bookings, key=lambda b: b.start_date)

    def list_bookings_for_resource(
        self, resource_id: ResourceId, window: DateRange | None = None
    ) -> list[Booking]:
        with self._lock:
            bookings = [b for b in self._bookings.values() if b.resource_id == resource_id]
        if window is not None:
            bookings = [b for b in bookings if b.period.overlaps(window)]
        return sorted(bookings, key=lambda b: b.start_date)

    def list_bookings_for_party(self, party_type: PartyType, party_id: str) -> list[Booking]:
        party = PartyRef(party_type, party_id)
        with self._lock:
            bookings = [b for b in self._bookings.values() if party in b.linked_parties]
        return sorted(bookings, key=lambda b: b.start_date)

    def link_booking_to_party(
        self, booking_id: BookingId, party_type: PartyType, party_id: str
    ) -> None:
        with self._lock:
            booking = self.get_booking(booking_id)
            parties = booking.linked_parties | {PartyRef(party_type, party_id)}
            self._bookings[booking_id] = replace(booking, linked_parties=parties)

    @contextmanager
    def write_lock(self, resource_id: ResourceId) -> Iterator[None]:
        with self._lock:
            lock = self._resource_locks[resource_id]
        with lock:
            yield
