"""Django ORM implementation of the BookingStore."""

import logging
import uuid
from contextlib import contextmanager
from typing import Iterator

from django.db import DatabaseError, transaction

from bookings import models as orm
from bookings.domain import (
    Booking,
    BookingId,
    BookingStatus,
    DateRange,
    Money,
    PartyRef,
    PartyType,
    Resource,
    ResourceId,
)
from bookings.domain.errors import (
    BookingNotFoundError,
    RepositoryError,
    ResourceNotFoundError,
)
from bookings.stores.interfaces import BookingStore

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except DatabaseError as exc:
        logger.exception("Booking store operation %s failed", operation)
        raise RepositoryError(operation) from exc


def _pk(value: str) -> uuid.UUID | None:
    try:
        return uuid.UUID(value)
    except ValueError:
        return None


def _to_resource(row: orm.Product) -> Resource:
    return Resource(
        id=ResourceId(str(row.id)),
        name=row.name,
        daily_rate=Money(row.price),
        category=row.category,
        sku=row.sku,
        description=row.description,
    )


def _to_booking(row: orm.ProductSlot) -> Booking:
    return Booking(
        id=BookingId(str(row.id)),
        resource_id=ResourceId(str(row.product_id)),
        start_date=row.start_date,
        end_date=row.end_date,
        daily_rate=Money(row.daily_rate),
        status=BookingStatus(row.status),
        notes=row.booking_notes,
        name=row.slot_name,
        linked_parties=frozenset(
            PartyRef(PartyType(p.party_type), p.party_id) for p in row.parties.all()
        ),
    )


def _slots():
    return orm.ProductSlot.objects.prefetch_related("parties")


class DjangoBookingStore(BookingStore):
    """Relational store backed by the Django ORM."""

    def get_resource(self, resource_id: ResourceId) -> Resource:
        pk = _pk(resource_id.value)
        with _store_errors("get_resource"):
            row = orm.Product.objects.filter(pk=pk).first() if pk else None
        if row is None:
            raise ResourceNotFoundError(resource_id.value)
        return _to_resource(row)

    def list_resources(self, limit: int, category: str | None = None) -> list[Resource]:
        query = orm.Product.objects.order_by("name")
        if category is not None:
            query = query.filter(category=category)
        with _store_errors("list_resources"):
            return [_to_resource(row) for row in query[:limit]]

    def get_booking(self, booking_id: BookingId) -> Booking:
        pk = _pk(booking_id.value)
        with _store_errors("get_booking"):
            row = _slots().filter(pk=pk).first() if pk else None
        if row is None:
            raise BookingNotFoundError(booking_id.value)
        return _to_booking(row)

    def create_booking(self, booking: Booking) -> Booking:
        with _store_errors("create_booking"):
            row = orm.ProductSlot.objects.create(
                product_id=uuid.UUID(booking.resource_id.value),
                slot_name=booking.name,
                start_date=booking.start_date,
                end_date=booking.end_date,
                status=booking.status.value,
                daily_rate=booking.daily_rate.amount,
                duration_days=booking.duration_days,
                total_amount=booking.total_amount.amount,
                booking_notes=booking.notes,
            )
        return Booking(
            id=BookingId(str(row.id)),
            resource_id=booking.resource_id,
            start_date=booking.start_date,
            end_date=booking.end_date,
            daily_rate=booking.daily_rate,
            status=booking.status,
            notes=booking.notes,
            name=booking.name,
        )

    def update_booking_status(self, booking_id: BookingId, status: BookingStatus) -> Booking:
        pk = _pk(booking_id.value)
        with _store_errors("update_booking_status"):
            updated = orm.ProductSlot.objects.filter(pk=pk).update(status=status.value) if pk else 0
        if not updated:
            raise BookingNotFoundError(booking_id.value)
        return self.get_booking(booking_id)

    def list_bookings(self, window: DateRange) -> list[Booking]:
        query = _slots().filter(start_date__lte=window.end, end_date__gte=window.start)
        with _store_errors("list_bookings"):
            return [_to_booking(row) for row in query.order_by("start_date")]

    def list_bookings_for_resource(
        self, resource_id: ResourceId, window: DateRange | None = None
    ) -> list[Booking]:
        pk = _pk(resource_id.value)
        if pk is None:
            return []
        query = _slots().filter(product_id=pk)
        if window is not None:
            query = query.filter(start_date__lte=window.end, end_date__gte=window.start)
        with _store_errors("list_bookings_for_resource"):
            return [_to_booking(row) for row in query.order_by("start_date")]

    def list_bookings_for_party(self, party_type: PartyType, party_id: str) -> list[Booking]:
        query = (
            _slots()
            .filter(parties__party_type=party_type.value, parties__party_id=party_id)
            .distinct()
            .order_by("start_date")
        )
        with _store_errors("list_bookings_for_party"):
            return [_to_booking(row) for row in query]

    def link_booking_to_party(
        self, booking_id: BookingId, party_type: PartyType, party_id: str
    ) -> None:
        pk = _pk(booking_id.value)
        with _store_errors("link_booking_to_party"):
            if pk is None or not orm.ProductSlot.objects.filter(pk=pk).exists():
                raise BookingNotFoundError(booking_id.value)
            orm.SlotParty.objects.get_or_create(
                slot_id=pk, party_type=party_type.value, party_id=party_id
            )

    @contextmanager
    def write_lock(self, resource_id: ResourceId) -> Iterator[None]:
        # Row lock on the product serializes writers across processes. SQLite
        # ignores FOR UPDATE and relies on the IMMEDIATE transaction mode.
        pk = _pk(resource_id.value)
        with _store_errors("write_lock"), transaction.atomic():
            list(orm.Product.objects.select_for_update().filter(pk=pk).values_list("pk"))
            yield
