"""Integration tests for DjangoBookingStore.

Run with: pytest tests/test_django_store.py -v
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from decimal import Decimal
from unittest import mock

import pytest
from django.db import DatabaseError, connection

from bookings import models as orm
from bookings.domain import (
    Booking,
    BookingId,
    BookingStatus,
    DateRange,
    Money,
    PartyRef,
    PartyType,
    ResourceId,
)
from bookings.domain.errors import (
    BookingNotFoundError,
    ConflictError,
    RepositoryError,
    ResourceNotFoundError,
)
from bookings.services import BookingService
from bookings.stores.django_store import DjangoBookingStore


@pytest.fixture
def django_store() -> DjangoBookingStore:
    return DjangoBookingStore()


@pytest.fixture
def product(db) -> orm.Product:
    return orm.Product.objects.create(name="Billboard A", price=Decimal("100.00"), sku="BB-A")


def _draft(product: orm.Product, start: date, end: date) -> Booking:
    return Booking(
        id=None,
        resource_id=ResourceId(str(product.id)),
        start_date=start,
        end_date=end,
        daily_rate=Money(product.price),
        name="slot",
    )


@pytest.mark.django_db
class TestResources:
    def test_get_resource_maps_row(self, django_store, product):
        resource = django_store.get_resource(ResourceId(str(product.id)))
        assert resource.name == "Billboard A"
        assert resource.daily_rate == Money(Decimal("100.00"))
        assert resource.sku == "BB-A"

    def test_get_resource_not_found(self, django_store):
        with pytest.raises(ResourceNotFoundError):
            django_store.get_resource(ResourceId("not-a-uuid"))

    def test_list_resources_filters_and_limits(self, django_store, product):
        orm.Product.objects.create(name="Screen", price=Decimal("5"), category="indoor")
        orm.Product.objects.create(name="Atrium", price=Decimal("5"), category="indoor")
        assert [r.name for r in django_store.list_resources(10, "indoor")] == ["Atrium", "Screen"]
        assert len(django_store.list_resources(2)) == 2


@pytest.mark.django_db
class TestBookings:
    def test_create_persists_derived_columns(self, django_store, product):
        created = django_store.create_booking(_draft(product, date(2024, 1, 1), date(2024, 1, 3)))

        row = orm.ProductSlot.objects.get(pk=created.id.value)
        assert row.duration_days == 3
        assert row.total_amount == Decimal("300.00")
        assert row.status == "on_hold"
        assert created.id is not None

    def test_update_status(self, django_store, product):
        created = django_store.create_booking(_draft(product, date(2024, 1, 1), date(2024, 1, 1)))
        updated = django_store.update_booking_status(created.id, BookingStatus.DELIVERED)
        assert updated.status is BookingStatus.DELIVERED

    def test_update_status_not_found(self, django_store):
        with pytest.raises(BookingNotFoundError):
            django_store.update_booking_status(
                BookingId("00000000-0000-0000-0000-000000000000"), BookingStatus.SOLD
            )

    def test_window_queries(self, django_store, product):
        early = django_store.create_booking(_draft(product, date(2024, 1, 1), date(2024, 1, 5)))
        django_store.create_booking(_draft(product, date(2024, 2, 1), date(2024, 2, 2)))
        window = DateRange(date(2024, 1, 5), date(2024, 1, 20))

        assert [b.id for b in django_store.list_bookings(window)] == [early.id]
        assert len(django_store.list_bookings_for_resource(ResourceId(str(product.id)))) == 2
        assert [
            b.id for b in django_store.list_bookings_for_resource(ResourceId(str(product.id)), window)
        ] == [early.id]

    def test_links_are_idempotent_and_queryable(self, django_store, product):
        created = django_store.create_booking(_draft(product, date(2024, 1, 1), date(2024, 1, 2)))
        django_store.link_booking_to_party(created.id, PartyType.DEAL, "d-1")
        django_store.link_booking_to_party(created.id, PartyType.DEAL, "d-1")
        django_store.link_booking_to_party(created.id, PartyType.CONTACT, "c-1")

        assert orm.SlotParty.objects.count() == 2
        found = django_store.list_bookings_for_party(PartyType.DEAL, "d-1")
        assert [b.id for b in found] == [created.id]
        assert found[0].linked_parties == {
            PartyRef(PartyType.DEAL, "d-1"),
            PartyRef(PartyType.CONTACT, "c-1"),
        }

    def test_link_unknown_booking(self, django_store):
        with pytest.raises(BookingNotFoundError):
            django_store.link_booking_to_party(BookingId("missing"), PartyType.DEAL, "d-1")

    def test_database_errors_wrapped(self, django_store, product):
        with mock.patch.object(orm.ProductSlot.objects, "create", side_effect=DatabaseError("down")):
            with pytest.raises(RepositoryError) as excinfo:
                django_store.create_booking(_draft(product, date(2024, 1, 1), date(2024, 1, 2)))
        assert isinstance(excinfo.value.__cause__, DatabaseError)

    def test_write_lock_runs_body(self, django_store, product):
        with django_store.write_lock(ResourceId(str(product.id))):
            django_store.create_booking(_draft(product, date(2024, 1, 1), date(2024, 1, 2)))
        assert orm.ProductSlot.objects.count() == 1


@pytest.mark.django_db(transaction=True)
class TestConcurrentWriters:
    """Enforced creates racing on separate connections."""

    def test_one_enforced_create_wins(self):
        product = orm.Product.objects.create(name="Billboard A", price=Decimal("100.00"))
        barrier = threading.Barrier(6, timeout=10)

        def attempt(_):
            service = BookingService(DjangoBookingStore(), enforce_availability=True)
            barrier.wait()
            try:
                service.create_booking(str(product.id), [], date(2024, 5, 1), date(2024, 5, 3))
            except ConflictError:
                return False
            finally:
                connection.close()
            return True

        with ThreadPoolExecutor(max_workers=6) as pool:
            outcomes = list(pool.map(attempt, range(6)))

        assert outcomes.count(True) == 1
        assert outcomes.count(False) == 5
        assert orm.ProductSlot.objects.filter(product=product).count() == 1
