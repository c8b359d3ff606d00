"""Pytest configuration and shared fixtures."""

from datetime import date
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from bookings.domain import Booking, BookingId, BookingStatus, Money, Resource, ResourceId
from bookings.services import BookingService
from bookings.stores import InMemoryBookingStore


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def billboard() -> Resource:
    return Resource(
        id=ResourceId("res-1"),
        name="Billboard A",
        daily_rate=Money(Decimal("100.00")),
        category="outdoor",
    )


@pytest.fixture
def screen() -> Resource:
    return Resource(
        id=ResourceId("res-2"),
        name="Lobby Screen",
        daily_rate=Money(Decimal("250.50")),
        category="indoor",
    )


@pytest.fixture
def store(billboard: Resource, screen: Resource) -> InMemoryBookingStore:
    store = InMemoryBookingStore()
    store.add_resource(billboard)
    store.add_resource(screen)
    return store


@pytest.fixture
def service(store: InMemoryBookingStore) -> BookingService:
    return BookingService(store)


@pytest.fixture
def make_booking():
    """Build a persisted-looking booking without going through a store."""

    counter = iter(range(1, 10_000))

    def _make(
        start: date,
        end: date,
        status: BookingStatus = BookingStatus.ON_HOLD,
        resource_id: str = "res-1",
        rate: str = "100.00",
    ) -> Booking:
        return Booking(
            id=BookingId(f"bk-{next(counter)}"),
            resource_id=ResourceId(resource_id),
            start_date=start,
            end_date=end,
            daily_rate=Money(Decimal(rate)),
            status=status,
        )

    return _make
