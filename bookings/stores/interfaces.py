"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Backend failures are
raised as RepositoryError; unknown ids as the matching NotFoundError.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from bookings.domain import (
    Booking,
    BookingId,
    BookingStatus,
    DateRange,
    PartyType,
    Resource,
    ResourceId,
)


class BookingStore(ABC):
    """Interface for resource and booking persistence operations."""

    @abstractmethod
    def get_resource(self, resource_id: ResourceId) -> Resource:
        """Return a resource by ID.

        Raises:
            ResourceNotFoundError: If the resource does not exist.
        """
        ...

    @abstractmethod
    def list_resources(self, limit: int, category: str | None = None) -> list[Resource]:
        """Return at most `limit` resources ordered by name, optionally filtered by category."""
        ...

    @abstractmethod
    def get_booking(self, booking_id: BookingId) -> Booking:
        """Return a booking by ID, including its linked parties.

        Raises:
            BookingNotFoundError: If the booking does not exist.
        """
        ...

    @abstractmethod
    def create_booking(self, booking: Booking) -> Booking:
        """Persist a new booking and return it with its assigned ID."""
        ...

    @abstractmethod
    def update_booking_status(self, booking_id: BookingId, status: BookingStatus) -> Booking:
        """Set a booking's status and return the updated booking.

        Raises:
            BookingNotFoundError: If the booking does not exist.
        """
        ...

    @abstractmethod
    def list_bookings(self, window: DateRange) -> list[Booking]:
        """Return all bookings whose range touches `window`, ordered by start date."""
        ...

    @abstractmethod
    def list_bookings_for_resource(
        self, resource_id: ResourceId, window: DateRange | None = None
    ) -> list[Booking]:
        """Return a resource's bookings, optionally only those touching `window`."""
        ...

    @abstractmethod
    def list_bookings_for_party(self, party_type: PartyType, party_id: str) -> list[Booking]:
        """Return bookings linked to a deal, contact or company."""
        ...

    @abstractmethod
    def link_booking_to_party(
        self, booking_id: BookingId, party_type: PartyType, party_id: str
    ) -> None:
        """Associate a booking with a party. Linking twice is a no-op.

        Raises:
            BookingNotFoundError: If the booking does not exist.
        """
        ...

    @abstractmethod
    def write_lock(self, resource_id: ResourceId) -> AbstractContextManager[None]:
        """Serialize check-then-create sequences for one resource."""
        ...
