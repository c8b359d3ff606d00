from bookings.handlers.views import (
    AvailabilityView,
    BookingCreateView,
    BookingDetailView,
    BookingLinksView,
    BookingStatusView,
    CalendarView,
    PartyBookingsView,
    ResourceListView,
)

__all__ = [
    "AvailabilityView",
    "BookingCreateView",
    "BookingDetailView",
    "BookingLinksView",
    "BookingStatusView",
    "CalendarView",
    "PartyBookingsView",
    "ResourceListView",
]
