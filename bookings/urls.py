from django.urls import path

from bookings.handlers import (
    AvailabilityView,
    BookingCreateView,
    BookingDetailView,
    BookingLinksView,
    BookingStatusView,
    CalendarView,
    PartyBookingsView,
    ResourceListView,
)

urlpatterns = [
    path("resources", ResourceListView.as_view(), name="resource-list"),
    path(
        "resources/<str:resource_id>/availability",
        AvailabilityView.as_view(),
        name="resource-availability",
    ),
    path("bookings", BookingCreateView.as_view(), name="booking-create"),
    path("bookings/<str:booking_id>", BookingDetailView.as_view(), name="booking-detail"),
    path(
        "bookings/<str:booking_id>/status",
        BookingStatusView.as_view(),
        name="booking-status",
    ),
    path(
        "bookings/<str:booking_id>/links",
        BookingLinksView.as_view(),
        name="booking-links",
    ),
    path(
        "parties/<str:party_type>/<str:party_id>/bookings",
        PartyBookingsView.as_view(),
        name="party-bookings",
    ),
    path("calendar", CalendarView.as_view(), name="calendar"),
]
