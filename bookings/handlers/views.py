"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from bookings.domain.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
    RepositoryError,
    ValidationError,
)
from bookings.domain.summary import summarize
from bookings.handlers.serializers import (
    BookingSerializer,
    CalendarGridSerializer,
    CalendarQuerySerializer,
    CreateBookingSerializer,
    DateRangeQuerySerializer,
    LinkFailureSerializer,
    LinkRetrySerializer,
    PartySummarySerializer,
    ResourceListQuerySerializer,
    ResourceSerializer,
    StatusUpdateSerializer,
)
from bookings.services.booking_service import BookingService
from bookings.stores.django_store import DjangoBookingStore

logger = logging.getLogger(__name__)

_HTTP_STATUS = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (RepositoryError, status.HTTP_502_BAD_GATEWAY),
)


def get_booking_service() -> BookingService:
    config = settings.BOOKINGS
    return BookingService(
        DjangoBookingStore(),
        enforce_availability=config["ENFORCE_AVAILABILITY"],
        calendar_window_days=config["CALENDAR_WINDOW_DAYS"],
        max_window_days=config["MAX_WINDOW_DAYS"],
        resource_list_limit=config["RESOURCE_LIST_LIMIT"],
    )


def _party_pairs(parties: list[dict]) -> list[tuple[str, str]]:
    return [(p["party_type"], p["party_id"]) for p in parties]


def _conflict_body(error: ConflictError) -> list[dict]:
    return [
        {
            "id": b.id.value,
            "start_date": b.start_date.isoformat(),
            "end_date": b.end_date.isoformat(),
            "status": b.status.value,
        }
        for b in error.conflicts
    ]


class BookingAPIView(APIView):
    """Base view mapping domain errors to JSON error responses."""

    @property
    def service(self) -> BookingService:
        return get_booking_service()

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, DomainError):
            http_status = next(
                (code for kind, code in _HTTP_STATUS if isinstance(exc, kind)),
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
            body = {"code": exc.code.value, "message": exc.message}
            if isinstance(exc, ConflictError):
                body["conflicts"] = _conflict_body(exc)
            logger.info("%s %s -> %s", self.request.method, self.request.path, exc.code.value)
            return Response(body, status=http_status)
        return super().handle_exception(exc)


class ResourceListView(BookingAPIView):
    """Handler for GET /api/resources"""

    def get(self, request: Request) -> Response:
        query = ResourceListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        resources = self.service.list_resources(**query.validated_data)
        return Response({"resources": ResourceSerializer(resources, many=True).data})


class AvailabilityView(BookingAPIView):
    """Handler for GET /api/resources/{resource_id}/availability"""

    def get(self, request: Request, resource_id: str) -> Response:
        query = DateRangeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        result = self.service.check_availability(
            resource_id, query.validated_data["start_date"], query.validated_data["end_date"]
        )
        return Response(
            {
                "available": result.available,
                "conflicts": BookingSerializer(result.conflicts, many=True).data,
            }
        )


class BookingCreateView(BookingAPIView):
    """Handler for POST /api/bookings"""

    def post(self, request: Request) -> Response:
        payload = CreateBookingSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data
        result = self.service.create_booking(
            data["resource_id"],
            _party_pairs(data["parties"]),
            data["start_date"],
            data["end_date"],
            notes=data["notes"],
            enforce_availability=data["enforce_availability"],
        )
        return Response(
            {
                "booking": BookingSerializer(result.booking).data,
                "failed_links": LinkFailureSerializer(result.failed_links, many=True).data,
                "message": f"Booked {result.booking.duration_days} days",
            },
            status=status.HTTP_201_CREATED,
        )


class BookingDetailView(BookingAPIView):
    """Handler for GET /api/bookings/{booking_id}"""

    def get(self, request: Request, booking_id: str) -> Response:
        return Response(BookingSerializer(self.service.get_booking(booking_id)).data)


class BookingStatusView(BookingAPIView):
    """Handler for PATCH /api/bookings/{booking_id}/status"""

    def patch(self, request: Request, booking_id: str) -> Response:
        payload = StatusUpdateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        booking = self.service.update_status(booking_id, payload.validated_data["status"])
        return Response(BookingSerializer(booking).data)


class BookingLinksView(BookingAPIView):
    """Handler for POST /api/bookings/{booking_id}/links"""

    def post(self, request: Request, booking_id: str) -> Response:
        payload = LinkRetrySerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        failed = self.service.retry_links(booking_id, _party_pairs(payload.validated_data["parties"]))
        return Response({"failed_links": LinkFailureSerializer(failed, many=True).data})


class PartyBookingsView(BookingAPIView):
    """Handler for GET /api/parties/{party_type}/{party_id}/bookings"""

    def get(self, request: Request, party_type: str, party_id: str) -> Response:
        bookings = self.service.list_bookings_for_party(party_type, party_id)
        summary = summarize(bookings)
        return Response(
            {
                "bookings": BookingSerializer(bookings, many=True).data,
                "summary": PartySummarySerializer(summary).data,
            }
        )


class CalendarView(BookingAPIView):
    """Handler for GET /api/calendar"""

    def get(self, request: Request) -> Response:
        query = CalendarQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        data = query.validated_data
        grid = self.service.calendar(
            window_start=data.get("start_date"),
            window_days=data.get("days"),
            status_filter=data.get("status"),
        )
        return Response(CalendarGridSerializer(grid).data)
