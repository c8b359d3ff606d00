from bookings.domain.models import Booking, BookingResult, LinkFailure, Resource
from bookings.domain.value_objects import (
    BLOCKING_STATUSES,
    BookingId,
    BookingStatus,
    DateRange,
    Money,
    PartyRef,
    PartyType,
    ResourceId,
)

__all__ = [
    "Booking",
    "BookingResult",
    "LinkFailure",
    "Resource",
    "BookingId",
    "ResourceId",
    "BookingStatus",
    "BLOCKING_STATUSES",
    "DateRange",
    "Money",
    "PartyRef",
    "PartyType",
]
