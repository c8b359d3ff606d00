"""Serializers for parsing requests and rendering domain models."""

from rest_framework import serializers

from bookings.domain.value_objects import BookingStatus, PartyType


class PartyRefSerializer(serializers.Serializer):
    """A deal, contact or company reference."""

    type = serializers.ChoiceField(choices=[p.value for p in PartyType], source="party_type")
    id = serializers.CharField(max_length=64, source="party_id")

    def to_representation(self, instance):
        return {"type": instance.party_type.value, "id": instance.party_id}


class ResourceSerializer(serializers.Serializer):
    """Serializer for Resource domain model."""

    id = serializers.CharField(source="id.value")
    name = serializers.CharField()
    daily_rate = serializers.DecimalField(max_digits=12, decimal_places=2, source="daily_rate.amount")
    category = serializers.CharField(allow_null=True)
    sku = serializers.CharField(allow_null=True)
    description = serializers.CharField(allow_null=True)


class BookingSerializer(serializers.Serializer):
    """Serializer for Booking domain model."""

    id = serializers.CharField(source="id.value")
    resource_id = serializers.CharField(source="resource_id.value")
    name = serializers.CharField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    duration_days = serializers.IntegerField()
    daily_rate = serializers.DecimalField(max_digits=12, decimal_places=2, source="daily_rate.amount")
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2, source="total_amount.amount")
    status = serializers.CharField(source="status.value")
    status_label = serializers.CharField(source="status.label")
    notes = serializers.CharField()
    parties = serializers.SerializerMethodField()

    def get_parties(self, booking) -> list[dict]:
        ordered = sorted(booking.linked_parties, key=lambda p: (p.party_type.value, p.party_id))
        return PartyRefSerializer(ordered, many=True).data


class LinkFailureSerializer(serializers.Serializer):
    party = PartyRefSerializer()
    reason = serializers.CharField()


class CreateBookingSerializer(serializers.Serializer):
    """Input for POST /api/bookings."""

    resource_id = serializers.CharField(max_length=64)
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    parties = PartyRefSerializer(many=True, required=False, default=list)
    enforce_availability = serializers.BooleanField(required=False, allow_null=True, default=None)


class StatusUpdateSerializer(serializers.Serializer):
    """Input for PATCH /api/bookings/{id}/status."""

    status = serializers.ChoiceField(choices=[s.value for s in BookingStatus])


class LinkRetrySerializer(serializers.Serializer):
    """Input for POST /api/bookings/{id}/links."""

    parties = PartyRefSerializer(many=True, allow_empty=False)


class DateRangeQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()


class CalendarQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    days = serializers.IntegerField(required=False, min_value=1)
    status = serializers.ChoiceField(
        choices=[s.value for s in BookingStatus], required=False, allow_blank=True
    )


class ResourceListQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(required=False, min_value=1)
    category = serializers.CharField(required=False)


class CalendarColumnSerializer(serializers.Serializer):
    date = serializers.DateField()
    is_weekend = serializers.BooleanField()
    is_today = serializers.BooleanField()


class CalendarCellSerializer(serializers.Serializer):
    """A grid cell. Full booking details ride on the span start only."""

    date = serializers.DateField()
    booking_id = serializers.SerializerMethodField()
    status = serializers.SerializerMethodField()
    is_span_start = serializers.BooleanField()
    span_width = serializers.IntegerField()
    booking = serializers.SerializerMethodField()

    def get_booking_id(self, cell) -> str | None:
        return cell.booking.id.value if cell.booking else None

    def get_status(self, cell) -> str | None:
        return cell.booking.status.value if cell.booking else None

    def get_booking(self, cell) -> dict | None:
        if not cell.is_span_start:
            return None
        return BookingSerializer(cell.booking).data


class CalendarGridSerializer(serializers.Serializer):
    window_start = serializers.DateField(source="window.start")
    window_end = serializers.DateField(source="window.end")
    columns = CalendarColumnSerializer(many=True)
    rows = serializers.SerializerMethodField()

    def get_rows(self, grid) -> list[dict]:
        return [
            {
                "resource": ResourceSerializer(resource).data,
                "cells": CalendarCellSerializer(grid.row(resource.id), many=True).data,
            }
            for resource in grid.resources
        ]


class PartySummarySerializer(serializers.Serializer):
    total = serializers.IntegerField()
    total_value = serializers.DecimalField(max_digits=14, decimal_places=2, source="total_value.amount")
    by_status = serializers.SerializerMethodField()

    def get_by_status(self, summary) -> dict[str, int]:
        return {status.value: count for status, count in summary.by_status.items()}
