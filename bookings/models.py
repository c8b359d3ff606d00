"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models

from bookings.domain.value_objects import BookingStatus, PartyType


class Product(models.Model):
    """Persistence model for bookable products."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    sku = models.CharField(max_length=100, blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    category = models.CharField(max_length=100, blank=True, null=True)
    price = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class ProductSlot(models.Model):
    """Persistence model for a booking of a product over a date range."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="slots")
    slot_name = models.CharField(max_length=255, blank=True)
    start_date = models.DateField()
    end_date = models.DateField()
    status = models.CharField(
        max_length=32,
        choices=[(s.value, s.label) for s in BookingStatus],
        default=BookingStatus.ON_HOLD.value,
    )
    daily_rate = models.DecimalField(max_digits=12, decimal_places=2)
    # Denormalized for reporting; always written from the domain model.
    duration_days = models.PositiveIntegerField()
    total_amount = models.DecimalField(max_digits=14, decimal_places=2)
    booking_notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["start_date"]
        indexes = [
            models.Index(fields=["product", "start_date"], name="slot_product_start_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gte=models.F("start_date")),
                name="slot_end_not_before_start",
            ),
        ]

    def __str__(self) -> str:
        return self.slot_name or f"{self.product_id} {self.start_date}"


class SlotParty(models.Model):
    """Association between a product slot and a deal, contact or company."""

    slot = models.ForeignKey(ProductSlot, on_delete=models.CASCADE, related_name="parties")
    party_type = models.CharField(
        max_length=16, choices=[(p.value, p.name.title()) for p in PartyType]
    )
    party_id = models.CharField(max_length=64)

    class Meta:
        indexes = [
            models.Index(fields=["party_type", "party_id"], name="slot_party_lookup_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["slot", "party_type", "party_id"], name="unique_slot_party"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.party_type}:{self.party_id}"
