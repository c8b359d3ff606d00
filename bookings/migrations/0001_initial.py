import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("sku", models.CharField(blank=True, max_length=100, null=True)),
                ("description", models.TextField(blank=True, null=True)),
                ("category", models.CharField(blank=True, max_length=100, null=True)),
                ("price", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="ProductSlot",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("slot_name", models.CharField(blank=True, max_length=255)),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("on_hold", "On Hold"),
                            ("sold", "Sold"),
                            ("configuration", "Config"),
                            ("delivered", "Delivered"),
                        ],
                        default="on_hold",
                        max_length=32,
                    ),
                ),
                ("daily_rate", models.DecimalField(decimal_places=2, max_digits=12)),
                ("duration_days", models.PositiveIntegerField()),
                ("total_amount", models.DecimalField(decimal_places=2, max_digits=14)),
                ("booking_notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="slots",
                        to="bookings.product",
                    ),
                ),
            ],
            options={
                "ordering": ["start_date"],
                "indexes": [models.Index(fields=["product", "start_date"], name="slot_product_start_idx")],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(end_date__gte=models.F("start_date")),
                        name="slot_end_not_before_start",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="SlotParty",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "party_type",
                    models.CharField(
                        choices=[("deal", "Deal"), ("contact", "Contact"), ("company", "Company")],
                        max_length=16,
                    ),
                ),
                ("party_id", models.CharField(max_length=64)),
                (
                    "slot",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="parties",
                        to="bookings.productslot",
                    ),
                ),
            ],
            options={
                "indexes": [models.Index(fields=["party_type", "party_id"], name="slot_party_lookup_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("slot", "party_type", "party_id"), name="unique_slot_party")
                ],
            },
        ),
    ]
