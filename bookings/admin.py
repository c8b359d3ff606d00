from django.contrib import admin

from bookings.models import Product, ProductSlot, SlotParty


class SlotPartyInline(admin.TabularInline):
    model = SlotParty
    extra = 1


class ProductSlotInline(admin.TabularInline):
    model = ProductSlot
    extra = 0
    fields = ["slot_name", "start_date", "end_date", "status", "total_amount"]
    readonly_fields = ["slot_name", "start_date", "end_date", "total_amount"]
    can_delete = False

    def has_add_permission(self, request, obj=None) -> bool:
        return False


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ["name", "sku", "category", "price"]
    search_fields = ["name", "sku"]
    inlines = [ProductSlotInline]


@admin.register(ProductSlot)
class ProductSlotAdmin(admin.ModelAdmin):
    list_display = ["slot_name", "product", "start_date", "end_date", "status", "total_amount"]
    list_filter = ["status", "product"]
    inlines = [SlotPartyInline]
    # Slots are created through the booking service; only status is editable here.
    readonly_fields = [
        "product",
        "slot_name",
        "start_date",
        "end_date",
        "daily_rate",
        "duration_days",
        "total_amount",
        "booking_notes",
    ]

    def has_add_permission(self, request) -> bool:
        return False
