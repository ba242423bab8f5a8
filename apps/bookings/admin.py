"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking, BookingPriceBreakdown


class BookingPriceBreakdownInline(admin.TabularInline):
    model = BookingPriceBreakdown
    extra = 0
    can_delete = False
    readonly_fields = ("line_item_type", "description", "quantity", "unit_price", "amount")


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "property",
        "guest",
        "status",
        "payment_status",
        "check_in",
        "check_out",
        "total_price",
        "created_at",
    )
    list_filter = ("status", "payment_status", "check_in", "check_out")
    search_fields = ("property__name", "guest__last_name", "guest__email")
    inlines = [BookingPriceBreakdownInline]
    readonly_fields = (
        "created_at",
        "updated_at",
        "base_price",
        "total_price",
        "confirmed_at",
        "checked_in_at",
        "checked_out_at",
        "cancelled_at",
    )
