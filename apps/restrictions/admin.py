"""Admin registration for booking restrictions."""

from __future__ import annotations

from django.contrib import admin

from .models import BookingRestriction


@admin.register(BookingRestriction)
class BookingRestrictionAdmin(admin.ModelAdmin):
    list_display = (
        "restriction_name",
        "property",
        "restriction_type",
        "int_value",
        "start_date",
        "end_date",
        "is_active",
    )
    list_filter = ("restriction_type", "is_active")
    search_fields = ("restriction_name", "property__name", "notes")
