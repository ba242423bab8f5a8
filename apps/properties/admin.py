"""Admin registrations for properties domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Guest, Property


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "property_type",
        "max_guests",
        "currency",
        "is_active",
        "created_at",
    )
    list_filter = ("property_type", "is_active")
    search_fields = ("name", "address")


@admin.register(Guest)
class GuestAdmin(admin.ModelAdmin):
    list_display = ("last_name", "first_name", "email", "phone", "is_blacklisted")
    list_filter = ("is_blacklisted",)
    search_fields = ("last_name", "first_name", "email", "phone")
