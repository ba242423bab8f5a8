"""Admin registration for the booking audit log."""

from __future__ import annotations

from django.contrib import admin

from .models import BookingAuditLog


@admin.register(BookingAuditLog)
class BookingAuditLogAdmin(admin.ModelAdmin):
    list_display = ("timestamp", "action", "entity_type", "entity_id", "booking", "user")
    list_filter = ("action", "entity_type")
    search_fields = ("entity_id", "notes")
    readonly_fields = (
        "booking",
        "action",
        "entity_type",
        "entity_id",
        "old_values",
        "new_values",
        "changed_fields",
        "user",
        "notes",
        "timestamp",
    )

    def has_add_permission(self, request):  # type: ignore
        return False

    def has_change_permission(self, request, obj=None):  # type: ignore
        return False
