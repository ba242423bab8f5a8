"""Admin registration for pricing rules."""

from __future__ import annotations

from django.contrib import admin

from .models import PricingRule


@admin.register(PricingRule)
class PricingRuleAdmin(admin.ModelAdmin):
    list_display = (
        "rule_name",
        "property",
        "rule_type",
        "priority",
        "price_per_night",
        "adjustment_type",
        "adjustment_value",
        "is_active",
    )
    list_filter = ("rule_type", "adjustment_type", "is_active")
    search_fields = ("rule_name", "property__name")
