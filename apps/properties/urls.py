"""URL routing for the property calendar and pricing endpoints."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import (
    PropertyAvailabilityView,
    PropertyCalendarView,
    PropertyPriceQuoteView,
    PropertyPricingPreviewView,
)

urlpatterns = [
    # Calendar
    path(
        "<int:property_id>/availability/",
        PropertyAvailabilityView.as_view(),
        name="property-availability",
    ),
    path(
        "<int:property_id>/calendar/",
        PropertyCalendarView.as_view(),
        name="property-calendar",
    ),
    # Pricing
    path(
        "<int:property_id>/pricing/quote/",
        PropertyPriceQuoteView.as_view(),
        name="property-pricing-quote",
    ),
    path(
        "<int:property_id>/pricing/preview/",
        PropertyPricingPreviewView.as_view(),
        name="property-pricing-preview",
    ),
]
