"""FilterSet definitions for booking listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    """Filters of the booking list: owner objects, statuses and date bounds."""

    property = django_filters.NumberFilter(field_name="property_id", lookup_expr="exact")
    guest = django_filters.NumberFilter(field_name="guest_id", lookup_expr="exact")
    status = django_filters.ChoiceFilter(choices=Booking.Status.choices)
    payment_status = django_filters.ChoiceFilter(choices=Booking.PaymentStatus.choices)

    check_in_from = django_filters.DateFilter(field_name="check_in", lookup_expr="gte")
    check_in_to = django_filters.DateFilter(field_name="check_in", lookup_expr="lte")
    check_out_from = django_filters.DateFilter(field_name="check_out", lookup_expr="gte")
    check_out_to = django_filters.DateFilter(field_name="check_out", lookup_expr="lte")

    class Meta:
        model = Booking
        fields = [
            "property",
            "guest",
            "status",
            "payment_status",
        ]
