"""Serializers for the property calendar and pricing endpoints."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from rest_framework import serializers  # type: ignore

from shared.domain.value_objects import DateRange


class StayQuerySerializer(serializers.Serializer):
    """Query parameters ``check_in``/``check_out`` of a stay."""

    check_in = serializers.DateField()
    check_out = serializers.DateField()

    def validate(self, attrs):  # type: ignore
        if attrs["check_out"] <= attrs["check_in"]:
            raise serializers.ValidationError({"check_out": "Check-out date must be after check-in date"})
        return attrs

    @property
    def date_range(self) -> DateRange:
        return DateRange(self.validated_data["check_in"], self.validated_data["check_out"])


class PeriodQuerySerializer(serializers.Serializer):
    """Query parameters ``start``/``end`` of an inclusive period."""

    start = serializers.DateField()
    end = serializers.DateField()

    def validate(self, attrs):  # type: ignore
        if attrs["end"] < attrs["start"]:
            raise serializers.ValidationError({"end": "End date must not be before start date"})
        max_days = settings.BOOKING_MAX_NIGHTS
        if (attrs["end"] - attrs["start"]).days + 1 > max_days:
            raise serializers.ValidationError({"end": f"Period cannot exceed {max_days} days"})
        return attrs


class ConflictingBookingSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    status = serializers.CharField()


class AvailabilitySerializer(serializers.Serializer):
    property_id = serializers.IntegerField()
    check_in = serializers.DateField(source="date_range.start_date")
    check_out = serializers.DateField(source="date_range.end_date")
    available = serializers.BooleanField()
    conflict = ConflictingBookingSerializer(allow_null=True)


class CalendarEventSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    title = serializers.CharField()
    start = serializers.DateField()
    end = serializers.DateField()
    status = serializers.CharField()
    backgroundColor = serializers.CharField(source="color")
    borderColor = serializers.CharField(source="color")


class BreakdownLineSerializer(serializers.Serializer):
    type = serializers.CharField()
    description = serializers.CharField()
    quantity = serializers.IntegerField()
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)


class NightPriceSerializer(serializers.Serializer):
    date = serializers.DateField()
    day_of_week = serializers.CharField()
    is_weekend = serializers.BooleanField()
    price = serializers.DecimalField(max_digits=12, decimal_places=2)


class PriceQuoteSerializer(serializers.Serializer):
    check_in = serializers.DateField(source="date_range.start_date")
    check_out = serializers.DateField(source="date_range.end_date")
    nights = serializers.IntegerField()
    base_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    average_nightly_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    breakdown = BreakdownLineSerializer(many=True)
    night_prices = NightPriceSerializer(many=True)


class PreviewDaySerializer(serializers.Serializer):
    date = serializers.DateField()
    day_of_week = serializers.CharField()
    price = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
    base_price = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
