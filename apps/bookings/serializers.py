"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .application.lifecycle import CreateBookingRequest
from .models import Booking, BookingPriceBreakdown


class BookingCreateSerializer(serializers.Serializer):
    """Входные данные для создания брони.

    Проверяет только форму данных; бизнес-правила проверяет ``BookingLifecycle``.
    """

    property = serializers.IntegerField()
    guest = serializers.IntegerField()
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    guests_count = serializers.IntegerField(default=1)
    adults_count = serializers.IntegerField(required=False, allow_null=True)
    children_count = serializers.IntegerField(default=0)
    special_requests = serializers.CharField(required=False, allow_blank=True, default="")

    def to_request(self, user=None) -> CreateBookingRequest:
        data = self.validated_data
        return CreateBookingRequest(
            property_id=data["property"],
            guest_id=data["guest"],
            check_in=data["check_in"],
            check_out=data["check_out"],
            guests_count=data["guests_count"],
            adults_count=data.get("adults_count"),
            children_count=data["children_count"],
            special_requests=data["special_requests"],
            created_by_id=getattr(user, "pk", None) if user is not None and user.is_authenticated else None,
        )


class BookingUpdateSerializer(serializers.Serializer):
    """Поля брони, которые можно изменить."""

    status = serializers.ChoiceField(choices=Booking.Status.choices, required=False)
    payment_status = serializers.ChoiceField(choices=Booking.PaymentStatus.choices, required=False)
    special_requests = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    guests_count = serializers.IntegerField(required=False)
    adults_count = serializers.IntegerField(required=False)
    children_count = serializers.IntegerField(required=False)


class BookingCancelSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="")


class BookingPriceBreakdownSerializer(serializers.ModelSerializer):
    type = serializers.ReadOnlyField(source="line_item_type")

    class Meta:
        model = BookingPriceBreakdown
        fields = ["type", "description", "quantity", "unit_price", "amount"]


class BookingSerializer(serializers.ModelSerializer):
    """Детальный сериализатор бронирования."""

    property_id = serializers.ReadOnlyField(source="property.id")
    property_name = serializers.ReadOnlyField(source="property.name")
    guest_id = serializers.ReadOnlyField(source="guest.id")
    guest_name = serializers.ReadOnlyField(source="guest.full_name")
    nights = serializers.ReadOnlyField()
    price_breakdown = BookingPriceBreakdownSerializer(many=True, read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "property_id",
            "property_name",
            "guest_id",
            "guest_name",
            "check_in",
            "check_out",
            "nights",
            "guests_count",
            "adults_count",
            "children_count",
            "base_price",
            "total_price",
            "currency",
            "status",
            "payment_status",
            "special_requests",
            "cancellation_reason",
            "confirmed_at",
            "checked_in_at",
            "checked_out_at",
            "cancelled_at",
            "price_breakdown",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BookingListSerializer(serializers.ModelSerializer):
    """Краткая форма брони для списков."""

    property_name = serializers.ReadOnlyField(source="property.name")
    guest_name = serializers.ReadOnlyField(source="guest.full_name")

    class Meta:
        model = Booking
        fields = [
            "id",
            "property",
            "property_name",
            "guest",
            "guest_name",
            "check_in",
            "check_out",
            "guests_count",
            "total_price",
            "currency",
            "status",
            "payment_status",
            "created_at",
        ]
        read_only_fields = fields
