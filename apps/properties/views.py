"""Calendar and pricing read endpoints of a property."""

from __future__ import annotations

from django.shortcuts import get_object_or_404  # type: ignore
from rest_framework import permissions  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.views import BookingEngineMixin
from shared.infrastructure.http import error_response, invalid_input_response

from .models import Property
from .serializers import (
    AvailabilitySerializer,
    CalendarEventSerializer,
    PeriodQuerySerializer,
    PreviewDaySerializer,
    PriceQuoteSerializer,
    StayQuerySerializer,
)


class PropertyEngineView(BookingEngineMixin, APIView):
    """Общая часть: объект из URL и разбор параметров запроса."""

    permission_classes = [permissions.AllowAny]
    query_serializer_class = StayQuerySerializer

    def initial(self, request, *args, **kwargs):  # type: ignore
        super().initial(request, *args, **kwargs)
        self.property_object = get_object_or_404(Property, pk=kwargs.get("property_id"))

    def parse_query(self, request):  # type: ignore
        serializer = self.query_serializer_class(data=request.query_params)
        if not serializer.is_valid():
            return None, invalid_input_response(serializer.errors)
        return serializer, None


class PropertyAvailabilityView(PropertyEngineView):
    """Свободен ли объект на указанные даты."""

    def get(self, request, property_id):  # type: ignore
        query, invalid = self.parse_query(request)
        if invalid is not None:
            return invalid
        result = self.get_lifecycle().check_availability(self.property_object.pk, query.date_range)
        if not result.ok:
            return error_response(result)
        return Response(AvailabilitySerializer(result.value).data)


class PropertyCalendarView(PropertyEngineView):
    """Занятые даты объекта за период, в формате событий календаря."""

    query_serializer_class = PeriodQuerySerializer

    def get(self, request, property_id):  # type: ignore
        query, invalid = self.parse_query(request)
        if invalid is not None:
            return invalid
        start = query.validated_data["start"]
        end = query.validated_data["end"]
        result = self.get_lifecycle().availability_calendar(self.property_object.pk, start, end)
        if not result.ok:
            return error_response(result)
        return Response(
            {
                "property_id": self.property_object.pk,
                "start_date": start,
                "end_date": end,
                "events": CalendarEventSerializer(result.value, many=True).data,
            }
        )


class PropertyPriceQuoteView(PropertyEngineView):
    """Расчёт стоимости проживания с детализацией."""

    def get(self, request, property_id):  # type: ignore
        query, invalid = self.parse_query(request)
        if invalid is not None:
            return invalid
        result = self.get_lifecycle().price_quote(self.property_object.pk, query.date_range)
        if not result.ok:
            return error_response(result)
        data = PriceQuoteSerializer(result.value).data
        data["currency"] = self.property_object.currency
        return Response(data)


class PropertyPricingPreviewView(PropertyEngineView):
    """Цена одной ночи на каждый день периода."""

    query_serializer_class = PeriodQuerySerializer

    def get(self, request, property_id):  # type: ignore
        query, invalid = self.parse_query(request)
        if invalid is not None:
            return invalid
        result = self.get_lifecycle().pricing_preview(
            self.property_object.pk,
            query.validated_data["start"],
            query.validated_data["end"],
        )
        if not result.ok:
            return error_response(result)
        return Response(
            {
                "property_id": self.property_object.pk,
                "currency": self.property_object.currency,
                "days": PreviewDaySerializer(result.value, many=True).data,
            }
        )
