"""API views for the booking domain.

The views are a thin mapping layer: they parse input with serializers, call
``BookingLifecycle`` and turn its ``Ok``/``Err`` results into responses.
"""

from __future__ import annotations

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.infrastructure.http import error_response, invalid_input_response

from .application.bootstrap import build_lifecycle
from .filters import BookingFilterSet
from .models import Booking
from .serializers import (
    BookingCancelSerializer,
    BookingCreateSerializer,
    BookingListSerializer,
    BookingSerializer,
    BookingUpdateSerializer,
)


class BookingEngineMixin:
    """Даёт представлению экземпляр ``BookingLifecycle`` на время запроса."""

    def get_lifecycle(self):  # type: ignore
        lifecycle = getattr(self, "_lifecycle", None)
        if lifecycle is None:
            lifecycle = self._lifecycle = build_lifecycle()
        return lifecycle

    @staticmethod
    def user_id(request):  # type: ignore
        user = request.user
        return user.pk if user.is_authenticated else None


class BookingViewSet(
    BookingEngineMixin,
    mixins.ListModelMixin,
    viewsets.GenericViewSet,
):
    """Viewset для создания и управления бронированиями."""

    queryset = Booking.objects.select_related("property", "guest").all()
    permission_classes = [permissions.IsAuthenticated]
    filterset_class = BookingFilterSet
    lookup_value_regex = r"\d+"
    http_method_names = ["get", "post", "patch", "head", "options"]

    def get_serializer_class(self):  # type: ignore
        if self.action == "list":
            return BookingListSerializer
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "partial_update":
            return BookingUpdateSerializer
        if self.action == "cancel":
            return BookingCancelSerializer
        return BookingSerializer

    def _booking_response(self, result, success_status=status.HTTP_200_OK):  # type: ignore
        if not result.ok:
            return error_response(result)
        serializer = BookingSerializer(result.value, context=self.get_serializer_context())
        return Response(serializer.data, status=success_status)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)
        result = self.get_lifecycle().create(serializer.to_request(request.user))
        return self._booking_response(result, success_status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):  # type: ignore
        return self._booking_response(self.get_lifecycle().get(int(pk)))

    def partial_update(self, request, pk=None):  # type: ignore
        serializer = self.get_serializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)
        result = self.get_lifecycle().update(
            int(pk),
            dict(serializer.validated_data),
            user_id=self.user_id(request),
        )
        return self._booking_response(result)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)
        result = self.get_lifecycle().cancel(
            int(pk),
            reason=serializer.validated_data["reason"],
            user_id=self.user_id(request),
        )
        return self._booking_response(result)
