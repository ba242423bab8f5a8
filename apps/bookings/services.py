"""Read access to the reservations occupying a property's calendar."""

from __future__ import annotations

import logging
from datetime import date

from django.db import DatabaseError, transaction  # type: ignore
from django.db.models import Q  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from shared.domain.errors import InfrastructureError
from shared.domain.value_objects import DateRange

from .domain.entities import ACTIVE_STATUSES
from .models import Booking

logger = logging.getLogger(__name__)


def _lock_queryset_if_possible(queryset, using: str):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection(using).in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def overlapping(start: date, end: date) -> Q:
    """Half-open overlap: [check_in, check_out) intersects [start, end)."""

    return Q(check_in__lt=end) & Q(check_out__gt=start)


class IntervalStore:
    """
    Answers overlap queries over the active bookings of a property.

    Reads go through the same connection as the lifecycle's unit of work, so
    a booking inserted inside a committed unit is visible to every check that
    starts afterwards.
    """

    def __init__(self, using: str = "default"):
        self.using = using

    def conflicts(
        self,
        property_id: int,
        date_range: DateRange,
        *,
        exclude_booking_id: int | None = None,
    ) -> list[Booking]:
        queryset = Booking.objects.using(self.using).filter(
            overlapping(date_range.start_date, date_range.end_date),
            property_id=property_id,
            status__in=ACTIVE_STATUSES,
        )
        if exclude_booking_id is not None:
            queryset = queryset.exclude(pk=exclude_booking_id)

        queryset = _lock_queryset_if_possible(queryset, self.using)

        try:
            return list(queryset.order_by("check_in", "id"))
        except DatabaseError as exc:
            logger.error(
                f"Failed to check conflicts for property {property_id} ({date_range}): {exc}",
                exc_info=True,
            )
            raise InfrastructureError("Booking calendar is unavailable") from exc

    def bookings_between(self, property_id: int, start: date, end: date) -> list[Booking]:
        """Active bookings touching the inclusive day span [start, end]."""

        try:
            return list(
                Booking.objects.using(self.using)
                .select_related("guest")
                .filter(
                    Q(check_in__lte=end) & Q(check_out__gte=start),
                    property_id=property_id,
                    status__in=ACTIVE_STATUSES,
                )
                .order_by("check_in", "id")
            )
        except DatabaseError as exc:
            logger.error(f"Failed to load calendar for property {property_id}: {exc}", exc_info=True)
            raise InfrastructureError("Booking calendar is unavailable") from exc
