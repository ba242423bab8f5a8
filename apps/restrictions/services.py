"""Evaluation of booking restrictions against a requested stay."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable

from django.db import DatabaseError  # type: ignore
from django.db.models import Q  # type: ignore
from django.utils import timezone  # type: ignore

from apps.properties.models import Property
from shared.domain.errors import InfrastructureError
from shared.domain.value_objects import DateRange

from .domain.restrictions import MAX_GUESTS, RestrictionVariant, StayRequest, Violation
from .models import BookingRestriction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropertyCapacity:
    property_id: int
    max_guests: int


class RestrictionRepository:
    """Reads active restrictions and property capacity from the given alias."""

    def __init__(self, using: str = "default"):
        self.using = using

    def restrictions_for_property(self, property_id: int) -> list[RestrictionVariant]:
        try:
            rows = list(
                BookingRestriction.objects.using(self.using)
                .filter(Q(property_id=property_id) | Q(property__isnull=True), is_active=True)
                .order_by("id")
            )
        except DatabaseError as exc:
            logger.error(f"Failed to load restrictions for property {property_id}: {exc}", exc_info=True)
            raise InfrastructureError("Booking restrictions are unavailable") from exc
        restrictions = []
        for row in rows:
            if row.missing_value:
                logger.warning(f"Skipping restriction {row.pk} ({row.restriction_type}): no value set")
                continue
            restrictions.append(row.to_restriction())
        return restrictions

    def capacity(self, property_id: int) -> PropertyCapacity | None:
        try:
            max_guests = (
                Property.objects.using(self.using)
                .filter(pk=property_id)
                .values_list("max_guests", flat=True)
                .first()
            )
        except DatabaseError as exc:
            logger.error(f"Failed to load capacity of property {property_id}: {exc}", exc_info=True)
            raise InfrastructureError("Property capacity is unavailable") from exc
        if max_guests is None:
            return None
        return PropertyCapacity(property_id=property_id, max_guests=max_guests)


class RestrictionEvaluator:
    """
    Applies every active restriction of a property to a requested stay.

    Property-specific and global restrictions both apply. A restriction is
    skipped when its date window does not cover the stay. The property's own
    guest capacity is always checked. All violations are collected and
    returned together; business rule failures are never raised. Only an
    unavailable rule store raises ``InfrastructureError``.
    """

    def __init__(
        self,
        restrictions: RestrictionRepository,
        clock: Callable[[], date] = timezone.localdate,
    ):
        self.restrictions = restrictions
        self.clock = clock

    def evaluate(self, property_id: int, date_range: DateRange, guests_count: int) -> list[Violation]:
        stay = StayRequest(date_range=date_range, guests_count=guests_count, today=self.clock())
        violations: list[Violation] = []

        for restriction in self.restrictions.restrictions_for_property(property_id):
            if not restriction.applies_to(stay):
                continue
            violation = restriction.check(stay)
            if violation is not None:
                violations.append(violation)

        capacity = self.restrictions.capacity(property_id)
        if capacity is not None and guests_count > capacity.max_guests:
            violations.append(
                Violation(
                    MAX_GUESTS,
                    f"Number of guests ({guests_count}) exceeds property maximum ({capacity.max_guests})",
                )
            )

        if violations:
            logger.info(
                f"Restrictions violated for property {property_id} ({date_range}): "
                f"{', '.join(v.type for v in violations)}"
            )
        return violations
