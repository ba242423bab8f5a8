"""
Composition root for the booking engine

Builds a ``BookingLifecycle`` with its collaborators wired from settings.
Callers own the instance they build; there is no module-level singleton.
"""

from datetime import date
from typing import Callable, Optional

from django.conf import settings
from django.utils import timezone

from apps.audit.handlers import register_audit_handlers
from apps.bookings.application.lifecycle import BookingLifecycle
from apps.bookings.services import IntervalStore
from apps.pricing.services import PricingCalculator, PricingRuleRepository
from apps.restrictions.services import RestrictionEvaluator, RestrictionRepository
from shared.application.message_bus import MessageBus


def build_message_bus() -> MessageBus:
    bus = MessageBus()
    register_audit_handlers(bus)
    return bus


def build_lifecycle(
    using: str = 'default',
    clock: Optional[Callable[[], date]] = None,
    message_bus: Optional[MessageBus] = None,
) -> BookingLifecycle:
    clock = clock or timezone.localdate
    return BookingLifecycle(
        interval_store=IntervalStore(using),
        restriction_evaluator=RestrictionEvaluator(RestrictionRepository(using), clock=clock),
        pricing_calculator=PricingCalculator(PricingRuleRepository(using)),
        message_bus=message_bus if message_bus is not None else build_message_bus(),
        clock=clock,
        using=using,
        max_nights=settings.BOOKING_MAX_NIGHTS,
        default_currency=settings.BOOKING_DEFAULT_CURRENCY,
        lock_timeout=settings.BOOKING_LOCK_TIMEOUT,
    )
