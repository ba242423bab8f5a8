"""
Booking Lifecycle

Use cases of the booking engine. Every operation returns a ``Result``:
``Ok`` with the value or ``Err`` with a typed error kind.

Operations:
- create: validate, check conflicts, restrictions and price, then insert
- update: apply an allow-listed diff, enforcing the status state machine
- cancel: one-way transition into CANCELLED
- check_availability / availability_calendar: calendar reads
- price_quote / pricing_preview: pricing reads
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional
import logging

from django.db import DatabaseError, IntegrityError
from django.utils import timezone

from apps.bookings.domain.entities import (
    STATUS_TIMESTAMP_FIELDS,
    TERMINAL_STATUSES,
    UPDATABLE_FIELDS,
    BookingStatus,
    validate_transition,
)
from apps.bookings.domain.events import BookingCancelled, BookingCreated, BookingUpdated
from apps.bookings.models import Booking, BookingPriceBreakdown
from apps.bookings.services import IntervalStore
from apps.pricing.services import PricingCalculator
from apps.properties.models import Guest, Property
from apps.restrictions.services import RestrictionEvaluator
from shared.application.message_bus import MessageBus
from shared.application.uow import DjangoUnitOfWork, UnitOfWorkTimeout
from shared.domain.errors import (
    BookingError,
    ConflictError,
    InfrastructureError,
    NotFoundError,
    PolicyError,
    PricingError,
    RestrictionError,
    StateError,
    ValidationError,
)
from shared.domain.result import Err, Ok, Result
from shared.domain.value_objects import DateRange

logger = logging.getLogger(__name__)

STATUS_COLORS = {
    'pending': '#ffc107',
    'confirmed': '#28a745',
    'checked_in': '#007bff',
    'checked_out': '#6c757d',
    'cancelled': '#dc3545',
}
DEFAULT_STATUS_COLOR = '#6c757d'

# PostgreSQL exclusion constraint over active bookings (bookings migration 0002)
NO_OVERLAP_CONSTRAINT = 'booking_no_overlap_active'


# ===== Requests and read models =====

@dataclass
class CreateBookingRequest:
    """Input of ``BookingLifecycle.create``"""
    property_id: Optional[int]
    guest_id: Optional[int]
    check_in: Optional[date]
    check_out: Optional[date]
    guests_count: int = 1
    adults_count: Optional[int] = None  # defaults to guests_count
    children_count: int = 0
    special_requests: str = ''
    created_by_id: Optional[int] = None


@dataclass(frozen=True)
class Availability:
    property_id: int
    date_range: DateRange
    available: bool
    conflict: Optional[Booking] = None


@dataclass(frozen=True)
class CalendarEvent:
    id: int
    title: str
    start: date
    end: date
    status: str
    color: str


def _jsonable(value: Any) -> Any:
    if isinstance(value, (date, Decimal)):
        return str(value)
    return value


# ===== Lifecycle =====

class BookingLifecycle:
    """
    Orchestrates the booking engine

    Collaborators are injected at construction; nothing here is global.

    Double booking prevention for ``create``:
    1. One unit of work (transaction.atomic) around the conflict check,
       restriction check, pricing and inserts
    2. The property row is locked first (SELECT FOR UPDATE), which serializes
       writers of the same property
    3. On PostgreSQL an EXCLUDE constraint over active bookings rejects any
       overlap that slips through; the IntegrityError becomes ConflictError
    """

    def __init__(
        self,
        interval_store: IntervalStore,
        restriction_evaluator: RestrictionEvaluator,
        pricing_calculator: PricingCalculator,
        message_bus: Optional[MessageBus] = None,
        clock: Callable[[], date] = timezone.localdate,
        using: str = 'default',
        max_nights: int = 365,
        default_currency: str = 'RUB',
        lock_timeout: Optional[float] = None,
    ):
        self.interval_store = interval_store
        self.restriction_evaluator = restriction_evaluator
        self.pricing_calculator = pricing_calculator
        self.message_bus = message_bus
        self.clock = clock
        self.using = using
        self.max_nights = max_nights
        self.default_currency = default_currency
        self.lock_timeout = lock_timeout

    # ----- public operations -----

    def create(self, request: CreateBookingRequest, timeout: Optional[float] = None) -> Result:
        return self._run('create', lambda: self._create(request, timeout), conflict_on_integrity=True)

    def update(
        self,
        booking_id: int,
        changes: Dict[str, Any],
        user_id: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> Result:
        return self._run('update', lambda: self._update(booking_id, changes, user_id, timeout))

    def cancel(
        self,
        booking_id: int,
        reason: str = '',
        user_id: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> Result:
        return self._run('cancel', lambda: self._cancel(booking_id, reason, user_id, timeout))

    def get(self, booking_id: int) -> Result:
        return self._run('get', lambda: self._load(booking_id))

    def check_availability(self, property_id: int, date_range: DateRange) -> Result:
        def check():
            conflicts = self.interval_store.conflicts(property_id, date_range)
            return Availability(
                property_id=property_id,
                date_range=date_range,
                available=not conflicts,
                conflict=conflicts[0] if conflicts else None,
            )

        return self._run('check_availability', check)

    def availability_calendar(self, property_id: int, start: date, end: date) -> Result:
        def calendar():
            self._check_period(start, end)
            return [
                CalendarEvent(
                    id=booking.pk,
                    title='Занято',
                    start=booking.check_in,
                    end=booking.check_out,
                    status=booking.status,
                    color=STATUS_COLORS.get(booking.status, DEFAULT_STATUS_COLOR),
                )
                for booking in self.interval_store.bookings_between(property_id, start, end)
            ]

        return self._run('availability_calendar', calendar)

    def price_quote(self, property_id: int, date_range: DateRange) -> Result:
        def quote():
            if date_range.nights > self.max_nights:
                raise ValidationError(
                    'Invalid stay',
                    detail={'check_out': [f'Booking duration cannot exceed {self.max_nights} days']},
                )
            return self._price(property_id, date_range)

        return self._run('price_quote', quote)

    def pricing_preview(self, property_id: int, start: date, end: date) -> Result:
        def preview():
            self._check_period(start, end)
            if end >= date.max:
                raise ValidationError(
                    'Invalid preview range',
                    detail={'end': ['End date is out of range']},
                )
            return self.pricing_calculator.preview(property_id, start, end)

        return self._run('pricing_preview', preview)

    # ----- use cases -----

    def _create(self, request: CreateBookingRequest, timeout: Optional[float]) -> Booking:
        errors = self._validate_request(request)
        if errors:
            raise ValidationError('Validation failed', detail=errors)

        date_range = DateRange(request.check_in, request.check_out)
        adults_count = request.adults_count if request.adults_count is not None else request.guests_count

        logger.info(
            f"Creating booking for property {request.property_id}, "
            f"guest {request.guest_id}, dates {date_range}"
        )

        with self._unit_of_work(timeout) as uow:
            # Locks the property row until commit
            property_obj = self._lock_property(request.property_id)
            self._check_guest(request.guest_id)

            conflicts = self.interval_store.conflicts(property_obj.pk, date_range)
            if conflicts:
                conflict = conflicts[0]
                raise ConflictError(
                    'Property not available for selected dates',
                    detail={
                        'booking_id': conflict.pk,
                        'check_in': conflict.check_in.isoformat(),
                        'check_out': conflict.check_out.isoformat(),
                    },
                )
            uow.check_deadline()

            violations = self.restriction_evaluator.evaluate(
                property_obj.pk, date_range, request.guests_count
            )
            if violations:
                raise RestrictionError(
                    'Booking violates restrictions',
                    detail=[violation.to_dict() for violation in violations],
                )

            quote = self._price(property_obj.pk, date_range)
            uow.check_deadline()

            booking = Booking.objects.using(self.using).create(
                property=property_obj,
                guest_id=request.guest_id,
                check_in=date_range.start_date,
                check_out=date_range.end_date,
                guests_count=request.guests_count,
                adults_count=adults_count,
                children_count=request.children_count,
                base_price=quote.base_price,
                total_price=quote.total_price,
                currency=property_obj.currency or self.default_currency,
                status=BookingStatus.PENDING.value,
                special_requests=request.special_requests or '',
                created_by_id=request.created_by_id,
            )
            BookingPriceBreakdown.objects.using(self.using).bulk_create(
                [
                    BookingPriceBreakdown(
                        booking=booking,
                        line_item_type=line.type,
                        description=line.description,
                        quantity=line.quantity,
                        unit_price=line.unit_price,
                        amount=line.amount,
                    )
                    for line in quote.breakdown
                ]
            )
            uow.check_deadline()

            uow.collect(BookingCreated(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                property_id=property_obj.pk,
                guest_id=request.guest_id,
                new_values={
                    'property_id': property_obj.pk,
                    'guest_id': request.guest_id,
                    'check_in': date_range.start_date.isoformat(),
                    'check_out': date_range.end_date.isoformat(),
                    'total_price': str(quote.total_price),
                },
                user_id=request.created_by_id,
            ))

        logger.info(f"Booking created successfully: {booking.pk} (total {booking.total_price})")
        return self._load(booking.pk)

    def _update(
        self,
        booking_id: int,
        changes: Dict[str, Any],
        user_id: Optional[int],
        timeout: Optional[float],
    ) -> Booking:
        requested = {name: value for name, value in changes.items() if name in UPDATABLE_FIELDS}
        if 'special_requests' in requested and requested['special_requests'] is None:
            requested['special_requests'] = ''
        ignored = sorted(set(changes) - set(requested))
        if ignored:
            logger.debug(f"Ignoring non-updatable booking fields: {', '.join(ignored)}")

        errors = self._validate_changes(requested)
        if errors:
            raise ValidationError('Validation failed', detail=errors)

        with self._unit_of_work(timeout) as uow:
            booking = self._lock_booking(booking_id)

            diff = {
                name: value
                for name, value in requested.items()
                if getattr(booking, name) != value
            }
            if not diff:
                logger.debug(f"Booking {booking_id} update is a no-op")
                return self._load(booking_id)

            if 'status' in diff:
                validate_transition(booking.status, diff['status'])

            old_values = {name: _jsonable(getattr(booking, name)) for name in diff}
            update_fields = list(diff)
            for name, value in diff.items():
                setattr(booking, name, value)

            timestamp_field = STATUS_TIMESTAMP_FIELDS.get(diff.get('status'))
            if timestamp_field:
                setattr(booking, timestamp_field, timezone.now())
                update_fields.append(timestamp_field)

            booking.save(using=self.using, update_fields=update_fields + ['updated_at'])
            uow.check_deadline()

            uow.collect(BookingUpdated(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                old_values=old_values,
                new_values={name: _jsonable(value) for name, value in diff.items()},
                changed_fields=list(diff),
                user_id=user_id,
            ))

        logger.info(f"Booking {booking_id} updated: {', '.join(diff)}")
        return self._load(booking_id)

    def _cancel(
        self,
        booking_id: int,
        reason: str,
        user_id: Optional[int],
        timeout: Optional[float],
    ) -> Booking:
        with self._unit_of_work(timeout) as uow:
            booking = self._lock_booking(booking_id)
            previous_status = booking.status
            if previous_status in TERMINAL_STATUSES:
                raise StateError(
                    f"Booking cannot be cancelled from status {previous_status}",
                    detail={'booking_id': booking_id, 'status': previous_status},
                )

            now = timezone.now()
            # Conditional update: only a non-terminal booking flips to cancelled
            updated = (
                Booking.objects.using(self.using)
                .filter(pk=booking_id)
                .exclude(status__in=TERMINAL_STATUSES)
                .update(
                    status=BookingStatus.CANCELLED.value,
                    cancellation_reason=reason or '',
                    cancelled_at=now,
                    updated_at=now,
                )
            )
            if not updated:
                raise StateError(
                    'Booking was cancelled or checked out concurrently',
                    detail={'booking_id': booking_id},
                )
            uow.check_deadline()

            uow.collect(BookingCancelled(
                aggregate_id=booking_id,
                booking_id=booking_id,
                previous_status=previous_status,
                reason=reason or '',
                user_id=user_id,
            ))

        logger.info(f"Booking {booking_id} cancelled (was {previous_status})")
        return self._load(booking_id)

    # ----- helpers -----

    def _run(self, operation: str, func: Callable[[], Any], conflict_on_integrity: bool = False) -> Result:
        """Turn the outcome of ``func`` into a Result"""
        try:
            return Ok(func())
        except InfrastructureError as exc:
            # Already logged where it was raised
            return Err(exc.kind, exc.message, exc.detail)
        except BookingError as exc:
            logger.info(f"Booking {operation} rejected ({exc.kind.value}): {exc.message}")
            return Err(exc.kind, exc.message, exc.detail)
        except IntegrityError as exc:
            if conflict_on_integrity and NO_OVERLAP_CONSTRAINT in str(exc):
                logger.warning(f"Booking {operation} lost a concurrent race: {exc}")
                error = ConflictError('Property not available for selected dates')
            else:
                logger.error(f"Integrity error during booking {operation}: {exc}", exc_info=True)
                error = InfrastructureError(f'Failed to {operation} booking')
            return Err(error.kind, error.message, error.detail)
        except UnitOfWorkTimeout as exc:
            logger.error(f"Booking {operation} timed out: {exc}")
            error = InfrastructureError(f'Booking {operation} timed out')
            return Err(error.kind, error.message, error.detail)
        except DatabaseError as exc:
            logger.error(f"Database error during booking {operation}: {exc}", exc_info=True)
            error = InfrastructureError(f'Failed to {operation} booking')
            return Err(error.kind, error.message, error.detail)

    def _check_period(self, start: date, end: date) -> None:
        """Inclusive day span of a calendar or preview read"""
        if end < start:
            raise ValidationError(
                'Invalid period',
                detail={'end': ['End date must not be before start date']},
            )
        if (end - start).days + 1 > self.max_nights:
            raise ValidationError(
                'Invalid period',
                detail={'end': [f'Period cannot exceed {self.max_nights} days']},
            )

    def _unit_of_work(self, timeout: Optional[float]) -> DjangoUnitOfWork:
        return DjangoUnitOfWork(
            self.message_bus,
            timeout=timeout if timeout is not None else self.lock_timeout,
            using=self.using,
        )

    def _validate_request(self, request: CreateBookingRequest) -> Dict[str, List[str]]:
        """Every violated field, not just the first"""
        errors: Dict[str, List[str]] = {}

        def add(name: str, message: str):
            errors.setdefault(name, []).append(message)

        for name in ('property_id', 'guest_id', 'check_in', 'check_out'):
            if not getattr(request, name):
                add(name, f"Field '{name}' is required")

        if request.check_in and request.check_out:
            if request.check_in < self.clock():
                add('check_in', 'Check-in date cannot be in the past')
            if request.check_out <= request.check_in:
                add('check_out', 'Check-out date must be after check-in date')
            elif (request.check_out - request.check_in).days > self.max_nights:
                add('check_out', f'Booking duration cannot exceed {self.max_nights} days')

        if request.guests_count is None or request.guests_count < 1:
            add('guests_count', 'Number of guests must be at least 1')
        if request.adults_count is not None and request.adults_count < 1:
            add('adults_count', 'Number of adults must be at least 1')
        if request.children_count is not None and request.children_count < 0:
            add('children_count', 'Number of children cannot be negative')

        return errors

    def _validate_changes(self, changes: Dict[str, Any]) -> Dict[str, List[str]]:
        errors: Dict[str, List[str]] = {}
        if 'status' in changes and changes['status'] not in Booking.Status.values:
            errors['status'] = [f"Unknown status '{changes['status']}'"]
        if 'payment_status' in changes and changes['payment_status'] not in Booking.PaymentStatus.values:
            errors['payment_status'] = [f"Unknown payment status '{changes['payment_status']}'"]
        for name, minimum in (('guests_count', 1), ('adults_count', 1), ('children_count', 0)):
            if name not in changes:
                continue
            value = changes[name]
            if not isinstance(value, int) or isinstance(value, bool) or value < minimum:
                errors[name] = [f'{name} must be an integer of at least {minimum}']
        return errors

    def _lock_property(self, property_id: int) -> Property:
        try:
            property_obj = Property.objects.using(self.using).select_for_update().get(pk=property_id)
        except Property.DoesNotExist:
            raise NotFoundError('Property not found', detail={'property_id': property_id})
        if not property_obj.is_active:
            raise PolicyError('Property is not active', detail={'property_id': property_id})
        return property_obj

    def _check_guest(self, guest_id: int) -> None:
        blacklisted = (
            Guest.objects.using(self.using)
            .filter(pk=guest_id)
            .values_list('is_blacklisted', flat=True)
            .first()
        )
        if blacklisted is None:
            raise NotFoundError('Guest not found', detail={'guest_id': guest_id})
        if blacklisted:
            raise PolicyError('Guest is blacklisted', detail={'guest_id': guest_id})

    def _lock_booking(self, booking_id: int) -> Booking:
        try:
            return Booking.objects.using(self.using).select_for_update().get(pk=booking_id)
        except Booking.DoesNotExist:
            raise NotFoundError('Booking not found', detail={'booking_id': booking_id})

    def _load(self, booking_id: int) -> Booking:
        """Fully materialized booking including its price breakdown"""
        try:
            return (
                Booking.objects.using(self.using)
                .select_related('property', 'guest')
                .prefetch_related('price_breakdown')
                .get(pk=booking_id)
            )
        except Booking.DoesNotExist:
            raise NotFoundError('Booking not found', detail={'booking_id': booking_id})

    def _price(self, property_id: int, date_range: DateRange):
        try:
            return self.pricing_calculator.price(property_id, date_range)
        except (PricingError, InfrastructureError):
            raise
        except ArithmeticError as exc:
            logger.error(f"Pricing failed for property {property_id}: {exc}", exc_info=True)
            raise PricingError(
                'Failed to calculate pricing',
                detail={'property_id': property_id},
            ) from exc

