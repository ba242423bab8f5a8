"""Tests for audit entries written after booking changes commit."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.test import TestCase

from apps.audit.models import BookingAuditLog
from apps.bookings.application.bootstrap import build_lifecycle
from apps.bookings.application.lifecycle import CreateBookingRequest
from apps.bookings.models import Booking
from apps.pricing.models import PricingRule
from apps.properties.models import Guest, Property

TODAY = date(2030, 1, 1)


class AuditHandlerTests(TestCase):
    def setUp(self) -> None:
        self.user = get_user_model().objects.create_user(username="operator", password="OperatorPass123")
        self.property = Property.objects.create(name="Студия у моря", max_guests=2)
        self.guest = Guest.objects.create(
            first_name="Мария",
            last_name="Кузнецова",
            email="maria@example.com",
            phone="+79990000003",
        )
        PricingRule.objects.create(
            property=self.property,
            rule_name="Базовая цена",
            rule_type=PricingRule.RuleType.BASE,
            price_per_night=Decimal("2500.00"),
        )
        self.lifecycle = build_lifecycle(clock=lambda: TODAY)

    def _create_booking(self) -> Booking:
        with self.captureOnCommitCallbacks(execute=True):
            result = self.lifecycle.create(
                CreateBookingRequest(
                    property_id=self.property.id,
                    guest_id=self.guest.id,
                    check_in=date(2030, 1, 8),
                    check_out=date(2030, 1, 10),
                    created_by_id=self.user.id,
                )
            )
        self.assertTrue(result.ok, result)
        return result.value

    def test_create_is_logged(self) -> None:
        booking = self._create_booking()

        entry = BookingAuditLog.objects.get(booking=booking)
        self.assertEqual(entry.action, BookingAuditLog.Action.CREATE)
        self.assertEqual(entry.entity_type, "bookings")
        self.assertEqual(entry.entity_id, booking.id)
        self.assertEqual(entry.user, self.user)
        self.assertIsNone(entry.old_values)
        self.assertEqual(entry.new_values["check_in"], "2030-01-08")
        self.assertEqual(entry.new_values["total_price"], "5000.00")

    def test_field_update_and_status_change_are_distinguished(self) -> None:
        booking = self._create_booking()

        with self.captureOnCommitCallbacks(execute=True):
            self.lifecycle.update(booking.id, {"special_requests": "Ранний заезд"}, user_id=self.user.id)
        with self.captureOnCommitCallbacks(execute=True):
            self.lifecycle.update(booking.id, {"status": "confirmed"}, user_id=self.user.id)

        update = BookingAuditLog.objects.get(booking=booking, action=BookingAuditLog.Action.UPDATE)
        self.assertEqual(update.changed_fields, ["special_requests"])
        self.assertEqual(update.old_values, {"special_requests": ""})
        status_change = BookingAuditLog.objects.get(booking=booking, action=BookingAuditLog.Action.STATUS_CHANGE)
        self.assertEqual(status_change.old_values, {"status": "pending"})
        self.assertEqual(status_change.new_values, {"status": "confirmed"})

    def test_cancel_is_logged_with_reason(self) -> None:
        booking = self._create_booking()

        with self.captureOnCommitCallbacks(execute=True):
            self.lifecycle.cancel(booking.id, "Гость не приедет", user_id=self.user.id)

        entry = BookingAuditLog.objects.get(booking=booking, action=BookingAuditLog.Action.CANCEL)
        self.assertEqual(entry.old_values, {"status": "pending"})
        self.assertEqual(
            entry.new_values,
            {"status": "cancelled", "cancellation_reason": "Гость не приедет"},
        )
        self.assertEqual(entry.notes, "Гость не приедет")

    def test_rejected_operation_is_not_logged(self) -> None:
        booking = self._create_booking()

        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            result = self.lifecycle.update(booking.id, {"status": "checked_out"})

        self.assertFalse(result.ok)
        self.assertEqual(callbacks, [])
        self.assertEqual(BookingAuditLog.objects.filter(booking=booking).count(), 1)

    def test_failing_audit_write_does_not_affect_booking(self) -> None:
        with mock.patch.object(BookingAuditLog, "log", side_effect=DatabaseError("audit table locked")):
            booking = self._create_booking()

        self.assertTrue(Booking.objects.filter(pk=booking.id).exists())
        self.assertFalse(BookingAuditLog.objects.exists())

    def test_payment_and_stay_transitions_have_their_own_actions(self) -> None:
        booking = self._create_booking()

        for changes in (
            {"payment_status": "paid"},
            {"status": "confirmed"},
            {"status": "checked_in"},
            {"status": "checked_out"},
        ):
            with self.captureOnCommitCallbacks(execute=True):
                result = self.lifecycle.update(booking.id, changes, user_id=self.user.id)
            self.assertTrue(result.ok, result)

        actions = list(
            BookingAuditLog.objects.filter(booking=booking).order_by("id").values_list("action", flat=True)
        )
        self.assertEqual(
            actions,
            [
                BookingAuditLog.Action.CREATE,
                BookingAuditLog.Action.PAYMENT,
                BookingAuditLog.Action.STATUS_CHANGE,
                BookingAuditLog.Action.CHECK_IN,
                BookingAuditLog.Action.CHECK_OUT,
            ],
        )
        payment = BookingAuditLog.objects.get(booking=booking, action=BookingAuditLog.Action.PAYMENT)
        self.assertEqual(payment.old_values, {"payment_status": "unpaid"})
