"""Concurrent creates for the same dates must produce exactly one booking."""

from __future__ import annotations

import threading
from datetime import date
from decimal import Decimal

from django.db import connection
from django.test import TransactionTestCase

from apps.bookings.application.bootstrap import build_lifecycle
from apps.bookings.application.lifecycle import CreateBookingRequest
from apps.bookings.models import Booking
from apps.pricing.models import PricingRule
from apps.properties.models import Guest, Property
from shared.domain.errors import ErrorKind

TODAY = date(2030, 1, 1)


class ConcurrentCreateTests(TransactionTestCase):
    def setUp(self) -> None:
        self.property = Property.objects.create(name="Дом у озера", max_guests=6)
        self.guests = [
            Guest.objects.create(
                first_name=f"Гость {index}",
                last_name="Петров",
                email=f"guest{index}@example.com",
                phone=f"+7999000000{index}",
            )
            for index in range(2)
        ]
        PricingRule.objects.create(
            property=self.property,
            rule_name="Базовая цена",
            rule_type=PricingRule.RuleType.BASE,
            price_per_night=Decimal("4500.00"),
        )

    def test_only_one_of_two_identical_requests_wins(self) -> None:
        barrier = threading.Barrier(2)
        results = []
        errors = []

        def book(guest: Guest) -> None:
            lifecycle = build_lifecycle(clock=lambda: TODAY)
            request = CreateBookingRequest(
                property_id=self.property.id,
                guest_id=guest.id,
                check_in=date(2030, 2, 10),
                check_out=date(2030, 2, 14),
                guests_count=2,
            )
            try:
                barrier.wait(timeout=10)
                results.append(lifecycle.create(request, timeout=15))
            except Exception as exc:  # surfaced by the assertions below
                errors.append(exc)
            finally:
                connection.close()

        threads = [threading.Thread(target=book, args=(guest,)) for guest in self.guests]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        self.assertEqual(errors, [])
        self.assertEqual(len(results), 2)
        winners = [result for result in results if result.ok]
        losers = [result for result in results if not result.ok]
        self.assertEqual(len(winners), 1)
        self.assertEqual(len(losers), 1)
        self.assertEqual(losers[0].kind, ErrorKind.CONFLICT)
        self.assertEqual(
            Booking.objects.filter(property=self.property, status=Booking.Status.PENDING).count(),
            1,
        )

    def test_non_overlapping_requests_both_succeed(self) -> None:
        barrier = threading.Barrier(2)
        results = []
        ranges = [(date(2030, 3, 1), date(2030, 3, 5)), (date(2030, 3, 5), date(2030, 3, 8))]

        def book(guest: Guest, check_in: date, check_out: date) -> None:
            lifecycle = build_lifecycle(clock=lambda: TODAY)
            try:
                barrier.wait(timeout=10)
                results.append(
                    lifecycle.create(
                        CreateBookingRequest(
                            property_id=self.property.id,
                            guest_id=guest.id,
                            check_in=check_in,
                            check_out=check_out,
                        )
                    )
                )
            finally:
                connection.close()

        threads = [
            threading.Thread(target=book, args=(guest, *stay))
            for guest, stay in zip(self.guests, ranges)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        self.assertEqual(len(results), 2)
        self.assertTrue(all(result.ok for result in results), results)
        self.assertEqual(Booking.objects.filter(property=self.property).count(), 2)
