"""Booking records and their price breakdown."""

from __future__ import annotations

import builtins

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import DateRange

from .domain.entities import ACTIVE_STATUSES


class Booking(models.Model):
    """Бронирование объекта недвижимости.

    Создаётся только через ``BookingLifecycle``; отмена — это статус, бронь
    никогда не удаляется.
    """

    class Status(models.TextChoices):
        PENDING = "pending", _("Ожидает подтверждения")
        CONFIRMED = "confirmed", _("Подтверждено")
        CHECKED_IN = "checked_in", _("Гость заселён")
        CHECKED_OUT = "checked_out", _("Гость выехал")
        CANCELLED = "cancelled", _("Отменено")

    class PaymentStatus(models.TextChoices):
        UNPAID = "unpaid", _("Не оплачено")
        PARTIAL = "partial", _("Частично оплачено")
        PAID = "paid", _("Оплачено")
        REFUNDED = "refunded", _("Возврат")

    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    guest = models.ForeignKey(
        "properties.Guest",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    check_in = models.DateField()
    check_out = models.DateField()
    guests_count = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    adults_count = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    children_count = models.PositiveSmallIntegerField(default=0)
    base_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text=_("Цена за ночь на момент бронирования."),
    )
    total_price = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default=settings.BOOKING_DEFAULT_CURRENCY)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.UNPAID,
    )
    special_requests = models.TextField(blank=True)
    cancellation_reason = models.TextField(blank=True)
    confirmed_at = models.DateTimeField(null=True, blank=True)
    checked_in_at = models.DateTimeField(null=True, blank=True)
    checked_out_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_bookings",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Бронирование")
        verbose_name_plural = _("Бронирования")
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(check_out__gt=models.F("check_in")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["property", "check_in", "check_out"], name="bookings_bo_propert_2c4d1a_idx"),
            models.Index(fields=["status"], name="bookings_bo_status_9e7f30_idx"),
            models.Index(fields=["guest"], name="bookings_bo_guest_i_5b8a62_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} for {self.property_id} ({self.check_in} - {self.check_out})"

    @builtins.property
    def date_range(self) -> DateRange:
        return DateRange(self.check_in, self.check_out)

    @builtins.property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    @builtins.property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES


class BookingPriceBreakdown(models.Model):
    """Строка детализации цены бронирования."""

    class LineItemType(models.TextChoices):
        BASE_PRICE = "base_price", _("Базовая цена")
        WEEKEND_SURCHARGE = "weekend_surcharge", _("Наценка за выходные")
        SEASONAL_ADJUSTMENT = "seasonal_adjustment", _("Сезонная корректировка")
        LENGTH_DISCOUNT = "length_discount", _("Скидка за длительность")

    booking = models.ForeignKey(
        Booking,
        on_delete=models.CASCADE,
        related_name="price_breakdown",
    )
    line_item_type = models.CharField(max_length=30, choices=LineItemType.choices)
    description = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Строка детализации цены")
        verbose_name_plural = _("Детализация цены")
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.line_item_type}: {self.amount}"
