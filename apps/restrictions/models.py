"""Booking restriction storage."""

from __future__ import annotations

import builtins

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import WEEKDAYS

from .domain.restrictions import (
    AdvanceBooking,
    Blackout,
    CheckInDays,
    CheckOutDays,
    MaxGuests,
    MaxStay,
    MinStay,
    RestrictionVariant,
    RestrictionWindow,
)

# Types whose rule is the number stored in int_value
VALUE_TYPES = frozenset({"min_stay", "max_stay", "max_guests", "advance_booking"})


class BookingRestriction(models.Model):
    """Ограничение бронирования объекта (или глобальное, если объект не указан)."""

    class RestrictionType(models.TextChoices):
        MIN_STAY = "min_stay", _("Минимальный срок проживания")
        MAX_STAY = "max_stay", _("Максимальный срок проживания")
        BLACKOUT = "blackout", _("Закрытые даты")
        MAX_GUESTS = "max_guests", _("Максимум гостей")
        ADVANCE_BOOKING = "advance_booking", _("Бронирование заранее")
        CHECK_IN_DAYS = "check_in_days", _("Дни заезда")
        CHECK_OUT_DAYS = "check_out_days", _("Дни выезда")

    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="restrictions",
        help_text=_("Пусто — ограничение действует для всех объектов."),
    )
    restriction_name = models.CharField(max_length=255)
    restriction_type = models.CharField(max_length=20, choices=RestrictionType.choices)
    int_value = models.IntegerField(
        null=True,
        blank=True,
        help_text=_("Ночи, гости или дни — в зависимости от типа ограничения."),
    )
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    days_of_week = models.JSONField(
        default=list,
        blank=True,
        help_text=_("Дни недели на английском в нижнем регистре, например ['friday', 'saturday']."),
    )
    notes = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Ограничение бронирования")
        verbose_name_plural = _("Ограничения бронирования")
        ordering = ["id"]
        indexes = [
            models.Index(fields=["property", "is_active"], name="restriction_propert_1d7e52_idx"),
            models.Index(fields=["restriction_type"], name="restriction_restric_8b3f10_idx"),
            models.Index(fields=["start_date", "end_date"], name="restriction_start_d_c62a9e_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.restriction_name} ({self.restriction_type})"

    @builtins.property
    def missing_value(self) -> bool:
        """A value-bearing restriction saved without ``int_value``."""
        return self.restriction_type in VALUE_TYPES and self.int_value is None

    def clean(self) -> None:
        from django.core.exceptions import ValidationError  # type: ignore

        if self.missing_value:
            raise ValidationError({"int_value": _("Укажите значение для этого типа ограничения.")})
        if self.int_value is not None and self.int_value < 0:
            raise ValidationError({"int_value": _("Значение не может быть отрицательным.")})
        unknown = [day for day in self.days_of_week or [] if day not in WEEKDAYS]
        if unknown:
            raise ValidationError({"days_of_week": _("Неизвестные дни недели: %s") % ", ".join(unknown)})
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError({"end_date": _("Дата окончания раньше даты начала.")})

    def to_restriction(self) -> RestrictionVariant:
        """Build the typed restriction variant for this row."""

        common = {
            "restriction_id": self.pk,
            "name": self.restriction_name,
            "window": RestrictionWindow(self.start_date, self.end_date),
        }
        if self.missing_value:
            raise ValueError(f"Restriction {self.pk} ({self.restriction_type}) has no value")
        value = self.int_value
        days = tuple(day.lower() for day in self.days_of_week or [])

        kind = self.restriction_type
        if kind == self.RestrictionType.MIN_STAY:
            return MinStay(min_nights=value, **common)
        if kind == self.RestrictionType.MAX_STAY:
            return MaxStay(max_nights=value, **common)
        if kind == self.RestrictionType.BLACKOUT:
            return Blackout(notes=self.notes, **common)
        if kind == self.RestrictionType.MAX_GUESTS:
            return MaxGuests(max_guests=value, **common)
        if kind == self.RestrictionType.ADVANCE_BOOKING:
            return AdvanceBooking(max_days=value, **common)
        if kind == self.RestrictionType.CHECK_IN_DAYS:
            return CheckInDays(days=days, **common)
        if kind == self.RestrictionType.CHECK_OUT_DAYS:
            return CheckOutDays(days=days, **common)
        raise ValueError(f"Unknown restriction type: {kind}")
