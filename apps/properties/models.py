"""Property and guest records consumed by the booking engine.

Both models are plain records maintained by the CRUD side of the platform.
The engine reads only a few of their fields: ``Property.is_active`` and
``Property.max_guests``, ``Guest.is_blacklisted``.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Property(models.Model):
    """Объект посуточной аренды."""

    class PropertyType(models.TextChoices):
        APARTMENT = "apartment", _("Квартира")
        HOUSE = "house", _("Дом")
        ROOM = "room", _("Комната")
        VILLA = "villa", _("Вилла")
        STUDIO = "studio", _("Студия")

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    address = models.CharField(max_length=500, blank=True)
    property_type = models.CharField(
        max_length=20,
        choices=PropertyType.choices,
        default=PropertyType.APARTMENT,
    )
    max_guests = models.PositiveSmallIntegerField(
        default=2,
        validators=[MinValueValidator(1)],
    )
    bedrooms = models.PositiveSmallIntegerField(default=1)
    bathrooms = models.PositiveSmallIntegerField(default=1)
    square_meters = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("1.00"))],
    )
    currency = models.CharField(
        max_length=3,
        default=settings.BOOKING_DEFAULT_CURRENCY,
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Объект недвижимости")
        verbose_name_plural = _("Объекты недвижимости")
        ordering = ["name"]
        indexes = [
            models.Index(fields=["is_active"], name="properties__is_acti_5a0c1e_idx"),
            models.Index(fields=["property_type"], name="properties__propert_0b8f2d_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class Guest(models.Model):
    """Гость, на которого оформляется бронирование."""

    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    middle_name = models.CharField(max_length=100, blank=True)
    email = models.EmailField(max_length=255)
    phone = models.CharField(max_length=50)
    notes = models.TextField(blank=True)
    is_blacklisted = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Гость")
        verbose_name_plural = _("Гости")
        ordering = ["last_name", "first_name"]
        indexes = [
            models.Index(fields=["email"], name="properties__email_3c9a41_idx"),
            models.Index(fields=["phone"], name="properties__phone_7d2e90_idx"),
            models.Index(fields=["is_blacklisted"], name="properties__is_blac_e41f6b_idx"),
        ]

    def __str__(self) -> str:
        return self.full_name

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
