"""Pricing rule storage."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .domain.rules import (
    Adjustment,
    BaseRate,
    LengthOfStayDiscount,
    PricingRuleVariant,
    SeasonalAdjustment,
    WeekendSurcharge,
)


class PricingRule(models.Model):
    """Правило ценообразования объекта (или глобальное, если объект не указан)."""

    class RuleType(models.TextChoices):
        BASE = "base", _("Базовая цена")
        WEEKEND = "weekend", _("Выходные")
        SEASONAL = "seasonal", _("Сезонная корректировка")
        LENGTH_OF_STAY = "length_of_stay", _("Скидка за длительность")

    class AdjustmentType(models.TextChoices):
        FIXED = "fixed", _("Фиксированная сумма")
        PERCENTAGE = "percentage", _("Процент")
        MULTIPLIER = "multiplier", _("Множитель")

    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="pricing_rules",
        help_text=_("Пусто — правило действует для всех объектов."),
    )
    rule_name = models.CharField(max_length=255)
    rule_type = models.CharField(max_length=20, choices=RuleType.choices)
    priority = models.IntegerField(
        default=0,
        help_text=_("Из нескольких подходящих правил применяется правило с наибольшим приоритетом."),
    )
    price_per_night = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    adjustment_type = models.CharField(
        max_length=20,
        choices=AdjustmentType.choices,
        default=AdjustmentType.FIXED,
    )
    adjustment_value = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    min_stay_nights = models.PositiveSmallIntegerField(null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Правило ценообразования")
        verbose_name_plural = _("Правила ценообразования")
        ordering = ["-priority", "id"]
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(rule_type="base") | models.Q(price_per_night__isnull=False),
                name="pricing_rule_base_has_price",
            ),
            models.CheckConstraint(
                condition=(
                    models.Q(start_date__isnull=True)
                    | models.Q(end_date__isnull=True)
                    | models.Q(end_date__gte=models.F("start_date"))
                ),
                name="pricing_rule_valid_date_range",
            ),
        ]
        indexes = [
            models.Index(fields=["property", "is_active"], name="pricing_pri_propert_9a71c3_idx"),
            models.Index(fields=["rule_type", "priority"], name="pricing_pri_rule_ty_4f02be_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.rule_name} ({self.rule_type})"

    def to_rule(self) -> PricingRuleVariant:
        """Build the typed rule variant for this row."""

        if self.rule_type == self.RuleType.BASE:
            return BaseRate(
                rule_id=self.pk,
                name=self.rule_name,
                priority=self.priority,
                price_per_night=self.price_per_night,
            )

        adjustment = Adjustment(self.adjustment_type, self.adjustment_value or 0)
        if self.rule_type == self.RuleType.WEEKEND:
            return WeekendSurcharge(
                rule_id=self.pk,
                name=self.rule_name,
                priority=self.priority,
                adjustment=adjustment,
            )
        if self.rule_type == self.RuleType.SEASONAL:
            return SeasonalAdjustment(
                rule_id=self.pk,
                name=self.rule_name,
                priority=self.priority,
                adjustment=adjustment,
                start_date=self.start_date,
                end_date=self.end_date,
            )
        if self.rule_type == self.RuleType.LENGTH_OF_STAY:
            return LengthOfStayDiscount(
                rule_id=self.pk,
                name=self.rule_name,
                priority=self.priority,
                adjustment=adjustment,
                min_stay_nights=self.min_stay_nights,
            )
        raise ValueError(f"Unknown pricing rule type: {self.rule_type}")
