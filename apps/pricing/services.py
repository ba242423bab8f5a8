"""Pricing calculation for a property stay."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable

from django.db import DatabaseError  # type: ignore
from django.db.models import Q  # type: ignore

from shared.domain.errors import InfrastructureError, NoBasePriceError
from shared.domain.value_objects import DateRange, weekday_name

from .domain.rules import (
    BaseRate,
    LengthOfStayDiscount,
    PricingRuleVariant,
    SeasonalAdjustment,
    WeekendSurcharge,
    to_money,
)
from .models import PricingRule

logger = logging.getLogger(__name__)

WEEKEND_DAYS = (5, 6)  # Saturday, Sunday


@dataclass(frozen=True)
class BreakdownLine:
    type: str
    description: str
    quantity: int
    unit_price: Decimal
    amount: Decimal


@dataclass(frozen=True)
class NightPrice:
    date: date
    day_of_week: str
    is_weekend: bool
    price: Decimal


@dataclass(frozen=True)
class PriceQuote:
    date_range: DateRange
    base_price: Decimal
    total_price: Decimal
    breakdown: tuple[BreakdownLine, ...]
    night_prices: tuple[NightPrice, ...] = field(default_factory=tuple)

    @property
    def nights(self) -> int:
        return self.date_range.nights

    @property
    def average_nightly_price(self) -> Decimal:
        return to_money(self.total_price / self.nights)


@dataclass(frozen=True)
class PreviewDay:
    date: date
    day_of_week: str
    price: Decimal | None
    base_price: Decimal | None


@dataclass
class RuleSet:
    """Active rules of one property, grouped by category"""

    base: list[BaseRate] = field(default_factory=list)
    weekend: list[WeekendSurcharge] = field(default_factory=list)
    seasonal: list[SeasonalAdjustment] = field(default_factory=list)
    length_of_stay: list[LengthOfStayDiscount] = field(default_factory=list)

    @classmethod
    def from_rules(cls, rules: Iterable[PricingRuleVariant]) -> "RuleSet":
        rule_set = cls()
        for rule in rules:
            if isinstance(rule, BaseRate):
                rule_set.base.append(rule)
            elif isinstance(rule, WeekendSurcharge):
                rule_set.weekend.append(rule)
            elif isinstance(rule, SeasonalAdjustment):
                rule_set.seasonal.append(rule)
            elif isinstance(rule, LengthOfStayDiscount):
                rule_set.length_of_stay.append(rule)
        return rule_set

    # Highest priority wins, ties go to the lowest rule id.

    def base_rate(self) -> BaseRate | None:
        return min(self.base, key=lambda r: (-r.priority, r.rule_id), default=None)

    def weekend_rule(self) -> WeekendSurcharge | None:
        return min(self.weekend, key=lambda r: (-r.priority, r.rule_id), default=None)

    def length_of_stay_rule(self, nights: int) -> LengthOfStayDiscount | None:
        candidates = [r for r in self.length_of_stay if r.qualifies(nights)]
        return min(
            candidates,
            key=lambda r: (-r.priority, -(r.min_stay_nights or 0), r.rule_id),
            default=None,
        )

    def seasonal_rule(self, check_in: date) -> SeasonalAdjustment | None:
        candidates = [r for r in self.seasonal if r.covers(check_in)]
        return min(candidates, key=lambda r: (-r.priority, r.rule_id), default=None)


class PricingRuleRepository:
    """Reads active pricing rules from the given database alias."""

    def __init__(self, using: str = "default"):
        self.using = using

    def rules_for_property(self, property_id: int) -> RuleSet:
        try:
            rows = list(
                PricingRule.objects.using(self.using)
                .filter(Q(property_id=property_id) | Q(property__isnull=True), is_active=True)
                .order_by("-priority", "id")
            )
        except DatabaseError as exc:
            logger.error(f"Failed to load pricing rules for property {property_id}: {exc}", exc_info=True)
            raise InfrastructureError("Pricing rules are unavailable") from exc
        return RuleSet.from_rules(row.to_rule() for row in rows)


class PricingCalculator:
    """
    Computes the itemized price of a stay.

    Layering order: base price per night, weekend surcharge over the
    weekend-night subtotal, length-of-stay discount over the running total,
    seasonal adjustment over the running total. Every adjustment amount is
    rounded to cents when computed, so the breakdown always sums exactly to
    the total.
    """

    def __init__(self, rules: PricingRuleRepository):
        self.rules = rules

    def price(self, property_id: int, date_range: DateRange) -> PriceQuote:
        rule_set = self.rules.rules_for_property(property_id)
        quote = self._quote(rule_set, date_range)
        if quote is None:
            raise NoBasePriceError(
                "No base price found for property",
                detail={"property_id": property_id},
            )

        logger.debug(
            f"Pricing calculated for property {property_id}: "
            f"{quote.nights} nights, base {quote.base_price}, total {quote.total_price}"
        )
        return quote

    def preview(self, property_id: int, start: date, end: date) -> list[PreviewDay]:
        """One-night price for every date from start to end inclusive."""

        rule_set = self.rules.rules_for_property(property_id)
        preview: list[PreviewDay] = []
        current = start
        while current <= end and current < date.max:
            quote = self._quote(rule_set, DateRange(current, current + timedelta(days=1)))
            preview.append(
                PreviewDay(
                    date=current,
                    day_of_week=weekday_name(current),
                    price=quote.total_price if quote else None,
                    base_price=quote.base_price if quote else None,
                )
            )
            current += timedelta(days=1)
        return preview

    def _quote(self, rule_set: RuleSet, date_range: DateRange) -> PriceQuote | None:
        base_rate = rule_set.base_rate()
        if base_rate is None:
            return None

        base_price = to_money(base_rate.price_per_night)
        nights = date_range.nights

        night_prices = tuple(
            NightPrice(
                date=night,
                day_of_week=weekday_name(night),
                is_weekend=night.weekday() in WEEKEND_DAYS,
                price=base_price,
            )
            for night in date_range.iter_nights()
        )

        base_amount = base_price * nights
        breakdown = [
            BreakdownLine(
                type="base_price",
                description=f"Базовая цена ({nights} ночей × {base_price})",
                quantity=nights,
                unit_price=base_price,
                amount=base_amount,
            )
        ]
        total = base_amount

        weekend_nights = sum(1 for night in night_prices if night.is_weekend)
        weekend_rule = rule_set.weekend_rule() if weekend_nights else None
        if weekend_rule is not None:
            surcharge = weekend_rule.adjustment.apply(base_price * weekend_nights)
            if surcharge > 0:
                breakdown.append(
                    BreakdownLine(
                        type="weekend_surcharge",
                        description=f"Наценка за выходные ({weekend_nights} ночей)",
                        quantity=weekend_nights,
                        unit_price=to_money(surcharge / weekend_nights),
                        amount=surcharge,
                    )
                )
                total += surcharge

        length_rule = rule_set.length_of_stay_rule(nights)
        if length_rule is not None:
            discount = length_rule.adjustment.apply(total)
            if discount > 0:
                breakdown.append(
                    BreakdownLine(
                        type="length_discount",
                        description=f"Скидка за длительность ({length_rule.min_stay_nights or nights}+ ночей)",
                        quantity=1,
                        unit_price=-discount,
                        amount=-discount,
                    )
                )
                total -= discount

        seasonal_rule = rule_set.seasonal_rule(date_range.start_date)
        if seasonal_rule is not None:
            seasonal = seasonal_rule.adjustment.apply(total)
            if seasonal != 0:
                breakdown.append(
                    BreakdownLine(
                        type="seasonal_adjustment",
                        description=seasonal_rule.name,
                        quantity=1,
                        unit_price=seasonal,
                        amount=seasonal,
                    )
                )
                total += seasonal

        return PriceQuote(
            date_range=date_range,
            base_price=base_price,
            total_price=to_money(total),
            breakdown=tuple(breakdown),
            night_prices=night_prices,
        )
