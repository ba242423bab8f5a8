"""
Pricing Rule Variants

Every pricing rule category has its own immutable type carrying only the
fields that category uses:

- BaseRate: nightly price
- WeekendSurcharge: adjustment over weekend nights
- SeasonalAdjustment: adjustment when check-in falls inside a window
- LengthOfStayDiscount: adjustment for stays of at least N nights

Every adjustment is interpreted by the single ``adjust`` function.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from shared.domain.base import ValueObject

CENT = Decimal('0.01')

FIXED = 'fixed'
PERCENTAGE = 'percentage'
MULTIPLIER = 'multiplier'


def to_money(amount) -> Decimal:
    """Round an amount half-up to the currency's minor unit"""
    return Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)


def adjust(amount: Decimal, adjustment_type: str, value: Decimal) -> Decimal:
    """
    Interpret an adjustment against an amount

    fixed -> value
    percentage -> amount * value / 100
    multiplier -> amount * (value - 1)
    anything else -> 0
    """
    if adjustment_type == FIXED:
        return value
    if adjustment_type == PERCENTAGE:
        return amount * value / Decimal('100')
    if adjustment_type == MULTIPLIER:
        return amount * (value - Decimal('1'))
    return Decimal('0')


@dataclass(frozen=True)
class Adjustment(ValueObject):
    adjustment_type: str
    value: Decimal

    def __post_init__(self):
        if not isinstance(self.value, Decimal):
            object.__setattr__(self, 'value', Decimal(str(self.value)))

    def apply(self, amount: Decimal) -> Decimal:
        """Adjustment amount rounded to cents"""
        return to_money(adjust(amount, self.adjustment_type, self.value))


@dataclass(frozen=True)
class BaseRate(ValueObject):
    rule_id: int
    name: str
    priority: int
    price_per_night: Decimal


@dataclass(frozen=True)
class WeekendSurcharge(ValueObject):
    rule_id: int
    name: str
    priority: int
    adjustment: Adjustment


@dataclass(frozen=True)
class SeasonalAdjustment(ValueObject):
    rule_id: int
    name: str
    priority: int
    adjustment: Adjustment
    start_date: date | None = None
    end_date: date | None = None

    def covers(self, day: date) -> bool:
        """Window bounds are inclusive; a missing bound is unbounded"""
        if self.start_date is not None and day < self.start_date:
            return False
        if self.end_date is not None and day > self.end_date:
            return False
        return True


@dataclass(frozen=True)
class LengthOfStayDiscount(ValueObject):
    rule_id: int
    name: str
    priority: int
    adjustment: Adjustment
    min_stay_nights: int | None = None

    def qualifies(self, nights: int) -> bool:
        return self.min_stay_nights is None or self.min_stay_nights <= nights


PricingRuleVariant = Union[BaseRate, WeekendSurcharge, SeasonalAdjustment, LengthOfStayDiscount]
