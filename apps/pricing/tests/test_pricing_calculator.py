"""Tests for the pricing calculator."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from apps.pricing.domain.rules import Adjustment, adjust, to_money
from apps.pricing.models import PricingRule
from apps.pricing.services import PricingCalculator, PricingRuleRepository
from apps.properties.models import Property
from shared.domain.errors import NoBasePriceError, PricingError
from shared.domain.value_objects import DateRange

# 2030-01-04 is a Friday
FRIDAY = date(2030, 1, 4)
SATURDAY = date(2030, 1, 5)
SUNDAY = date(2030, 1, 6)


@pytest.fixture
def apartment():
    return Property.objects.create(name="Квартира на Абая", max_guests=4)


@pytest.fixture
def calculator():
    return PricingCalculator(PricingRuleRepository())


def _base(prop, price="3000.00", **kwargs):
    return PricingRule.objects.create(
        property=prop,
        rule_name=kwargs.pop("rule_name", "Базовая цена"),
        rule_type=PricingRule.RuleType.BASE,
        price_per_night=Decimal(price),
        **kwargs,
    )


def _rule(prop, rule_type, adjustment_type, value, **kwargs):
    return PricingRule.objects.create(
        property=prop,
        rule_name=kwargs.pop("rule_name", rule_type),
        rule_type=rule_type,
        adjustment_type=adjustment_type,
        adjustment_value=Decimal(value),
        **kwargs,
    )


def _assert_breakdown_sums(quote):
    assert abs(sum(line.amount for line in quote.breakdown) - quote.total_price) <= Decimal("0.01")


def test_adjust_interprets_every_type():
    assert adjust(Decimal("1000"), "fixed", Decimal("150")) == Decimal("150")
    assert adjust(Decimal("1000"), "percentage", Decimal("15")) == Decimal("150")
    assert adjust(Decimal("1000"), "multiplier", Decimal("1.5")) == Decimal("500")
    assert adjust(Decimal("1000"), "bogus", Decimal("15")) == Decimal("0")


def test_adjustment_rounds_half_up_to_cents():
    assert Adjustment("percentage", "12.5").apply(Decimal("0.2")) == Decimal("0.03")
    assert to_money("2.675") == Decimal("2.68")


@pytest.mark.django_db
def test_weekend_surcharge_scenario(apartment, calculator):
    _base(apartment)
    _rule(apartment, PricingRule.RuleType.WEEKEND, "percentage", "20")

    quote = calculator.price(apartment.id, DateRange(FRIDAY, SUNDAY))

    assert [line.type for line in quote.breakdown] == ["base_price", "weekend_surcharge"]
    assert [line.amount for line in quote.breakdown] == [Decimal("6000.00"), Decimal("600.00")]
    assert quote.base_price == Decimal("3000.00")
    assert quote.total_price == Decimal("6600.00")
    assert quote.breakdown[1].quantity == 1
    assert quote.nights == 2
    assert quote.average_nightly_price == Decimal("3300.00")
    assert [night.is_weekend for night in quote.night_prices] == [False, True]
    assert quote.night_prices[1].day_of_week == "saturday"


@pytest.mark.django_db
def test_weekday_stay_has_no_weekend_line(apartment, calculator):
    _base(apartment)
    _rule(apartment, PricingRule.RuleType.WEEKEND, "percentage", "20")

    quote = calculator.price(apartment.id, DateRange(date(2030, 1, 1), FRIDAY))

    assert [line.type for line in quote.breakdown] == ["base_price"]
    assert quote.total_price == Decimal("9000.00")


@pytest.mark.django_db
def test_all_adjustments_layer_in_order(apartment, calculator):
    _base(apartment, "2000.00")
    _rule(apartment, PricingRule.RuleType.WEEKEND, "fixed", "500")
    _rule(
        apartment,
        PricingRule.RuleType.LENGTH_OF_STAY,
        "percentage",
        "10",
        min_stay_nights=7,
    )
    _rule(
        apartment,
        PricingRule.RuleType.SEASONAL,
        "multiplier",
        "1.2",
        rule_name="Новогодний сезон",
        start_date=date(2029, 12, 25),
        end_date=date(2030, 1, 10),
    )

    quote = calculator.price(apartment.id, DateRange(date(2030, 1, 1), date(2030, 1, 8)))

    # 7 nights x 2000 = 14000; weekend +500 -> 14500; -10% -> 13050; x1.2 -> 15660
    assert [line.type for line in quote.breakdown] == [
        "base_price",
        "weekend_surcharge",
        "length_discount",
        "seasonal_adjustment",
    ]
    assert [line.amount for line in quote.breakdown] == [
        Decimal("14000.00"),
        Decimal("500.00"),
        Decimal("-1450.00"),
        Decimal("2610.00"),
    ]
    assert quote.total_price == Decimal("15660.00")
    assert quote.breakdown[3].description == "Новогодний сезон"
    _assert_breakdown_sums(quote)


@pytest.mark.django_db
def test_breakdown_sums_to_total_with_fractional_adjustments(apartment, calculator):
    _base(apartment, "3333.33")
    _rule(apartment, PricingRule.RuleType.WEEKEND, "percentage", "17.5")
    _rule(apartment, PricingRule.RuleType.LENGTH_OF_STAY, "percentage", "7.77", min_stay_nights=2)
    _rule(apartment, PricingRule.RuleType.SEASONAL, "multiplier", "0.93")

    quote = calculator.price(apartment.id, DateRange(FRIDAY, date(2030, 1, 9)))

    _assert_breakdown_sums(quote)
    assert quote.breakdown[-1].amount < 0


@pytest.mark.django_db
def test_length_of_stay_prefers_priority_then_longest_qualifying(apartment, calculator):
    _base(apartment)
    _rule(apartment, PricingRule.RuleType.LENGTH_OF_STAY, "percentage", "5", min_stay_nights=3)
    _rule(apartment, PricingRule.RuleType.LENGTH_OF_STAY, "percentage", "10", min_stay_nights=5)
    _rule(apartment, PricingRule.RuleType.LENGTH_OF_STAY, "percentage", "20", min_stay_nights=14)

    five_nights = calculator.price(apartment.id, DateRange(date(2030, 1, 7), date(2030, 1, 12)))
    assert five_nights.breakdown[-1].amount == Decimal("-1500.00")
    assert five_nights.breakdown[-1].description == "Скидка за длительность (5+ ночей)"

    two_nights = calculator.price(apartment.id, DateRange(date(2030, 1, 7), date(2030, 1, 9)))
    assert [line.type for line in two_nights.breakdown] == ["base_price"]


@pytest.mark.django_db
def test_seasonal_rule_matches_on_check_in_date(apartment, calculator):
    _base(apartment)
    _rule(
        apartment,
        PricingRule.RuleType.SEASONAL,
        "fixed",
        "-1000",
        start_date=date(2030, 2, 1),
        end_date=date(2030, 2, 28),
    )

    outside = calculator.price(apartment.id, DateRange(date(2030, 1, 30), date(2030, 2, 2)))
    inside = calculator.price(apartment.id, DateRange(date(2030, 2, 28), date(2030, 3, 2)))

    assert [line.type for line in outside.breakdown] == ["base_price"]
    assert inside.breakdown[-1].amount == Decimal("-1000.00")
    assert inside.total_price == Decimal("5000.00")


@pytest.mark.django_db
def test_inactive_rules_are_never_selected(apartment, calculator):
    _base(apartment, "3000.00")
    _base(apartment, "9999.00", priority=10, is_active=False)
    _rule(apartment, PricingRule.RuleType.WEEKEND, "percentage", "50", is_active=False)

    quote = calculator.price(apartment.id, DateRange(FRIDAY, SUNDAY))

    assert quote.base_price == Decimal("3000.00")
    assert quote.total_price == Decimal("6000.00")


@pytest.mark.django_db
def test_highest_priority_wins_and_ties_go_to_lowest_id(apartment, calculator):
    first = _base(apartment, "3000.00", priority=5)
    _base(apartment, "3500.00", priority=5)
    _base(apartment, "2000.00", priority=1)

    quote = calculator.price(apartment.id, DateRange(date(2030, 1, 7), date(2030, 1, 8)))

    assert quote.base_price == first.price_per_night


@pytest.mark.django_db
def test_global_rules_apply_to_every_property(apartment, calculator):
    _base(None, "2500.00", rule_name="Глобальная базовая цена")
    _rule(None, PricingRule.RuleType.WEEKEND, "percentage", "10")

    quote = calculator.price(apartment.id, DateRange(FRIDAY, SUNDAY))

    assert quote.total_price == Decimal("5250.00")


@pytest.mark.django_db
def test_rules_of_other_properties_are_ignored(apartment, calculator):
    other = Property.objects.create(name="Дом у озера")
    _base(other)

    with pytest.raises(NoBasePriceError) as exc_info:
        calculator.price(apartment.id, DateRange(FRIDAY, SUNDAY))

    assert isinstance(exc_info.value, PricingError)
    assert exc_info.value.detail == {"property_id": apartment.id}


@pytest.mark.django_db
def test_preview_covers_inclusive_range(apartment, calculator):
    _base(apartment)
    _rule(apartment, PricingRule.RuleType.WEEKEND, "percentage", "20")

    preview = calculator.preview(apartment.id, FRIDAY, SUNDAY)

    assert [day.date for day in preview] == [FRIDAY, SATURDAY, SUNDAY]
    assert [day.price for day in preview] == [
        Decimal("3000.00"),
        Decimal("3600.00"),
        Decimal("3600.00"),
    ]
    assert preview[0].day_of_week == "friday"


@pytest.mark.django_db
def test_preview_without_base_rule_has_empty_prices(apartment, calculator):
    preview = calculator.preview(apartment.id, FRIDAY, SATURDAY)

    assert [day.price for day in preview] == [None, None]
    assert [day.base_price for day in preview] == [None, None]


@pytest.mark.django_db
def test_preview_stops_at_last_representable_night(apartment, calculator):
    _base(apartment)

    preview = calculator.preview(apartment.id, date(9999, 12, 30), date.max)

    assert [day.date for day in preview] == [date(9999, 12, 30)]
    assert preview[0].price == Decimal("3000.00")
