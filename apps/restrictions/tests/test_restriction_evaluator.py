"""Tests for restriction evaluation."""

from __future__ import annotations

from datetime import date, timedelta

import pytest
from django.core.exceptions import ValidationError

from apps.properties.models import Property
from apps.restrictions.models import BookingRestriction
from apps.restrictions.services import RestrictionEvaluator, RestrictionRepository
from shared.domain.value_objects import DateRange

TODAY = date(2030, 1, 1)  # Tuesday


@pytest.fixture
def apartment():
    return Property.objects.create(name="Студия у парка", max_guests=4)


@pytest.fixture
def evaluator():
    return RestrictionEvaluator(RestrictionRepository(), clock=lambda: TODAY)


def _restriction(prop, restriction_type, **kwargs):
    return BookingRestriction.objects.create(
        property=prop,
        restriction_name=kwargs.pop("restriction_name", restriction_type),
        restriction_type=restriction_type,
        **kwargs,
    )


def _stay(offset: int, nights: int) -> DateRange:
    start = TODAY + timedelta(days=offset)
    return DateRange(start, start + timedelta(days=nights))


@pytest.mark.django_db
def test_min_stay_violation(apartment, evaluator):
    _restriction(apartment, "min_stay", int_value=2)

    violations = evaluator.evaluate(apartment.id, _stay(3, 1), 2)

    assert [v.type for v in violations] == ["min_stay"]
    assert violations[0].message == "Minimum stay is 2 nights, you selected 1 nights"


@pytest.mark.django_db
def test_min_stay_satisfied(apartment, evaluator):
    _restriction(apartment, "min_stay", int_value=2)

    assert evaluator.evaluate(apartment.id, _stay(3, 2), 2) == []


@pytest.mark.django_db
def test_max_stay_violation(apartment, evaluator):
    _restriction(apartment, "max_stay", int_value=7)

    violations = evaluator.evaluate(apartment.id, _stay(3, 8), 2)

    assert [v.type for v in violations] == ["max_stay"]


@pytest.mark.django_db
def test_advance_booking_violation(apartment, evaluator):
    _restriction(apartment, "advance_booking", int_value=30)

    violations = evaluator.evaluate(apartment.id, _stay(45, 2), 2)

    assert [v.type for v in violations] == ["advance_booking"]
    assert violations[0].message == "Cannot book more than 30 days in advance"
    assert evaluator.evaluate(apartment.id, _stay(30, 2), 2) == []


@pytest.mark.django_db
def test_blackout_blocks_only_inside_window(apartment, evaluator):
    _restriction(
        apartment,
        "blackout",
        start_date=date(2030, 3, 1),
        end_date=date(2030, 3, 10),
        notes="Ремонт",
    )

    inside = evaluator.evaluate(apartment.id, DateRange(date(2030, 3, 2), date(2030, 3, 5)), 2)
    starts_before = evaluator.evaluate(apartment.id, DateRange(date(2030, 2, 27), date(2030, 3, 3)), 2)
    ends_after = evaluator.evaluate(apartment.id, DateRange(date(2030, 3, 8), date(2030, 3, 12)), 2)

    assert [v.type for v in inside] == ["blackout"]
    assert inside[0].notes == "Ремонт"
    assert starts_before == []
    assert ends_after == []


@pytest.mark.django_db
def test_max_guests_restriction_and_property_capacity(apartment, evaluator):
    _restriction(apartment, "max_guests", int_value=3)

    three = evaluator.evaluate(apartment.id, _stay(3, 2), 3)
    five = evaluator.evaluate(apartment.id, _stay(3, 2), 5)

    assert three == []
    assert [v.type for v in five] == ["max_guests", "max_guests"]
    assert five[0].message == "Maximum 3 guests allowed"
    assert five[1].message == "Number of guests (5) exceeds property maximum (4)"


@pytest.mark.django_db
def test_property_capacity_checked_without_restrictions(apartment, evaluator):
    violations = evaluator.evaluate(apartment.id, _stay(3, 2), 6)

    assert [v.type for v in violations] == ["max_guests"]


@pytest.mark.django_db
def test_check_in_and_check_out_days(apartment, evaluator):
    _restriction(apartment, "check_in_days", days_of_week=["friday", "saturday"])
    _restriction(apartment, "check_out_days", days_of_week=["sunday", "monday"])

    # 2030-01-04 is a Friday, 2030-01-06 a Sunday
    allowed = evaluator.evaluate(apartment.id, DateRange(date(2030, 1, 4), date(2030, 1, 6)), 2)
    rejected = evaluator.evaluate(apartment.id, DateRange(date(2030, 1, 2), date(2030, 1, 5)), 2)

    assert allowed == []
    assert [v.type for v in rejected] == ["check_in_days", "check_out_days"]
    assert rejected[0].message == "Check-in only allowed on: friday, saturday"


@pytest.mark.django_db
def test_all_violations_are_collected(apartment, evaluator):
    _restriction(apartment, "min_stay", int_value=3)
    _restriction(apartment, "advance_booking", int_value=10)
    _restriction(None, "max_guests", int_value=2, restriction_name="Глобальный лимит гостей")

    violations = evaluator.evaluate(apartment.id, _stay(20, 1), 3)

    assert {v.type for v in violations} == {"min_stay", "advance_booking", "max_guests"}
    assert len(violations) == 3


@pytest.mark.django_db
def test_inactive_and_foreign_restrictions_are_ignored(apartment, evaluator):
    other = Property.objects.create(name="Вилла")
    _restriction(apartment, "min_stay", int_value=5, is_active=False)
    _restriction(other, "min_stay", int_value=5)

    assert evaluator.evaluate(apartment.id, _stay(3, 1), 2) == []


@pytest.mark.django_db
@pytest.mark.parametrize("restriction_type", ["max_guests", "max_stay", "advance_booking", "min_stay"])
def test_restriction_without_value_is_skipped(apartment, evaluator, restriction_type):
    _restriction(apartment, restriction_type, int_value=None)

    assert evaluator.evaluate(apartment.id, _stay(3, 2), 1) == []


@pytest.mark.django_db
def test_clean_requires_value_for_value_bearing_types(apartment):
    restriction = BookingRestriction(
        property=apartment,
        restriction_name="Лимит гостей",
        restriction_type="max_guests",
    )

    with pytest.raises(ValidationError) as excinfo:
        restriction.full_clean()
    assert "int_value" in excinfo.value.message_dict

    restriction.int_value = 3
    restriction.full_clean()


@pytest.mark.django_db
def test_clean_allows_blackout_without_value(apartment):
    BookingRestriction(
        property=apartment,
        restriction_name="Ремонт",
        restriction_type="blackout",
        start_date=TODAY,
        end_date=TODAY + timedelta(days=10),
    ).full_clean()
