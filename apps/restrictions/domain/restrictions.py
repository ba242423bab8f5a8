"""
Booking Restriction Variants

Each restriction category is its own immutable type carrying only the
fields that category uses. Every variant knows how to check a requested
stay and returns a ``Violation`` when the stay breaks it.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple, Union

from shared.domain.base import ValueObject
from shared.domain.value_objects import DateRange, weekday_name

MIN_STAY = 'min_stay'
MAX_STAY = 'max_stay'
BLACKOUT = 'blackout'
MAX_GUESTS = 'max_guests'
ADVANCE_BOOKING = 'advance_booking'
CHECK_IN_DAYS = 'check_in_days'
CHECK_OUT_DAYS = 'check_out_days'


@dataclass(frozen=True)
class Violation(ValueObject):
    type: str
    message: str
    restriction_id: Optional[int] = None
    notes: str = ''

    def to_dict(self) -> dict:
        data = {'type': self.type, 'message': self.message}
        if self.restriction_id is not None:
            data['restriction_id'] = self.restriction_id
        if self.notes:
            data['notes'] = self.notes
        return data


@dataclass(frozen=True)
class StayRequest(ValueObject):
    """What is being asked for, plus the day it is asked on"""
    date_range: DateRange
    guests_count: int
    today: date

    @property
    def nights(self) -> int:
        return self.date_range.nights


@dataclass(frozen=True)
class RestrictionWindow(ValueObject):
    """
    Dates a restriction is in force

    A stay is covered only when it starts on or after ``start_date`` and
    ends on or before ``end_date``. Missing bounds are unbounded.
    """
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    def covers(self, date_range: DateRange) -> bool:
        if self.start_date is not None and date_range.start_date < self.start_date:
            return False
        if self.end_date is not None and date_range.end_date > self.end_date:
            return False
        return True


@dataclass(frozen=True)
class _Restriction(ValueObject):
    restriction_id: int
    name: str
    window: RestrictionWindow

    type = ''

    def applies_to(self, stay: StayRequest) -> bool:
        return self.window.covers(stay.date_range)

    def check(self, stay: StayRequest) -> Optional[Violation]:
        raise NotImplementedError

    def _violation(self, message: str, notes: str = '') -> Violation:
        return Violation(self.type, message, self.restriction_id, notes)


@dataclass(frozen=True)
class MinStay(_Restriction):
    min_nights: int = 0
    type = MIN_STAY

    def check(self, stay):
        if stay.nights < self.min_nights:
            return self._violation(
                f'Minimum stay is {self.min_nights} nights, you selected {stay.nights} nights'
            )
        return None


@dataclass(frozen=True)
class MaxStay(_Restriction):
    max_nights: int = 0
    type = MAX_STAY

    def check(self, stay):
        if stay.nights > self.max_nights:
            return self._violation(
                f'Maximum stay is {self.max_nights} nights, you selected {stay.nights} nights'
            )
        return None


@dataclass(frozen=True)
class Blackout(_Restriction):
    notes: str = ''
    type = BLACKOUT

    def check(self, stay):
        return self._violation('Selected dates are blocked for booking', self.notes)


@dataclass(frozen=True)
class MaxGuests(_Restriction):
    max_guests: int = 0
    type = MAX_GUESTS

    def check(self, stay):
        if stay.guests_count > self.max_guests:
            return self._violation(f'Maximum {self.max_guests} guests allowed')
        return None


@dataclass(frozen=True)
class AdvanceBooking(_Restriction):
    max_days: int = 0
    type = ADVANCE_BOOKING

    def check(self, stay):
        days_in_advance = (stay.date_range.start_date - stay.today).days
        if days_in_advance > self.max_days:
            return self._violation(f'Cannot book more than {self.max_days} days in advance')
        return None


@dataclass(frozen=True)
class CheckInDays(_Restriction):
    days: Tuple[str, ...] = ()
    type = CHECK_IN_DAYS

    def check(self, stay):
        if weekday_name(stay.date_range.start_date) not in self.days:
            return self._violation(f"Check-in only allowed on: {', '.join(self.days)}")
        return None


@dataclass(frozen=True)
class CheckOutDays(_Restriction):
    days: Tuple[str, ...] = ()
    type = CHECK_OUT_DAYS

    def check(self, stay):
        if weekday_name(stay.date_range.end_date) not in self.days:
            return self._violation(f"Check-out only allowed on: {', '.join(self.days)}")
        return None


RestrictionVariant = Union[
    MinStay, MaxStay, Blackout, MaxGuests, AdvanceBooking, CheckInDays, CheckOutDays
]
