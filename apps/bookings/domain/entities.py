"""
Booking Domain Rules

- BookingStatus: FSM states for the booking lifecycle
- the legal transition table between them
- the fields an update may touch
"""

from enum import Enum

from shared.domain.errors import StateError


class BookingStatus(Enum):
    """
    Booking Status Finite State Machine

    State transitions:
    - PENDING -> CONFIRMED (owner accepted the booking)
    - PENDING -> CANCELLED
    - CONFIRMED -> CHECKED_IN (guest checked in)
    - CONFIRMED -> CANCELLED
    - CHECKED_IN -> CHECKED_OUT (guest checked out)
    - CHECKED_IN -> CANCELLED

    CHECKED_OUT and CANCELLED are terminal. No transition is reversible.
    """
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CHECKED_IN = 'checked_in'
    CHECKED_OUT = 'checked_out'
    CANCELLED = 'cancelled'


# Statuses that occupy the property's calendar
ACTIVE_STATUSES = frozenset({
    BookingStatus.PENDING.value,
    BookingStatus.CONFIRMED.value,
    BookingStatus.CHECKED_IN.value,
})

TERMINAL_STATUSES = frozenset({
    BookingStatus.CHECKED_OUT.value,
    BookingStatus.CANCELLED.value,
})

_ALLOWED_TRANSITIONS = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.CANCELLED},
    BookingStatus.CONFIRMED: {BookingStatus.CHECKED_IN, BookingStatus.CANCELLED},
    BookingStatus.CHECKED_IN: {BookingStatus.CHECKED_OUT, BookingStatus.CANCELLED},
    BookingStatus.CHECKED_OUT: set(),
    BookingStatus.CANCELLED: set(),
}

# Timestamp recorded when a booking enters the status
STATUS_TIMESTAMP_FIELDS = {
    BookingStatus.CONFIRMED.value: 'confirmed_at',
    BookingStatus.CHECKED_IN.value: 'checked_in_at',
    BookingStatus.CHECKED_OUT.value: 'checked_out_at',
    BookingStatus.CANCELLED.value: 'cancelled_at',
}

# Fields update() may change
UPDATABLE_FIELDS = (
    'status',
    'payment_status',
    'special_requests',
    'guests_count',
    'adults_count',
    'children_count',
)


def can_transition(current: str, target: str) -> bool:
    try:
        return BookingStatus(target) in _ALLOWED_TRANSITIONS[BookingStatus(current)]
    except ValueError:
        return False


def validate_transition(current: str, target: str) -> None:
    """Raise StateError unless ``current -> target`` is a legal transition"""
    if not can_transition(current, target):
        raise StateError(
            f"Cannot change booking status from {current} to {target}",
            detail={'from': current, 'to': target},
        )
