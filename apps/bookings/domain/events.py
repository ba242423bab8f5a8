"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits and feed the
audit trail.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from shared.domain.base import DomainEvent


@dataclass
class BookingCreated(DomainEvent):
    """
    Event: A new booking was created in PENDING status

    Triggers:
    - Audit log entry (action=create)
    """
    booking_id: int = 0
    property_id: int = 0
    guest_id: int = 0
    new_values: Dict[str, Any] = field(default_factory=dict)
    user_id: Optional[int] = None


@dataclass
class BookingUpdated(DomainEvent):
    """
    Event: Allow-listed booking fields changed

    ``old_values``/``new_values`` hold only the changed fields.

    Triggers:
    - Audit log entry (action=update, or status_change when the status moved)
    """
    booking_id: int = 0
    old_values: Dict[str, Any] = field(default_factory=dict)
    new_values: Dict[str, Any] = field(default_factory=dict)
    changed_fields: List[str] = field(default_factory=list)
    user_id: Optional[int] = None

    @property
    def status_changed(self) -> bool:
        return 'status' in self.changed_fields


@dataclass
class BookingCancelled(DomainEvent):
    """
    Event: Booking was cancelled

    Triggers:
    - Audit log entry (action=cancel)
    """
    booking_id: int = 0
    previous_status: str = ''
    reason: str = ''
    user_id: Optional[int] = None
