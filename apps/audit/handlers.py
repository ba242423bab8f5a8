"""Event handlers that write booking changes to the audit log.

Handlers run after the booking transaction has committed. A failing
handler is logged by the message bus and never affects the booking.
"""

from __future__ import annotations

import structlog

from apps.bookings.domain.events import BookingCancelled, BookingCreated, BookingUpdated
from shared.application.message_bus import MessageBus

from .models import BookingAuditLog

logger = structlog.get_logger(__name__)


def on_booking_created(event: BookingCreated) -> None:
    BookingAuditLog.log(
        booking_id=event.booking_id,
        action=BookingAuditLog.Action.CREATE,
        new_values=event.new_values,
        user_id=event.user_id,
    )
    logger.info("audit.booking_created", booking_id=event.booking_id, event_id=str(event.event_id))


STATUS_ACTIONS = {
    "checked_in": BookingAuditLog.Action.CHECK_IN,
    "checked_out": BookingAuditLog.Action.CHECK_OUT,
}


def update_action(event: BookingUpdated) -> BookingAuditLog.Action:
    """Status changes win over payment changes; anything else is a plain update."""
    if event.status_changed:
        return STATUS_ACTIONS.get(event.new_values.get("status"), BookingAuditLog.Action.STATUS_CHANGE)
    if "payment_status" in event.changed_fields:
        return BookingAuditLog.Action.PAYMENT
    return BookingAuditLog.Action.UPDATE


def on_booking_updated(event: BookingUpdated) -> None:
    action = update_action(event)
    BookingAuditLog.log(
        booking_id=event.booking_id,
        action=action,
        old_values=event.old_values,
        new_values=event.new_values,
        changed_fields=event.changed_fields,
        user_id=event.user_id,
    )
    logger.info(
        "audit.booking_updated",
        booking_id=event.booking_id,
        action=action.value,
        changed_fields=event.changed_fields,
    )


def on_booking_cancelled(event: BookingCancelled) -> None:
    BookingAuditLog.log(
        booking_id=event.booking_id,
        action=BookingAuditLog.Action.CANCEL,
        old_values={"status": event.previous_status},
        new_values={"status": "cancelled", "cancellation_reason": event.reason},
        changed_fields=["status", "cancellation_reason"],
        user_id=event.user_id,
        notes=event.reason,
    )
    logger.info("audit.booking_cancelled", booking_id=event.booking_id, reason=event.reason)


def register_audit_handlers(bus: MessageBus) -> MessageBus:
    bus.register_event_handler(BookingCreated, on_booking_created)
    bus.register_event_handler(BookingUpdated, on_booking_updated)
    bus.register_event_handler(BookingCancelled, on_booking_cancelled)
    return bus
