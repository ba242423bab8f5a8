"""
Unit of Work Pattern

Manages database transactions and ensures that domain events
are published only after successful transaction commit.
"""

from abc import ABC, abstractmethod
from typing import List
import logging
from time import monotonic

from django.db import connections, transaction

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class UnitOfWorkTimeout(TimeoutError):
    """Raised when the caller's deadline elapses inside a unit of work."""


class AbstractUnitOfWork(ABC):
    """Abstract Unit of Work pattern"""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def commit(self):
        """Commit the transaction"""
        pass

    @abstractmethod
    def rollback(self):
        """Rollback the transaction"""
        pass

    @abstractmethod
    def collect(self, event: DomainEvent):
        """Queue an event for publishing after commit"""
        pass


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    Django implementation of Unit of Work

    Manages a Django database transaction and publishes collected domain
    events through the given message bus once the commit has succeeded.

    An optional ``timeout`` (seconds) bounds the whole unit: on PostgreSQL it
    is applied as a transaction-local lock/statement timeout, and
    ``check_deadline()`` raises ``UnitOfWorkTimeout`` once it has elapsed,
    which rolls everything back.

    Usage:
        with DjangoUnitOfWork(bus, timeout=5) as uow:
            prop = Property.objects.select_for_update().get(pk=property_id)
            booking = Booking.objects.create(...)
            uow.check_deadline()
            uow.collect(BookingCreated(...))
        # Events are published after commit
    """

    def __init__(self, message_bus=None, timeout: float | None = None, using: str = "default"):
        self._events: List[DomainEvent] = []
        self._using = using
        self._transaction = None
        self._message_bus = message_bus
        self._timeout = timeout
        self._deadline = None

    def __enter__(self):
        """Start database transaction"""
        self._transaction = transaction.atomic(using=self._using)
        self._transaction.__enter__()
        if self._timeout is not None:
            self._deadline = monotonic() + self._timeout
            self._apply_database_timeout()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Complete or rollback transaction"""
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            if self._transaction:
                self._transaction.__exit__(exc_type, exc_val, exc_tb)

    def _apply_database_timeout(self):
        connection = connections[self._using]
        if connection.vendor != "postgresql":
            return
        timeout_ms = f"{max(int(self._timeout * 1000), 1)}ms"
        with connection.cursor() as cursor:
            cursor.execute("SELECT set_config('lock_timeout', %s, true)", [timeout_ms])
            cursor.execute("SELECT set_config('statement_timeout', %s, true)", [timeout_ms])

    def check_deadline(self):
        """Raise UnitOfWorkTimeout if the caller's deadline has passed"""
        if self._deadline is not None and monotonic() > self._deadline:
            raise UnitOfWorkTimeout(
                f"Unit of work exceeded its {self._timeout}s deadline"
            )

    def commit(self):
        """
        Commit changes and publish events

        Events are published using Django's transaction.on_commit()
        to ensure they're only sent after database commit succeeds.
        """
        logger.debug(f"Committing transaction with {len(self._events)} events")

        events = self._events.copy()
        self._events.clear()

        if events and self._message_bus is not None:
            transaction.on_commit(lambda: self._publish_events(events), using=self._using)

    def rollback(self):
        """Rollback changes and discard events"""
        logger.warning(f"Rolling back transaction, discarding {len(self._events)} events")
        self._events.clear()

    def collect(self, event: DomainEvent):
        self._events.append(event)

    def _publish_events(self, events: List[DomainEvent]):
        """
        Publish collected events to the message bus

        Called after successful transaction commit.
        """
        logger.info(f"Publishing {len(events)} domain events after commit")

        try:
            self._message_bus.publish_events(events)
        except Exception as e:
            logger.error(f"Error publishing events: {e}", exc_info=True)
            # Data is already committed; publishing is best-effort
