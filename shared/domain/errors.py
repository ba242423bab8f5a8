"""
Booking Engine Errors

Every failure the engine can report carries an ``ErrorKind`` so that the
application boundary can turn it into an ``Err`` result and the routing
layer can map it to its transport.
"""

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    VALIDATION = 'validation'
    NOT_FOUND = 'not_found'
    POLICY = 'policy'
    CONFLICT = 'conflict'
    RESTRICTION = 'restriction'
    PRICING = 'pricing'
    STATE = 'state'
    INFRASTRUCTURE = 'infrastructure'


class BookingError(Exception):
    """Base class for all booking engine errors"""

    kind: ErrorKind = ErrorKind.INFRASTRUCTURE

    def __init__(self, message: str, detail: Any = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(BookingError):
    """Malformed or out-of-range input; detail lists every violation"""
    kind = ErrorKind.VALIDATION


class NotFoundError(BookingError):
    kind = ErrorKind.NOT_FOUND


class PolicyError(BookingError):
    """Inactive property or blacklisted guest"""
    kind = ErrorKind.POLICY


class ConflictError(BookingError):
    """Requested dates overlap an active booking"""
    kind = ErrorKind.CONFLICT


class RestrictionError(BookingError):
    kind = ErrorKind.RESTRICTION


class PricingError(BookingError):
    kind = ErrorKind.PRICING


class NoBasePriceError(PricingError):
    """No active base rate exists for the property"""


class StateError(BookingError):
    """Illegal booking status transition"""
    kind = ErrorKind.STATE


class InfrastructureError(BookingError):
    """Persistence or other collaborator is unavailable"""
    kind = ErrorKind.INFRASTRUCTURE
