"""Booking restrictions app package.

Holds property-specific and global policy rules (minimum/maximum stay,
blackout windows, guest limits, advance booking horizon, allowed check-in
and check-out weekdays) and evaluates them against a requested stay.
"""
