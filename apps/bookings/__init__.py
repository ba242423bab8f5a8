"""Bookings app package.

This app encapsulates the booking domain: the booking model with its price
breakdown, the status state machine and the lifecycle that creates, updates
and cancels bookings. Bookings ensure atomicity and enforce date overlap
constraints via database transactions and the use of exclusion constraints
when supported.
"""
