"""
Shared Kernel

Building blocks used by every booking context: domain events, the date
range value object, error kinds with the Ok/Err result types, the unit of
work and the message bus.
"""
