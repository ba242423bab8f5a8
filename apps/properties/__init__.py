"""Properties app package.

Holds the property and guest records the booking engine reads: whether a
property is bookable and how many guests it sleeps, and whether a guest is
allowed to book at all.
"""
