"""Pricing app package.

Stores the pricing rules of each property (plus global defaults) and turns
them into an itemized price for a stay: a nightly base rate layered with
weekend, length-of-stay and seasonal adjustments.
"""
