"""Audit trail of booking changes."""
