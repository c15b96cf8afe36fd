"""Availability reconciliation for previously fulfilled media."""
