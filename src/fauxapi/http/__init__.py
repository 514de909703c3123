"""Canonical response type and request-side context objects."""
