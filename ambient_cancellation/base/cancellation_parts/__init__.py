"""Cancellation implementation parts; import from ``base.cancellation``."""
