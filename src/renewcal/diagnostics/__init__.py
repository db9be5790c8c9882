"""Diagnostics package.

- round_trip, pretty_month: stdlib only
- leap_months: optional (requires the ``diagnostics`` extra: numpy + matplotlib)
"""

__all__ = ["round_trip", "pretty_month", "leap_months"]
