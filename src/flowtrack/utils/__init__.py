"""Utility functions for flowtrack."""

from flowtrack.utils.date_parser import parse_date, parse_month, utc_now
from flowtrack.utils.amount_parser import parse_amount, parse_magnitude

__all__ = ["parse_date", "parse_month", "utc_now", "parse_amount", "parse_magnitude"]
