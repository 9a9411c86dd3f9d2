"""Utility functions for glrecon."""

from glrecon.utils.date_parser import parse_date, get_month_range, parse_period
from glrecon.utils.amount_parser import parse_amount

__all__ = ["parse_date", "get_month_range", "parse_period", "parse_amount"]
