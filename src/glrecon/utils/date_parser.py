"""Date parsing utilities."""

import re
from datetime import date, datetime, timedelta
from typing import Any

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

EXCEL_EPOCH = date(1899, 12, 30)

_ISO_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")
_DAY_FIRST_RE = re.compile(r"^(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{4})$")
_PERIOD_RE = re.compile(r"^(\d{4})-(\d{1,2})$")


def parse_date(value: Any) -> date:
    """Parse a spreadsheet cell into a date object.

    Supports:
    - date and datetime objects (as produced by openpyxl)
    - ISO dates: "2026-02-01" (a trailing time part is ignored)
    - Day-first dates: "01/02/2026", "1-2-2026", "1.2.2026"
    - Textual dates: "1 Feb 2026", "01 February 2026"
    - Excel serial numbers (days since 1899-12-30)

    Args:
        value: Cell value

    Returns:
        Date object

    Raises:
        ValueError: If value cannot be parsed as a date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Could not parse date '{value}'")
    if isinstance(value, (int, float)):
        return _from_excel_serial(value)

    date_str = str(value).strip()
    if not date_str:
        raise ValueError("Empty date string")

    iso_match = _ISO_RE.match(date_str)
    if iso_match:
        year, month, day = (int(part) for part in iso_match.groups())
        return _build_date(year, month, day, date_str)

    day_first_match = _DAY_FIRST_RE.match(date_str)
    if day_first_match:
        day, month, year = (int(part) for part in day_first_match.groups())
        return _build_date(year, month, day, date_str)

    # Bare numbers are only meaningful as Excel serials; dateutil would
    # happily turn a reference like "2026" into a date.
    try:
        number = float(date_str)
    except ValueError:
        pass
    else:
        return _from_excel_serial(number)

    try:
        return date_parser.parse(date_str, dayfirst=True).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def _build_date(year: int, month: int, day: int, source: str) -> date:
    try:
        return date(year, month, day)
    except ValueError as e:
        raise ValueError(f"Could not parse date '{source}': {e}")


def _from_excel_serial(number: float) -> date:
    if not 30000 < number < 100000:
        raise ValueError(f"Could not parse date '{number}': not an Excel date serial")
    return EXCEL_EPOCH + timedelta(days=int(number))


def get_month_range(year: int, month: int) -> tuple[date, date]:
    """Get first and last day of a calendar month.

    Args:
        year: Four digit year
        month: Month number (1-12)

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If month is out of range
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}. Must be between 1 and 12")
    start_date = date(year, month, 1)
    end_date = start_date + relativedelta(months=1) - timedelta(days=1)
    return (start_date, end_date)


def parse_period(period: str) -> tuple[int, int]:
    """Parse a "YYYY-MM" period string into (year, month).

    Raises:
        ValueError: If period string is not recognized
    """
    match = _PERIOD_RE.match(period.strip())
    if not match:
        raise ValueError(f"Unknown period: '{period}'. Expected YYYY-MM")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Unknown period: '{period}'. Month must be between 1 and 12")
    return (year, month)
