"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

_THOUSANDS_COMMA_RE = re.compile(r"^\d{1,3}(,\d{3})+(\.\d*)?$")
_THOUSANDS_DOT_RE = re.compile(r"^\d{1,3}(\.\d{3}){2,}(,\d*)?$")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into an exact Decimal.

    Handles various formats:
    - "123.45"
    - "£123.45", "$123.45", "€ 123.45"
    - "-123.45", "-£123.45", "123.45-"
    - "1,234.56", "1 234.56", "1'234.56"
    - "1.234,56" (comma as decimal separator)
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    original = amount_str
    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1].strip()

    # Trailing minus, as some ledgers print credits
    if amount_str.endswith("-"):
        is_negative = not is_negative
        amount_str = amount_str[:-1].strip()

    # Remove currency symbols and grouping whitespace
    amount_str = re.sub(r"[$€£¥\s']", "", amount_str)

    if amount_str.startswith("-"):
        is_negative = not is_negative
        amount_str = amount_str[1:]
    elif amount_str.startswith("+"):
        amount_str = amount_str[1:]

    amount_str = _normalize_separators(amount_str)

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{original}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{original}'")
    return -amount if is_negative else amount


def _normalize_separators(amount_str: str) -> str:
    """Rewrite thousands/decimal separators to plain ``1234.56`` form."""
    has_comma = "," in amount_str
    has_dot = "." in amount_str

    if has_comma and has_dot:
        # Whichever separator comes last is the decimal point
        if amount_str.rfind(",") > amount_str.rfind("."):
            return amount_str.replace(".", "").replace(",", ".")
        return amount_str.replace(",", "")

    if has_comma:
        if _THOUSANDS_COMMA_RE.match(amount_str):
            return amount_str.replace(",", "")
        if amount_str.count(",") == 1:
            return amount_str.replace(",", ".")
        return amount_str.replace(",", "")

    if has_dot and _THOUSANDS_DOT_RE.match(amount_str):
        return amount_str.replace(".", "")

    return amount_str
