"""General ledger report parser.

Turns an uploaded GL export into typed ledger rows. Two layouts are
understood:

Sectioned (Xero "General Ledger (Detailed)")::

    620 - Prepayments                   <- account header
    Date | Source | Contact | Description | Reference | Debit | Credit
    01/02/2026 | MJ | ... | Prepayment release | ... | | 41.58
    Total 620 - Prepayments             <- skipped
                                        <- blank, skipped
    485 - Software                      <- next account header

Flat: one row per transaction with its own ``Account`` (and optionally
``Account Code``) column.

Workbooks (.xlsx) are read with openpyxl; anything else is treated as
delimited text. Column positions are detected from the header row.
"""

import csv
import io
import logging
import re
import zipfile
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Optional

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from glrecon.domain.entities import LedgerTransactionRow, ParseResult, SkippedRow
from glrecon.domain.errors import FormatError, GL_EXPORT_HINT
from glrecon.utils.amount_parser import parse_amount
from glrecon.utils.date_parser import parse_date

logger = logging.getLogger(__name__)

HEADER_SCAN_LIMIT = 30
XLSX_SIGNATURE = b"PK\x03\x04"

# openpyxl failures on archives that are not valid workbooks.
# ElementTree and lxml parse errors both subclass SyntaxError.
WORKBOOK_ERRORS = (
    InvalidFileException,
    zipfile.BadZipFile,
    KeyError,
    IndexError,
    OSError,
    SyntaxError,
    ValueError,
    TypeError,
)

# Account header: "620 - Prepayments" or "620 – Prepayments"
ACCOUNT_HEADER_RE = re.compile(r"^(\d{2,4})\s*[-–—]\s*(.+)$")

COLUMN_ALIASES = {
    "date": ("date",),
    "source": ("source", "type"),
    "contact": ("contact", "name", "contact name"),
    "description": ("description", "details", "particular", "particulars"),
    "reference": ("reference", "ref", "ref."),
    "debit": ("debit",),
    "credit": ("credit",),
    "account_code": ("account code", "code"),
    "account_name": ("account", "account name"),
}

ZERO = Decimal("0")
CENT = Decimal("0.01")

# First-cell prefixes of summary lines that are never transactions
SUMMARY_PREFIXES = ("total", "opening balance", "closing balance")


class _RowSkipped(Exception):
    """Internal signal that a dated row could not be mapped."""


def parse_gl_report(content: bytes) -> ParseResult:
    """Parse a general ledger export into typed rows.

    Args:
        content: Raw file bytes (.xlsx workbook or delimited text)

    Returns:
        ParseResult with rows in file order. An export without transaction
        lines yields an empty ``rows`` tuple; callers decide how to treat it.

    Raises:
        FormatError: If the content is not a recognizable tabular export
    """
    raw_rows = _read_raw_rows(content)
    header_idx, columns = _find_header(raw_rows)
    flat = "account_name" in columns

    rows: list[LedgerTransactionRow] = []
    skipped: list[SkippedRow] = []
    accounts: dict[str, str] = {}
    cur_code: Optional[str] = None
    cur_name: Optional[str] = None

    for idx in range(header_idx + 1, len(raw_rows)):
        row = raw_rows[idx]
        row_number = idx + 1
        if _is_blank(row):
            continue

        first_cell = _text(_cell(row, 0)) or ""

        if not flat:
            header_match = ACCOUNT_HEADER_RE.match(first_cell)
            if header_match and not _looks_like_date(row[0]):
                cur_code = header_match.group(1)
                cur_name = header_match.group(2).strip()
                continue

        if first_cell.lower().startswith(SUMMARY_PREFIXES):
            continue

        date_value = _cell(row, columns["date"])
        if _text(date_value) is None:
            # Narrative lines carry no date
            continue

        try:
            txn_date = _parse_row_date(date_value)
            debit, credit = _parse_row_amounts(row, columns)
            if flat:
                account_code = _text(_cell(row, columns.get("account_code")))
                account_name = _text(_cell(row, columns["account_name"]))
                if account_name is None:
                    raise _RowSkipped("missing account name")
            else:
                if cur_name is None:
                    raise _RowSkipped("transaction before any account header")
                account_code, account_name = cur_code, cur_name
        except _RowSkipped as e:
            skipped.append(SkippedRow(row_number=row_number, reason=str(e)))
            continue

        # Zero-value rows (e.g. opening balance lines with no movement)
        if debit == ZERO and credit == ZERO:
            continue

        rows.append(
            LedgerTransactionRow(
                account_code=account_code,
                account_name=account_name,
                transaction_date=txn_date,
                source=_text(_cell(row, columns.get("source"))),
                description=_text(_cell(row, columns.get("description"))),
                reference=_text(_cell(row, columns.get("reference"))),
                contact=_text(_cell(row, columns.get("contact"))),
                debit=debit,
                credit=credit,
            )
        )
        accounts.setdefault(
            account_name, f"{account_code} - {account_name}" if account_code else account_name
        )

    if skipped:
        logger.warning("Skipped %d unreadable ledger row(s)", len(skipped))

    dates = [r.transaction_date for r in rows]
    result = ParseResult(
        rows=tuple(rows),
        account_count=len(accounts),
        date_from=min(dates) if dates else None,
        date_to=max(dates) if dates else None,
        accounts=tuple(sorted(accounts.values())),
        skipped_rows=tuple(skipped),
    )
    logger.debug(
        "Parsed %d ledger rows across %d accounts (%s layout)",
        result.row_count,
        result.account_count,
        "flat" if flat else "sectioned",
    )
    return result


def _read_raw_rows(content: bytes) -> list[tuple[Any, ...]]:
    """Read the first worksheet (or delimited text) as rows of cell values."""
    if not content:
        raise FormatError(f"File is empty. {GL_EXPORT_HINT}")

    if content.startswith(XLSX_SIGNATURE):
        try:
            return _read_workbook_rows(content)
        except WORKBOOK_ERRORS as e:
            raise FormatError(f"Could not read workbook: {e}. {GL_EXPORT_HINT}") from e

    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise FormatError(f"File is not a spreadsheet or text export. {GL_EXPORT_HINT}") from e
    if "\x00" in text:
        raise FormatError(f"File is not a spreadsheet or text export. {GL_EXPORT_HINT}")

    sample = text[:4096]
    try:
        delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t|").delimiter
    except csv.Error:
        delimiter = ","
    reader = csv.reader(io.StringIO(text), delimiter=delimiter)
    try:
        return [tuple(row) for row in reader]
    except csv.Error as e:
        raise FormatError(f"Could not read text export: {e}. {GL_EXPORT_HINT}") from e


def _read_workbook_rows(content: bytes) -> list[tuple[Any, ...]]:
    workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    try:
        sheet = workbook.worksheets[0]
        return [tuple(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()


def _find_header(raw_rows: list[tuple[Any, ...]]) -> tuple[int, dict[str, int]]:
    """Locate the column header row and map field names to column indexes."""
    for idx, row in enumerate(raw_rows[:HEADER_SCAN_LIMIT]):
        cells = [(_text(c) or "").lower() for c in row]
        has_date = any(c in COLUMN_ALIASES["date"] for c in cells)
        has_debit = any(c in COLUMN_ALIASES["debit"] for c in cells)
        has_credit = any(c in COLUMN_ALIASES["credit"] for c in cells)
        if not (has_date and (has_debit or has_credit)):
            continue

        columns: dict[str, int] = {}
        for col_idx, cell in enumerate(cells):
            for field_name, aliases in COLUMN_ALIASES.items():
                if cell in aliases and field_name not in columns:
                    columns[field_name] = col_idx
                    break
        return idx, columns

    raise FormatError(
        "Could not find column headers. Expected a row with 'Date', 'Debit', "
        f"and/or 'Credit'. {GL_EXPORT_HINT}"
    )


def _parse_row_date(value: Any) -> date:
    try:
        return parse_date(value)
    except ValueError:
        raise _RowSkipped(f"unparsable date '{_text(value)}'")


def _parse_row_amounts(row: tuple[Any, ...], columns: dict[str, int]) -> tuple[Decimal, Decimal]:
    """Return non-negative (debit, credit) for a row.

    A negative figure in one column is moved to the other so that the
    row's net amount is preserved.
    """
    debit = _parse_money(_cell(row, columns.get("debit")), "debit")
    credit = _parse_money(_cell(row, columns.get("credit")), "credit")

    if debit < ZERO:
        debit, credit = ZERO, credit - debit
    if credit < ZERO:
        debit, credit = debit - credit, ZERO
    return debit, credit


def _parse_money(value: Any, label: str) -> Decimal:
    """Parse a debit or credit cell, rounded half-up to whole cents."""
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        # repr of a float is its shortest round-tripping decimal form
        amount = Decimal(repr(value))
    else:
        text = str(value).strip()
        if not text or text == "-":
            return ZERO
        try:
            amount = parse_amount(text)
        except ValueError:
            raise _RowSkipped(f"malformed {label} amount '{text}'")

    if not amount.is_finite():
        raise _RowSkipped(f"malformed {label} amount '{_text(value)}'")
    # Stored amounts are whole cents
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def _looks_like_date(value: Any) -> bool:
    try:
        parse_date(value)
    except ValueError:
        return False
    return True


def _cell(row: tuple[Any, ...], col_idx: Optional[int]) -> Any:
    if col_idx is None or col_idx >= len(row):
        return None
    return row[col_idx]


def _text(value: Any) -> Optional[str]:
    """Cell value as stripped text, or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _is_blank(row: Iterable[Any]) -> bool:
    return all(_text(c) is None for c in row)
