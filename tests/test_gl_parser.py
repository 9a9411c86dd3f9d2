"""Tests for the general ledger report parser."""

import io
import zipfile
from datetime import date
from decimal import Decimal

import pytest

from glrecon.domain.errors import FormatError
from glrecon.domain.gl_parser import parse_gl_report

SECTIONED_CSV = """General Ledger (Detailed),,,,,,
Test Client Ltd,,,,,,
Date,Source,Contact,Description,Reference,Debit,Credit
620 - Prepayments,,,,,,
Opening Balance,,,,,,
01/02/2026,Manual Journal,,Prepayment release,MJ-1,,41.58
15/02/2026,Spend Money,Insurer,Annual insurance,SP-9,"1,200.00",
Total 620 - Prepayments,,,,,"1,200.00",41.58
,,,,,,
485 - Software,,,,,,
31/01/2026,Spend Money,Vendor,Licence,SP-1,250.50,
32/13/2026,Spend Money,Vendor,Bad date,SP-2,10.00,
05/02/2026,Spend Money,Vendor,Bad amount,SP-3,abc,
06/02/2026,Spend Money,Vendor,Zero line,SP-4,0.00,0.00
07/02/2026,Manual Journal,,Reversal,MJ-2,-20.00,
Total 485 - Software,,,,,260.50,
"""

FLAT_CSV = """Account Code,Account,Date,Description,Reference,Debit,Credit
620,Prepayments,01/02/2026,Prepayment release,MJ-1,,41.58
485,Software,31/01/2026,Licence,SP-1,250.50,
,Suspense,2026-02-03,Unallocated,,5.00,
620,,04/02/2026,No account,,1.00,
"""


def _zip_archive(members):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, data in members.items():
            archive.writestr(name, data)
    return buffer.getvalue()


class TestSectionedLayout:
    """Tests for Xero-style reports grouped under account headers."""

    def test_parse_workbook(self, gl_workbook, sample_accounts):
        """Test parsing an .xlsx export end to end."""
        result = parse_gl_report(gl_workbook(sample_accounts))

        assert result.row_count == 4
        assert result.account_count == 3
        assert result.date_from == date(2026, 1, 31)
        assert result.date_to == date(2026, 2, 20)
        assert result.accounts == ("200 - Sales", "485 - Software", "620 - Prepayments")
        assert result.skipped_rows == ()

        first = result.rows[0]
        assert first.account_code == "620"
        assert first.account_name == "Prepayments"
        assert first.transaction_date == date(2026, 2, 1)
        assert first.description == "Prepayment release"
        assert first.source == "Manual Journal"
        assert first.contact == "Supplier Ltd"
        assert first.reference == "REF"
        assert first.debit == Decimal("0")
        assert first.credit == Decimal("41.58")

    def test_workbook_amounts_are_exact(self, gl_workbook, sample_accounts):
        """Test that float cells become exact decimals."""
        result = parse_gl_report(gl_workbook(sample_accounts))
        software = [r for r in result.rows if r.account_name == "Software"]
        assert software[0].debit == Decimal("250.5")
        assert sum((r.net for r in result.rows), Decimal("0")) == Decimal("408.92")

    def test_parse_delimited_text(self):
        """Test the same layout exported as CSV."""
        result = parse_gl_report(SECTIONED_CSV.encode())

        assert result.row_count == 4
        assert result.account_count == 2
        assert [r.account_name for r in result.rows] == [
            "Prepayments",
            "Prepayments",
            "Software",
            "Software",
        ]
        assert result.rows[1].debit == Decimal("1200.00")
        assert result.date_from == date(2026, 1, 31)
        assert result.date_to == date(2026, 2, 15)

    def test_unreadable_rows_are_reported(self):
        """Test that bad dates and amounts are skipped with a reason."""
        result = parse_gl_report(SECTIONED_CSV.encode())

        assert [s.row_number for s in result.skipped_rows] == [12, 13]
        assert "unparsable date" in result.skipped_rows[0].reason
        assert "malformed debit amount" in result.skipped_rows[1].reason

    def test_summary_and_zero_rows_are_ignored(self):
        """Test that totals, opening balances and zero lines never become rows."""
        result = parse_gl_report(SECTIONED_CSV.encode())
        descriptions = [r.description for r in result.rows]
        assert "Zero line" not in descriptions
        assert all(r.account_name in ("Prepayments", "Software") for r in result.rows)

    def test_amounts_are_rounded_to_cents(self):
        """Test that sub-cent amounts are rounded half-up to whole cents."""
        content = (
            b"Date,Description,Debit,Credit\n"
            b"620 - Prepayments,,,\n"
            b"01/02/2026,Release,,41.585\n"
            b"02/02/2026,Accrual,0.005,\n"
            b"03/02/2026,Dust,0.004,\n"
        )

        result = parse_gl_report(content)

        assert [(r.debit, r.credit) for r in result.rows] == [
            (Decimal("0"), Decimal("41.59")),
            (Decimal("0.01"), Decimal("0")),
        ]
        assert str(result.rows[0].credit) == "41.59"

    def test_negative_debit_moves_to_credit(self):
        """Test that a negative debit is stored as a credit."""
        result = parse_gl_report(SECTIONED_CSV.encode())
        reversal = result.rows[-1]
        assert reversal.description == "Reversal"
        assert reversal.debit == Decimal("0")
        assert reversal.credit == Decimal("20.00")
        assert reversal.net == Decimal("-20.00")

    def test_negative_credit_moves_to_debit(self, gl_workbook):
        """Test that a negative credit is stored as a debit."""
        content = gl_workbook(
            {"620 - Prepayments": [(date(2026, 2, 1), "Refund", None, -15)]}
        )
        row = parse_gl_report(content).rows[0]
        assert row.debit == Decimal("15")
        assert row.credit == Decimal("0")

    def test_transaction_before_account_header(self):
        """Test that a dated line with no account is reported."""
        content = (
            "Date,Description,Debit,Credit\n"
            "01/02/2026,Orphan,10,\n"
            "620 - Prepayments,,,\n"
            "02/02/2026,Release,,5\n"
        ).encode()
        result = parse_gl_report(content)

        assert result.row_count == 1
        assert result.rows[0].account_name == "Prepayments"
        assert len(result.skipped_rows) == 1
        assert result.skipped_rows[0].row_number == 2
        assert "before any account header" in result.skipped_rows[0].reason

    def test_accounts_without_transactions(self, gl_workbook):
        """Test an export whose accounts only carry totals."""
        result = parse_gl_report(gl_workbook({"620 - Prepayments": []}))
        assert result.row_count == 0
        assert result.account_count == 0
        assert result.date_from is None
        assert result.date_to is None


class TestFlatLayout:
    """Tests for exports with an account column on every line."""

    def test_parse_flat_csv(self):
        """Test reading account code and name from columns."""
        result = parse_gl_report(FLAT_CSV.encode())

        assert result.row_count == 3
        assert result.account_count == 3
        assert result.accounts == ("485 - Software", "620 - Prepayments", "Suspense")
        suspense = result.rows[2]
        assert suspense.account_code is None
        assert suspense.transaction_date == date(2026, 2, 3)

    def test_missing_account_name_is_reported(self):
        """Test that a line without an account is skipped."""
        result = parse_gl_report(FLAT_CSV.encode())
        assert len(result.skipped_rows) == 1
        assert result.skipped_rows[0].row_number == 5
        assert result.skipped_rows[0].reason == "missing account name"

    def test_semicolon_delimited(self):
        """Test continental exports with semicolons and decimal commas."""
        content = (
            "Account;Date;Description;Debit;Credit\n"
            "Prepayments;01.02.2026;Release;;41,58\n"
            "Software;31.01.2026;Licence;1.250,50;\n"
        ).encode()
        result = parse_gl_report(content)

        assert result.row_count == 2
        assert result.rows[0].credit == Decimal("41.58")
        assert result.rows[1].debit == Decimal("1250.50")
        assert result.rows[1].transaction_date == date(2026, 1, 31)

    def test_byte_order_mark(self):
        """Test that a UTF-8 BOM does not hide the header."""
        result = parse_gl_report(b"\xef\xbb\xbf" + FLAT_CSV.encode())
        assert result.row_count == 3


class TestUnreadableFiles:
    """Tests for content that is not a ledger export."""

    def test_empty_file(self):
        """Test that empty content is rejected."""
        with pytest.raises(FormatError, match="empty"):
            parse_gl_report(b"")

    def test_binary_file(self):
        """Test that binary content is rejected."""
        with pytest.raises(FormatError, match="not a spreadsheet"):
            parse_gl_report(b"\xff\xfe\x00\x01\x02")

    def test_text_with_nul_bytes(self):
        """Test that text containing NUL characters is rejected."""
        with pytest.raises(FormatError, match="not a spreadsheet"):
            parse_gl_report(b"Date,Debit\x00,Credit\n")

    def test_broken_workbook(self):
        """Test that a corrupt .xlsx is rejected."""
        with pytest.raises(FormatError, match="Could not read workbook"):
            parse_gl_report(b"PK\x03\x04not really a zip archive")

    def test_missing_headers(self):
        """Test that text without a Date/Debit/Credit header is rejected."""
        content = b"Name,Amount\nCoffee,3.50\n"
        with pytest.raises(FormatError, match="Could not find column headers"):
            parse_gl_report(content)

    def test_error_message_hints_at_export_type(self):
        """Test that format errors point users to the right export."""
        with pytest.raises(FormatError, match="General Ledger \\(Detailed\\)"):
            parse_gl_report(b"Name,Amount\n")

    @pytest.mark.parametrize(
        "members",
        [
            {"[Content_Types].xml": "<garbage"},
            {"notes.txt": "not a workbook"},
        ],
    )
    def test_zip_that_is_not_a_workbook(self, members):
        """Test that a valid zip without a readable workbook is rejected."""
        with pytest.raises(FormatError, match="Could not read workbook") as excinfo:
            parse_gl_report(_zip_archive(members))
        assert "General Ledger (Detailed)" in str(excinfo.value)

    def test_oversized_text_field(self):
        """Test that a field beyond the csv field limit is rejected."""
        content = "Date,Description,Debit,Credit\n" + '01/02/2026,"' + "x" * 200_000 + '",1.00,\n'
        with pytest.raises(FormatError, match="Could not read text export"):
            parse_gl_report(content.encode())
