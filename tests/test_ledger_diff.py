"""Tests for per-account ledger comparison."""

from decimal import Decimal

import pytest

from glrecon.domain.entities import AccountAggregate, ChangeType
from glrecon.domain.ledger_diff import aggregate_rows, classify_account, diff_ledger


def _agg(name: str, count: int, debit: str, credit: str = "0") -> AccountAggregate:
    return AccountAggregate(
        account_name=name,
        transaction_count=count,
        debit_total=Decimal(debit),
        credit_total=Decimal(credit),
    )


def test_aggregate_rows_groups_by_account(row_factory):
    """Test counts and totals per account in first-seen order."""
    rows = [
        row_factory("Sales", credit="1000.00"),
        row_factory("Bank", debit="1000.00"),
        row_factory("Sales", credit="250.00", day=2),
    ]
    aggregates = aggregate_rows(rows)

    assert list(aggregates) == ["Sales", "Bank"]
    sales = aggregates["Sales"]
    assert sales.transaction_count == 2
    assert sales.debit_total == Decimal("0")
    assert sales.credit_total == Decimal("1250.00")
    assert sales.net_total == Decimal("-1250.00")


def test_aggregate_rows_empty():
    """Test that no rows give no aggregates."""
    assert aggregate_rows([]) == {}


class TestClassifyAccount:
    """Tests for the per-account change rules."""

    def test_added(self):
        assert classify_account(None, _agg("Sales", 1, "10")) is ChangeType.ADDED

    def test_removed(self):
        assert classify_account(_agg("Sales", 1, "10"), None) is ChangeType.REMOVED

    def test_both_missing(self):
        with pytest.raises(ValueError):
            classify_account(None, None)

    def test_identical_totals_unchanged(self):
        old = _agg("Prepayments", 3, "100.00")
        new = _agg("Prepayments", 3, "100.00")
        assert classify_account(old, new) is ChangeType.UNCHANGED

    def test_sub_cent_difference_unchanged(self):
        """Test that rounding noise within a cent is not a change."""
        old = _agg("Prepayments", 3, "100.00")
        new = _agg("Prepayments", 3, "100.005")
        assert classify_account(old, new) is ChangeType.UNCHANGED

    def test_exactly_one_cent_unchanged(self):
        """Test that a difference of exactly 0.01 is within tolerance."""
        old = _agg("Prepayments", 3, "100.00")
        new = _agg("Prepayments", 3, "100.01")
        assert classify_account(old, new) is ChangeType.UNCHANGED

    def test_two_cent_difference_modified(self):
        old = _agg("Prepayments", 3, "100.00")
        new = _agg("Prepayments", 3, "100.02")
        assert classify_account(old, new) is ChangeType.MODIFIED

    def test_count_change_modified(self):
        """Test that a different line count is a change even with equal net."""
        old = _agg("Prepayments", 3, "100.00")
        new = _agg("Prepayments", 4, "100.00")
        assert classify_account(old, new) is ChangeType.MODIFIED

    def test_same_net_different_split_unchanged(self):
        """Test that only the net total is compared."""
        old = _agg("Suspense", 2, "150.00", "50.00")
        new = _agg("Suspense", 2, "100.00")
        assert classify_account(old, new) is ChangeType.UNCHANGED


class TestDiffLedger:
    """Tests for comparing a stored ledger with new rows."""

    def test_added_and_removed_accounts(self, row_factory):
        old = {"Prepayments": _agg("Prepayments", 1, "100.00")}
        new_rows = [row_factory("Software", debit="250.00")]

        result = diff_ledger(old, new_rows)

        assert result.unchanged_count == 0
        assert [(c.account_name, c.change_type) for c in result.changes] == [
            ("Prepayments", ChangeType.REMOVED),
            ("Software", ChangeType.ADDED),
        ]
        removed, added = result.changes
        assert removed.old_transaction_count == 1
        assert removed.new_transaction_count == 0
        assert removed.new_net_total == Decimal("0")
        assert added.old_transaction_count == 0
        assert added.old_net_total == Decimal("0")
        assert added.new_net_total == Decimal("250.00")

    def test_unchanged_accounts_are_counted_not_listed(self, row_factory):
        old = {
            "Prepayments": _agg("Prepayments", 1, "100.00"),
            "Sales": _agg("Sales", 1, "0", "500.00"),
        }
        new_rows = [
            row_factory("Prepayments", debit="100.00"),
            row_factory("Sales", credit="450.00"),
        ]

        result = diff_ledger(old, new_rows)

        assert result.unchanged_count == 1
        assert len(result.changes) == 1
        change = result.changes[0]
        assert change.account_name == "Sales"
        assert change.change_type is ChangeType.MODIFIED
        assert change.old_net_total == Decimal("-500.00")
        assert change.new_net_total == Decimal("-450.00")
        assert change.net_change == Decimal("50.00")

    def test_every_account_classified_once(self, row_factory):
        """Test that changed plus unchanged covers the union of accounts."""
        old = {
            "A": _agg("A", 1, "1.00"),
            "B": _agg("B", 1, "2.00"),
            "C": _agg("C", 1, "3.00"),
        }
        new_rows = [
            row_factory("B", debit="2.00"),
            row_factory("C", debit="9.00"),
            row_factory("D", debit="4.00"),
        ]

        result = diff_ledger(old, new_rows)

        names = [c.account_name for c in result.changes]
        assert names == ["A", "C", "D"]
        assert len(names) + result.unchanged_count == 4

    def test_identical_snapshot_has_no_changes(self, row_factory):
        rows = [row_factory("Bank", debit="10.00"), row_factory("Sales", credit="10.00")]
        result = diff_ledger(aggregate_rows(rows), rows)
        assert result.changes == ()
        assert result.unchanged_count == 2

    def test_empty_old_snapshot(self, row_factory):
        result = diff_ledger({}, [row_factory("Bank", debit="10.00")])
        assert [c.change_type for c in result.changes] == [ChangeType.ADDED]


def test_net_total_sign(row_factory):
    """Test that debits are positive and credits negative."""
    aggregates = aggregate_rows(
        [row_factory("Bank", debit="150.00"), row_factory("Sales", credit="150.00")]
    )
    assert aggregates["Bank"].net_total == Decimal("150.00")
    assert aggregates["Sales"].net_total == Decimal("-150.00")
