"""Per-account comparison of two general ledger snapshots."""

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Optional

from glrecon.domain.entities import (
    AccountAggregate,
    AccountChange,
    ChangeType,
    DiffResult,
    LedgerTransactionRow,
)

# Currency rounding tolerance for two-decimal accounting figures
NET_TOLERANCE = Decimal("0.01")

ZERO = Decimal("0")


def aggregate_rows(rows: Iterable[LedgerTransactionRow]) -> dict[str, AccountAggregate]:
    """Group rows by account name in a single pass.

    Args:
        rows: Parsed ledger rows

    Returns:
        Dict of account name to aggregate, in first-seen order
    """
    totals: dict[str, list] = {}
    for row in rows:
        entry = totals.get(row.account_name)
        if entry is None:
            entry = totals[row.account_name] = [0, ZERO, ZERO]
        entry[0] += 1
        entry[1] += row.debit
        entry[2] += row.credit

    return {
        name: AccountAggregate(
            account_name=name,
            transaction_count=count,
            debit_total=debit,
            credit_total=credit,
        )
        for name, (count, debit, credit) in totals.items()
    }


def classify_account(old: Optional[AccountAggregate], new: Optional[AccountAggregate]) -> ChangeType:
    """Classify one account given its old and new aggregates."""
    if old is None and new is None:
        raise ValueError("At least one aggregate is required")
    if old is None:
        return ChangeType.ADDED
    if new is None:
        return ChangeType.REMOVED
    if old.transaction_count != new.transaction_count:
        return ChangeType.MODIFIED
    if abs(old.net_total - new.net_total) > NET_TOLERANCE:
        return ChangeType.MODIFIED
    return ChangeType.UNCHANGED


def diff_ledger(
    old_aggregates: Mapping[str, AccountAggregate],
    new_rows: Iterable[LedgerTransactionRow],
) -> DiffResult:
    """Compare stored per-account aggregates with newly parsed rows.

    Accounts only in the new rows are ``added``, accounts only in the old
    snapshot are ``removed``. Accounts in both are ``modified`` when the
    transaction count differs or the net totals differ by more than
    ``NET_TOLERANCE``; otherwise ``unchanged``. All arithmetic is Decimal.

    Args:
        old_aggregates: Aggregates of the stored ledger keyed by account name
        new_rows: Rows parsed from the new report

    Returns:
        DiffResult with the non-unchanged accounts (old accounts first, in
        their order, then new-only accounts) and the unchanged count
    """
    new_aggregates = aggregate_rows(new_rows)

    names = list(old_aggregates)
    names.extend(name for name in new_aggregates if name not in old_aggregates)

    changes = []
    for name in names:
        old = old_aggregates.get(name)
        new = new_aggregates.get(name)
        change_type = classify_account(old, new)
        if change_type is ChangeType.UNCHANGED:
            continue
        changes.append(
            AccountChange(
                account_name=name,
                change_type=change_type,
                old_transaction_count=old.transaction_count if old else 0,
                new_transaction_count=new.transaction_count if new else 0,
                old_net_total=old.net_total if old else ZERO,
                new_net_total=new.net_total if new else ZERO,
            )
        )

    return DiffResult(changes=tuple(changes), unchanged_count=len(names) - len(changes))
