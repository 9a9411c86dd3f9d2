"""Domain model entities for glrecon.

These are pure data classes representing business concepts, independent of
database schema. Parsed rows, diff output and action results live here too
so that the parser, diff engine and orchestrator share one vocabulary.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class Role(str, Enum):
    """User role, ordered junior < manager < admin."""

    JUNIOR = "junior"
    MANAGER = "manager"
    ADMIN = "admin"


@dataclass(frozen=True)
class Client:
    """Client (tenant) domain entity."""

    id: int
    name: str
    code: str
    contact_email: Optional[str]
    contact_name: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class User:
    """Workbench user domain entity."""

    id: int
    email: str
    name: str
    role: Role
    created_at: datetime


@dataclass(frozen=True)
class LedgerUpload:
    """The current ledger snapshot stored for a client."""

    id: int
    client_id: int
    file_name: str
    uploaded_by: int
    row_count: int
    account_count: int
    date_from: Optional[date]
    date_to: Optional[date]
    created_at: datetime


@dataclass(frozen=True)
class LedgerTransaction:
    """Persisted general ledger line."""

    id: int
    upload_id: int
    client_id: int
    account_code: Optional[str]
    account_name: str
    transaction_date: date
    source: Optional[str]
    description: Optional[str]
    reference: Optional[str]
    contact: Optional[str]
    debit: Decimal
    credit: Decimal

    @property
    def net(self) -> Decimal:
        return self.debit - self.credit


@dataclass(frozen=True)
class LedgerTransactionRow:
    """A typed ledger line produced by the report parser."""

    account_name: str
    transaction_date: date
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")
    account_code: Optional[str] = None
    source: Optional[str] = None
    description: Optional[str] = None
    reference: Optional[str] = None
    contact: Optional[str] = None

    @property
    def net(self) -> Decimal:
        """Debit minus credit."""
        return self.debit - self.credit


@dataclass(frozen=True)
class SkippedRow:
    """A sheet row that looked like a transaction but could not be mapped."""

    row_number: int
    reason: str


@dataclass(frozen=True)
class ParseResult:
    """Rows and summary metadata parsed from a GL report."""

    rows: tuple[LedgerTransactionRow, ...]
    account_count: int
    date_from: Optional[date]
    date_to: Optional[date]
    accounts: tuple[str, ...]
    skipped_rows: tuple[SkippedRow, ...] = ()

    @property
    def row_count(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class AccountAggregate:
    """Per-account rollup used for diffing and summaries."""

    account_name: str
    transaction_count: int
    debit_total: Decimal
    credit_total: Decimal

    @property
    def net_total(self) -> Decimal:
        """Debit total minus credit total."""
        return self.debit_total - self.credit_total


class ChangeType(str, Enum):
    """Classification of an account between two ledger snapshots."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class AccountChange:
    """Before/after comparison for one account."""

    account_name: str
    change_type: ChangeType
    old_transaction_count: int
    new_transaction_count: int
    old_net_total: Decimal
    new_net_total: Decimal

    @property
    def net_change(self) -> Decimal:
        return self.new_net_total - self.old_net_total


@dataclass(frozen=True)
class DiffResult:
    """Changed accounts plus the number of unchanged ones."""

    changes: tuple[AccountChange, ...]
    unchanged_count: int


@dataclass(frozen=True)
class UploadedFile:
    """An uploaded report as received from the caller."""

    file_name: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class FirstUploadPreview:
    """Preview result when the client has no ledger yet."""

    new_row_count: int
    new_account_count: int
    new_date_from: Optional[date]
    new_date_to: Optional[date]
    skipped_rows: tuple[SkippedRow, ...] = ()
    is_first_upload: bool = field(default=True, init=False)
    is_reupload: bool = field(default=False, init=False)


@dataclass(frozen=True)
class ReuploadPreview:
    """Preview result comparing a new report with the stored ledger."""

    prior_file_name: str
    prior_row_count: int
    prior_account_count: int
    new_row_count: int
    new_account_count: int
    new_date_from: Optional[date]
    new_date_to: Optional[date]
    changes: tuple[AccountChange, ...]
    unchanged_count: int
    skipped_rows: tuple[SkippedRow, ...] = ()
    is_first_upload: bool = field(default=False, init=False)
    is_reupload: bool = field(default=True, init=False)


@dataclass(frozen=True)
class CommitResult:
    """Outcome of a committed upload."""

    upload_id: int
    row_count: int
    account_count: int
    date_from: Optional[date]
    date_to: Optional[date]
    accounts: tuple[str, ...]
    skipped_rows: tuple[SkippedRow, ...] = ()


@dataclass(frozen=True)
class ActionFailure:
    """Uniform failure shape returned by upload actions.

    ``code`` is one of ``access_denied``, ``validation``, ``not_found``,
    ``format`` or ``persistence``.
    """

    error: str
    code: str

    @property
    def access_denied(self) -> bool:
        return self.code == "access_denied"
