"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date

# Import entities directly to avoid circular import through domain/__init__.py
from glrecon.domain.entities import (
    AccountAggregate,
    Client,
    LedgerTransaction,
    LedgerUpload,
    ParseResult,
    Role,
    User,
)


class Database(ABC):
    """Abstract database interface for glrecon."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Client operations
    @abstractmethod
    def create_client(
        self,
        name: str,
        code: str,
        contact_email: Optional[str] = None,
        contact_name: Optional[str] = None,
    ) -> int:
        """Create a new client. Returns client ID."""
        pass

    @abstractmethod
    def get_client(self, client_id: int) -> Optional[Client]:
        """Get client by ID."""
        pass

    @abstractmethod
    def get_client_by_code(self, code: str) -> Optional[Client]:
        """Get client by code."""
        pass

    @abstractmethod
    def list_clients(self) -> list[Client]:
        """List all clients."""
        pass

    # User operations
    @abstractmethod
    def create_user(self, email: str, name: str, role: Role) -> int:
        """Create a new user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by e-mail address."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users."""
        pass

    # Ledger snapshot operations
    @abstractmethod
    def get_current_upload(self, client_id: int) -> Optional[LedgerUpload]:
        """Get the client's current ledger upload, if any."""
        pass

    @abstractmethod
    def get_account_aggregates(self, upload_id: int) -> dict[str, AccountAggregate]:
        """Get per-account count and debit/credit sums for an upload.

        Computed with a grouped query over the stored transactions.
        """
        pass

    @abstractmethod
    def replace_ledger(
        self, client_id: int, file_name: str, uploaded_by: int, parse_result: ParseResult
    ) -> LedgerUpload:
        """Atomically replace the client's ledger with newly parsed rows.

        Deletes every existing upload and transaction for the client, inserts
        the new upload and bulk inserts its transactions as one
        all-or-nothing unit.

        Raises:
            NotFoundError: If the client does not exist
            PersistenceError: If the replace could not be applied
        """
        pass

    @abstractmethod
    def delete_ledger(self, client_id: int) -> bool:
        """Delete the client's upload and all its transactions.

        Returns True if an upload was deleted.
        """
        pass

    @abstractmethod
    def list_ledger_transactions(
        self,
        client_id: int,
        account_name: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[LedgerTransaction]:
        """List the client's ledger transactions with optional filters.

        Args:
            client_id: Client ID
            account_name: Optional account name filter
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
        """
        pass

    @abstractmethod
    def count_ledger_transactions(self, client_id: int) -> int:
        """Count the client's stored ledger transactions."""
        pass
