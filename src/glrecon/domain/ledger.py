"""Ledger read side: upload status, account summaries and period movements."""

import logging
from typing import Optional

from glrecon.database.base import Database
from glrecon.domain.authorization import require_role
from glrecon.domain.entities import (
    AccountAggregate,
    LedgerTransaction,
    LedgerUpload,
    Role,
    User,
)
from glrecon.domain.errors import (
    NotFoundError,
    ValidationError,
    client_not_found,
    no_ledger_for_client,
)
from glrecon.utils.date_parser import get_month_range

logger = logging.getLogger(__name__)


class LedgerService:
    """Service for reading and removing a client's stored ledger."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_current_upload(self, client_id: int) -> Optional[LedgerUpload]:
        """Get the client's current ledger upload, or None."""
        return self.db.get_current_upload(client_id)

    def get_account_summary(self, client_id: int) -> list[AccountAggregate]:
        """Get per-account totals of the client's current ledger.

        Args:
            client_id: Client ID

        Returns:
            Aggregates sorted by account name; empty when there is no upload
        """
        upload = self.db.get_current_upload(client_id)
        if upload is None:
            return []
        aggregates = self.db.get_account_aggregates(upload.id)
        return sorted(aggregates.values(), key=lambda agg: agg.account_name)

    def get_account_movements(
        self, client_id: int, account_name: str, year: int, month: int
    ) -> list[LedgerTransaction]:
        """Get ledger lines for one account within a calendar month.

        Args:
            client_id: Client ID
            account_name: Account name as it appears in the ledger
            year: Period year
            month: Period month (1-12)

        Returns:
            Transactions ordered by date

        Raises:
            ValidationError: If month is out of range
        """
        try:
            start_date, end_date = get_month_range(year, month)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        return self.db.list_ledger_transactions(
            client_id,
            account_name=account_name,
            start_date=start_date,
            end_date=end_date,
        )

    def delete_ledger(self, client_id: int, actor: Optional[User]) -> None:
        """Remove the client's ledger entirely.

        Raises:
            AuthorizationError: If actor is below manager
            NotFoundError: If the client or its ledger does not exist
        """
        require_role(actor, Role.MANAGER)
        if self.db.get_client(client_id) is None:
            raise NotFoundError(client_not_found(client_id))
        if not self.db.delete_ledger(client_id):
            raise NotFoundError(no_ledger_for_client(client_id))
        logger.info("User %s deleted the ledger of client %s", actor.id, client_id)
