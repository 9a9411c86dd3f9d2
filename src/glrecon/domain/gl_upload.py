"""General ledger upload domain service.

Two actions share the same guards: ``preview_reupload`` parses a report and
compares it with the stored ledger without writing anything, and
``commit_upload`` parses the report again and atomically replaces the
client's ledger. Nothing is carried over from a preview to a commit.
"""

import logging
from typing import Callable, Optional, Union

from glrecon.database.base import Database
from glrecon.domain.authorization import require_role
from glrecon.domain.entities import (
    ActionFailure,
    CommitResult,
    FirstUploadPreview,
    ParseResult,
    ReuploadPreview,
    Role,
    UploadedFile,
    User,
)
from glrecon.domain.errors import (
    DomainError,
    FormatError,
    NotFoundError,
    PersistenceError,
    ValidationError,
    client_not_found,
    file_too_large,
    no_transactions_found,
)
from glrecon.domain.gl_parser import parse_gl_report
from glrecon.domain.ledger_diff import diff_ledger

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 50 * 1024 * 1024  # 50 MB

PreviewOutcome = Union[FirstUploadPreview, ReuploadPreview, ActionFailure]
CommitOutcome = Union[CommitResult, ActionFailure]


def notify_ledger_changed(
    callback: Optional[Callable[[int], None]], client_id: int
) -> None:
    """Fire a ledger change callback; a failing callback is logged, never raised."""
    if callback is None:
        return
    try:
        callback(client_id)
    except Exception:
        logger.exception("Ledger change notification failed for client %s", client_id)


class GLUploadService:
    """Service for previewing and committing general ledger uploads."""

    def __init__(
        self,
        db: Database,
        actor: Optional[User],
        on_ledger_changed: Optional[Callable[[int], None]] = None,
        max_file_size: int = MAX_FILE_SIZE,
    ):
        """Initialize GL upload service.

        Args:
            db: Database instance
            actor: User performing the action (None when unauthenticated)
            on_ledger_changed: Called with the client ID after a successful
                commit so dependent views can refresh
            max_file_size: Largest accepted upload in bytes
        """
        self.db = db
        self.actor = actor
        self.on_ledger_changed = on_ledger_changed
        self.max_file_size = max_file_size

    def preview_reupload(self, client_id: int, file: Optional[UploadedFile]) -> PreviewOutcome:
        """Dry-run an upload and report what would change.

        Args:
            client_id: Client ID
            file: Uploaded report

        Returns:
            FirstUploadPreview when the client has no ledger yet,
            ReuploadPreview with per-account changes otherwise, or
            ActionFailure
        """
        try:
            parse_result = self._parse_checked(client_id, file)

            current = self.db.get_current_upload(client_id)
            if current is None:
                return FirstUploadPreview(
                    new_row_count=parse_result.row_count,
                    new_account_count=parse_result.account_count,
                    new_date_from=parse_result.date_from,
                    new_date_to=parse_result.date_to,
                    skipped_rows=parse_result.skipped_rows,
                )

            old_aggregates = self.db.get_account_aggregates(current.id)
            diff = diff_ledger(old_aggregates, parse_result.rows)
        except DomainError as e:
            return self._failure(e)

        return ReuploadPreview(
            prior_file_name=current.file_name,
            prior_row_count=current.row_count,
            prior_account_count=current.account_count,
            new_row_count=parse_result.row_count,
            new_account_count=parse_result.account_count,
            new_date_from=parse_result.date_from,
            new_date_to=parse_result.date_to,
            changes=diff.changes,
            unchanged_count=diff.unchanged_count,
            skipped_rows=parse_result.skipped_rows,
        )

    def commit_upload(self, client_id: int, file: Optional[UploadedFile]) -> CommitOutcome:
        """Parse a report and replace the client's ledger with it.

        Args:
            client_id: Client ID
            file: Uploaded report

        Returns:
            CommitResult describing the new ledger, or ActionFailure
        """
        try:
            parse_result = self._parse_checked(client_id, file)
            upload = self.db.replace_ledger(
                client_id=client_id,
                file_name=file.file_name,
                uploaded_by=self.actor.id,
                parse_result=parse_result,
            )
        except DomainError as e:
            return self._failure(e)

        logger.info(
            "User %s uploaded '%s' for client %s: %d rows, %d accounts",
            self.actor.id,
            file.file_name,
            client_id,
            upload.row_count,
            upload.account_count,
        )
        notify_ledger_changed(self.on_ledger_changed, client_id)

        return CommitResult(
            upload_id=upload.id,
            row_count=upload.row_count,
            account_count=upload.account_count,
            date_from=upload.date_from,
            date_to=upload.date_to,
            accounts=parse_result.accounts,
            skipped_rows=parse_result.skipped_rows,
        )

    def _parse_checked(self, client_id: int, file: Optional[UploadedFile]) -> ParseResult:
        """Run the shared guards and parse the report.

        Raises:
            AuthorizationError: If the actor is below manager
            ValidationError: If inputs are missing or the file is too large
            NotFoundError: If the client does not exist
            FormatError: If the file is unreadable or has no transactions
        """
        require_role(self.actor, Role.MANAGER)

        if not client_id or file is None:
            raise ValidationError("Client and file are required")
        if file.size > self.max_file_size:
            raise ValidationError(file_too_large(self.max_file_size))
        if self.db.get_client(client_id) is None:
            raise NotFoundError(client_not_found(client_id))

        parse_result = parse_gl_report(file.content)
        if parse_result.row_count == 0:
            raise FormatError(no_transactions_found())
        return parse_result

    @staticmethod
    def _failure(error: DomainError) -> ActionFailure:
        if isinstance(error, PersistenceError):
            # Cause is logged by the store
            return ActionFailure(
                error="Failed to save the general ledger. Please try again.", code=error.code
            )
        return ActionFailure(error=str(error), code=error.code)
