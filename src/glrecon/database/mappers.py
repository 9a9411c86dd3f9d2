"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so storage details such as
integer-cent money columns never leak into the domain.
"""

from glrecon.domain import entities as domain
from glrecon.database.models import (
    Client as ORMClient,
    User as ORMUser,
    LedgerUpload as ORMLedgerUpload,
    LedgerTransaction as ORMLedgerTransaction,
)


def client_to_domain(orm_client: ORMClient) -> domain.Client:
    """Convert SQLAlchemy Client model to domain Client entity."""
    return domain.Client(
        id=orm_client.id,
        name=orm_client.name,
        code=orm_client.code,
        contact_email=orm_client.contact_email,
        contact_name=orm_client.contact_name,
        created_at=orm_client.created_at,
    )


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        email=orm_user.email,
        name=orm_user.name,
        role=domain.Role(orm_user.role),
        created_at=orm_user.created_at,
    )


def ledger_upload_to_domain(orm_upload: ORMLedgerUpload) -> domain.LedgerUpload:
    """Convert SQLAlchemy LedgerUpload model to domain LedgerUpload entity."""
    return domain.LedgerUpload(
        id=orm_upload.id,
        client_id=orm_upload.client_id,
        file_name=orm_upload.file_name,
        uploaded_by=orm_upload.uploaded_by,
        row_count=orm_upload.row_count,
        account_count=orm_upload.account_count,
        date_from=orm_upload.date_from,
        date_to=orm_upload.date_to,
        created_at=orm_upload.created_at,
    )


def ledger_transaction_to_domain(orm_txn: ORMLedgerTransaction) -> domain.LedgerTransaction:
    """Convert SQLAlchemy LedgerTransaction model to domain LedgerTransaction entity."""
    return domain.LedgerTransaction(
        id=orm_txn.id,
        upload_id=orm_txn.upload_id,
        client_id=orm_txn.client_id,
        account_code=orm_txn.account_code,
        account_name=orm_txn.account_name,
        transaction_date=orm_txn.transaction_date,
        source=orm_txn.source,
        description=orm_txn.description,
        reference=orm_txn.reference,
        contact=orm_txn.contact,
        debit=orm_txn.debit,
        credit=orm_txn.credit,
    )


def row_to_insert_values(
    row: domain.LedgerTransactionRow, upload_id: int, client_id: int
) -> dict:
    """Convert a parsed row to a column dict for bulk insertion."""
    return {
        "upload_id": upload_id,
        "client_id": client_id,
        "account_code": row.account_code,
        "account_name": row.account_name,
        "transaction_date": row.transaction_date,
        "source": row.source,
        "description": row.description,
        "reference": row.reference,
        "contact": row.contact,
        "debit": row.debit,
        "credit": row.credit,
    }
