"""Shared pytest fixtures for glrecon tests."""

import io
import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest
from openpyxl import Workbook

from glrecon.database.factories import create_sqlite_database
from glrecon.domain.client import ClientService
from glrecon.domain.entities import LedgerTransactionRow, Role, UploadedFile
from glrecon.domain.user import UserService

GL_HEADER = [
    "Date",
    "Source",
    "Contact",
    "Description",
    "Reference",
    "Debit",
    "Credit",
    "Running Balance",
]


def build_gl_workbook(accounts: dict[str, list[tuple]]) -> bytes:
    """Build a Xero-style "General Ledger (Detailed)" workbook.

    Args:
        accounts: Mapping of account header ("620 - Prepayments") to lines of
            (date, description, debit, credit); None leaves a cell empty.
    """
    wb = Workbook()
    ws = wb.active
    ws.append(["General Ledger (Detailed)"])
    ws.append(["Test Client Ltd"])
    ws.append(["For the period 1 January 2026 to 28 February 2026"])
    ws.append([])
    ws.append(GL_HEADER)
    for account, lines in accounts.items():
        ws.append([account])
        ws.append(["Opening Balance", None, None, None, None, None, None, 0])
        for txn_date, description, debit, credit in lines:
            ws.append([txn_date, "Manual Journal", "Supplier Ltd", description, "REF", debit, credit, None])
        ws.append([f"Total {account}", None, None, None, None, None, None, None])
        ws.append([])
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def make_row(account_name: str, debit: str = "0", credit: str = "0", day: int = 1) -> LedgerTransactionRow:
    """Build a parsed ledger row for store and diff tests."""
    return LedgerTransactionRow(
        account_code="100",
        account_name=account_name,
        transaction_date=date(2026, 2, day),
        debit=Decimal(debit),
        credit=Decimal(credit),
        description=f"{account_name} line",
    )


SAMPLE_ACCOUNTS = {
    "620 - Prepayments": [
        (date(2026, 2, 1), "Prepayment release", None, 41.58),
        (date(2026, 2, 15), "Annual insurance", 1200, None),
    ],
    "485 - Software": [
        (date(2026, 1, 31), "Licence renewal", 250.5, None),
    ],
    "200 - Sales": [
        (date(2026, 2, 20), "Invoice INV-001", None, 1000),
    ],
}


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def client_service(temp_db):
    """Create a ClientService with a temporary database."""
    return ClientService(temp_db)


@pytest.fixture
def user_service(temp_db):
    """Create a UserService with a temporary database."""
    return UserService(temp_db)


@pytest.fixture
def sample_client(client_service):
    """Create a sample client for testing."""
    client_id = client_service.create_client(name="Test Client Ltd", code="TEST")
    return client_service.get_client(client_id)


@pytest.fixture
def other_client(client_service):
    """Create a second client for isolation tests."""
    client_id = client_service.create_client(name="Other Client Ltd", code="OTHER")
    return client_service.get_client(client_id)


@pytest.fixture
def manager(user_service):
    """Create a manager user."""
    user_id = user_service.create_user("manager@example.com", "Mia Manager", Role.MANAGER)
    return user_service.get_user(user_id)


@pytest.fixture
def admin(user_service):
    """Create an admin user."""
    user_id = user_service.create_user("admin@example.com", "Ada Admin", Role.ADMIN)
    return user_service.get_user(user_id)


@pytest.fixture
def junior(user_service):
    """Create a junior user."""
    user_id = user_service.create_user("junior@example.com", "Jo Junior", Role.JUNIOR)
    return user_service.get_user(user_id)


@pytest.fixture
def gl_workbook():
    """Return the workbook builder."""
    return build_gl_workbook


@pytest.fixture
def sample_gl_file():
    """Sample GL export with three accounts and four transactions."""
    return UploadedFile(file_name="gl-feb-2026.xlsx", content=build_gl_workbook(SAMPLE_ACCOUNTS))


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def sample_accounts():
    """Account sections of the sample GL export."""
    return SAMPLE_ACCOUNTS


@pytest.fixture
def row_factory():
    """Return the parsed row builder."""
    return make_row
