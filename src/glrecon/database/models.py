"""SQLAlchemy models for glrecon database."""

from datetime import datetime, UTC
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from sqlalchemy import (
    BigInteger,
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session
from sqlalchemy.types import TypeDecorator

from glrecon.domain.entities import Role

Base = declarative_base()

CENT = Decimal("0.01")


class Cents(TypeDecorator):
    """Money column stored as integer minor units.

    Binds Decimal values rounded half-up to the cent and returns Decimal
    with two places, so sums computed by the database are exact on every
    backend.
    """

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value: Optional[Decimal], dialect) -> Optional[int]:
        if value is None:
            return None
        return int(Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP) * 100)

    def process_result_value(self, value: Optional[int], dialect) -> Optional[Decimal]:
        if value is None:
            return None
        return (Decimal(int(value)) / 100).quantize(CENT)


class User(Base):
    """Workbench user model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String(255), unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, name="user_role", values_callable=lambda roles: [r.value for r in roles]),
        default=Role.JUNIOR,
        nullable=False,
    )
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Client(Base):
    """Client (tenant) model."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    code = Column(String(50), unique=True, nullable=False)
    contact_email = Column(String(255), nullable=True)
    contact_name = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    ledger_upload = relationship("LedgerUpload", back_populates="client", uselist=False)


class LedgerUpload(Base):
    """Current general ledger snapshot for a client.

    The unique constraint on client_id keeps at most one upload per client.
    """

    __tablename__ = "ledger_uploads"

    id = Column(Integer, primary_key=True)
    client_id = Column(Integer, ForeignKey("clients.id"), unique=True, nullable=False)
    file_name = Column(String, nullable=False)
    uploaded_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    row_count = Column(Integer, default=0, nullable=False)
    account_count = Column(Integer, default=0, nullable=False)
    date_from = Column(Date, nullable=True)
    date_to = Column(Date, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Never reuse ids of replaced uploads
    __table_args__ = {"sqlite_autoincrement": True}

    # Relationships
    client = relationship("Client", back_populates="ledger_upload")
    transactions = relationship(
        "LedgerTransaction",
        back_populates="upload",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class LedgerTransaction(Base):
    """General ledger line owned by an upload."""

    __tablename__ = "ledger_transactions"

    id = Column(Integer, primary_key=True)
    upload_id = Column(Integer, ForeignKey("ledger_uploads.id", ondelete="CASCADE"), nullable=False)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    account_code = Column(String, nullable=True)
    account_name = Column(String, nullable=False)
    transaction_date = Column(Date, nullable=False)
    source = Column(String, nullable=True)
    description = Column(String, nullable=True)
    reference = Column(String, nullable=True)
    contact = Column(String, nullable=True)
    debit = Column(Cents, default=Decimal("0"), nullable=False)
    credit = Column(Cents, default=Decimal("0"), nullable=False)

    __table_args__ = (
        Index("idx_ledger_transactions_client", "client_id"),
        Index("idx_ledger_transactions_account", "client_id", "account_name"),
        Index("idx_ledger_transactions_date", "client_id", "transaction_date"),
        {"sqlite_autoincrement": True},
    )

    # Relationships
    upload = relationship("LedgerUpload", back_populates="transactions")


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Turn on ON DELETE CASCADE enforcement for SQLite connections."""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
