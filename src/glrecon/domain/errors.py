"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. ``code`` is the failure
    category reported in action results.
    """

    code = "validation"


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""

    code = "not_found"


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class FormatError(DomainError):
    """File is not a recognizable general ledger export."""

    code = "format"


class AuthorizationError(DomainError):
    """Actor lacks the role required for an operation."""

    code = "access_denied"


class PersistenceError(DomainError):
    """Storage failure while writing ledger data."""

    code = "persistence"


GL_EXPORT_HINT = "Check it's a Xero General Ledger (Detailed) export."


def client_not_found(client_id: int) -> str:
    """Return message for missing client."""
    return f"Client {client_id} not found"


def user_not_found(user_id: int) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def duplicate_client_code(code: str) -> str:
    """Return message for duplicate client code."""
    return f"Client with code '{code}' already exists"


def duplicate_user_email(email: str) -> str:
    """Return message for duplicate user e-mail."""
    return f"User with email '{email}' already exists"


def role_required(role: str) -> str:
    """Return message when the actor's role is too low."""
    return f"Access denied: {role} role or above required"


def file_too_large(max_size: int) -> str:
    """Return message for an oversized upload."""
    return f"File too large (max {max_size // (1024 * 1024)} MB)"


def no_transactions_found() -> str:
    """Return message for a report that yields zero rows."""
    return f"No transactions found in the file. {GL_EXPORT_HINT}"


def no_ledger_for_client(client_id: int) -> str:
    """Return message when a client has no ledger upload."""
    return f"Client {client_id} has no general ledger upload"
