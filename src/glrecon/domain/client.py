"""Client domain service."""

from typing import Optional
from glrecon.database.base import Database
from glrecon.domain.entities import Client as ClientEntity
from glrecon.domain.errors import ConflictError, ValidationError, duplicate_client_code


class ClientService:
    """Service for managing clients."""

    def __init__(self, db: Database):
        """Initialize client service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_client(
        self,
        name: str,
        code: str,
        contact_email: Optional[str] = None,
        contact_name: Optional[str] = None,
    ) -> int:
        """Create a new client.

        Args:
            name: Client name
            code: Short unique client code
            contact_email: Optional contact e-mail
            contact_name: Optional contact name

        Returns:
            Client ID

        Raises:
            ValidationError: If name or code is blank
            ConflictError: If client code already exists
        """
        name = name.strip()
        code = code.strip()
        if not name:
            raise ValidationError("Client name is required")
        if not code:
            raise ValidationError("Client code is required")

        if self.db.get_client_by_code(code) is not None:
            raise ConflictError(duplicate_client_code(code))

        return self.db.create_client(
            name=name, code=code, contact_email=contact_email, contact_name=contact_name
        )

    def get_client(self, client_id: int) -> Optional[ClientEntity]:
        """Get client by ID.

        Args:
            client_id: Client ID

        Returns:
            Client entity or None if not found
        """
        return self.db.get_client(client_id)

    def get_client_by_code(self, code: str) -> Optional[ClientEntity]:
        """Get client by code."""
        return self.db.get_client_by_code(code)

    def list_clients(self) -> list[ClientEntity]:
        """List all clients.

        Returns:
            List of client entities
        """
        return self.db.list_clients()
