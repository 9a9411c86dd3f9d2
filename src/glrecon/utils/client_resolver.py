"""Utility for resolving client codes to IDs."""

from glrecon.domain.client import ClientService


def resolve_client(client_service: ClientService, client: str | int) -> int:
    """Resolve client code or ID to client ID.

    Args:
        client_service: ClientService instance
        client: Client code (str) or ID (int or string representation of int)

    Returns:
        Client ID

    Raises:
        ValueError: If client is not found
    """
    # Codes take precedence, since a client code may itself be numeric
    if isinstance(client, str):
        client_obj = client_service.get_client_by_code(client.strip())
        if client_obj is not None:
            return client_obj.id

    try:
        client_id = int(client)
    except (ValueError, TypeError):
        raise ValueError(f"Client '{client}' not found")

    client_obj = client_service.get_client(client_id)
    if client_obj is None:
        raise ValueError(f"Client ID {client_id} not found")
    return client_id
