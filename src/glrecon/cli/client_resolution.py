"""CLI helpers for client and actor resolution."""

from __future__ import annotations

from typing import Optional

import click
from glrecon.domain.client import ClientService
from glrecon.domain.entities import User
from glrecon.domain.user import UserService
from glrecon.utils.client_resolver import resolve_client


def resolve_client_or_exit(ctx: click.Context, client_service: ClientService, client: str) -> int:
    """Resolve client code or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_client(client_service, client)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def get_actor(ctx: click.Context) -> Optional[User]:
    """Return the user named by --user / GLRECON_USER, if any."""
    email = ctx.obj.get("user_email")
    if not email:
        return None
    return UserService(ctx.obj["db"]).get_user_by_email(email)
