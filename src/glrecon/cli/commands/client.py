"""Client management commands."""

import click
from glrecon.cli.error_handling import handle_domain_error
from glrecon.domain.client import ClientService
from glrecon.domain.errors import DomainError
from glrecon.domain.ledger import LedgerService


@click.group()
def client_group():
    """Manage clients."""
    pass


@client_group.command("create")
@click.argument("name", metavar="CLIENT_NAME")
@click.option("--code", required=True, help="Short unique client code")
@click.option("--email", help="Contact e-mail")
@click.option("--contact", help="Contact name")
@click.pass_context
def create_client(ctx, name: str, code: str, email: str | None, contact: str | None):
    """Create a new client.

    Examples:
        glrecon client create "Acme Ltd" --code ACME
        glrecon client create "Bloggs & Co" --code BLOGGS --email joe@bloggs.example
    """
    db = ctx.obj["db"]
    service = ClientService(db)

    try:
        client_id = service.create_client(
            name=name, code=code, contact_email=email, contact_name=contact
        )
        click.echo(f"Created client '{name}' (ID: {client_id}, code: {code})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@client_group.command("list")
@click.pass_context
def list_clients(ctx):
    """List all clients with their current ledger."""
    db = ctx.obj["db"]
    service = ClientService(db)
    ledger_service = LedgerService(db)

    clients = service.list_clients()
    if not clients:
        click.echo("No clients found.")
        return

    click.echo("\nClients:")
    click.echo("-" * 72)
    for client in clients:
        upload = ledger_service.get_current_upload(client.id)
        ledger = upload.file_name if upload else "no ledger"
        click.echo(f"ID: {client.id:3d} | {client.code:10s} | {client.name:25s} | {ledger}")


def register_commands(cli):
    """Register client commands with main CLI."""
    cli.add_command(client_group, name="client")
