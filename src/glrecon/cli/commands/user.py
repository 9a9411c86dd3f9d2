"""User management commands."""

import click
from glrecon.cli.error_handling import handle_domain_error
from glrecon.domain.entities import Role
from glrecon.domain.errors import DomainError
from glrecon.domain.user import UserService


@click.group()
def user_group():
    """Manage users."""
    pass


@user_group.command("create")
@click.argument("email", metavar="EMAIL")
@click.option("--name", required=True, help="Display name")
@click.option(
    "--role",
    type=click.Choice([r.value for r in Role]),
    default=Role.JUNIOR.value,
    show_default=True,
    help="Workbench role",
)
@click.pass_context
def create_user(ctx, email: str, name: str, role: str):
    """Create a new user.

    Examples:
        glrecon user create jane@example.com --name "Jane Doe" --role manager
    """
    db = ctx.obj["db"]
    service = UserService(db)

    try:
        user_id = service.create_user(email=email, name=name, role=Role(role))
        click.echo(f"Created user '{email}' (ID: {user_id}, role: {role})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@user_group.command("list")
@click.pass_context
def list_users(ctx):
    """List all users."""
    db = ctx.obj["db"]
    users = UserService(db).list_users()
    if not users:
        click.echo("No users found.")
        return

    click.echo("\nUsers:")
    click.echo("-" * 60)
    for user in users:
        click.echo(f"ID: {user.id:3d} | {user.email:30s} | {user.role.value}")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
