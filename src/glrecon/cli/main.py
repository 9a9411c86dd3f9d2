"""Main CLI entry point."""

import logging

import click
from glrecon import __version__
from glrecon.database.factories import create_database

# Import and register all commands at module level
from glrecon.cli.commands import client, gl, user

logger = logging.getLogger(__name__)


def _log_ledger_changed(client_id: int) -> None:
    """Default ledger change notification for the CLI."""
    logger.info("General ledger for client %s changed", client_id)


@click.group()
@click.version_option(version=__version__, prog_name="glrecon")
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides GLRECON_DB_PATH environment variable)",
    envvar="GLRECON_DB_PATH",
)
@click.option(
    "--user",
    "user_email",
    help="E-mail of the acting user (overrides GLRECON_USER environment variable)",
    envvar="GLRECON_USER",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, user_email: str | None, verbose: bool):
    """glrecon - General ledger reconciliation workbench.

    Upload general ledger exports per client, preview how a re-upload
    changes each account, and inspect the stored ledger.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["user_email"] = user_email
        ctx.obj.setdefault("on_ledger_changed", _log_ledger_changed)
        ctx.call_on_close(db.disconnect)


# Register all commands
client.register_commands(cli)
user.register_commands(cli)
gl.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
