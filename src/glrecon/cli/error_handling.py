"""CLI error handling helpers."""

import click

from glrecon.domain.entities import ActionFailure
from glrecon.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_action_failure(ctx: click.Context, failure: ActionFailure) -> None:
    """Render a failed upload action and exit with failure."""
    click.echo(f"Error: {failure.error}", err=True)
    ctx.exit(1)
