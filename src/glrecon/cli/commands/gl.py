"""General ledger upload commands."""

from decimal import Decimal
from pathlib import Path

import click
from glrecon.cli.client_resolution import get_actor, resolve_client_or_exit
from glrecon.cli.error_handling import handle_action_failure, handle_domain_error
from glrecon.domain.client import ClientService
from glrecon.domain.entities import ActionFailure, ChangeType, FirstUploadPreview, UploadedFile
from glrecon.domain.errors import DomainError
from glrecon.domain.gl_upload import GLUploadService, notify_ledger_changed
from glrecon.domain.ledger import LedgerService
from glrecon.utils.date_parser import parse_period

CHANGE_LABELS = {
    ChangeType.ADDED: "+",
    ChangeType.REMOVED: "-",
    ChangeType.MODIFIED: "~",
}


def _read_upload(file_path: str) -> UploadedFile:
    path = Path(file_path)
    return UploadedFile(file_name=path.name, content=path.read_bytes())


def _upload_service(ctx) -> GLUploadService:
    return GLUploadService(
        ctx.obj["db"], get_actor(ctx), on_ledger_changed=ctx.obj.get("on_ledger_changed")
    )


def _echo_skipped(skipped_rows) -> None:
    if not skipped_rows:
        return
    click.echo(f"  Skipped rows: {len(skipped_rows)}")
    for skipped in skipped_rows:
        click.echo(f"    Row {skipped.row_number}: {skipped.reason}")


def _format_range(date_from, date_to) -> str:
    if date_from is None:
        return "-"
    return f"{date_from.isoformat()} to {date_to.isoformat()}"


@click.group()
def gl_group():
    """Upload and inspect general ledger exports."""
    pass


@gl_group.command("preview")
@click.argument("client", metavar="CLIENT")
@click.argument("report", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def preview(ctx, client: str, report: str):
    """Show what uploading REPORT would change, without saving anything.

    CLIENT can be a client code or ID.
    """
    client_id = resolve_client_or_exit(ctx, ClientService(ctx.obj["db"]), client)
    result = _upload_service(ctx).preview_reupload(client_id, _read_upload(report))
    if isinstance(result, ActionFailure):
        handle_action_failure(ctx, result)
        return

    if isinstance(result, FirstUploadPreview):
        click.echo("\nFirst upload for this client:")
        click.echo(f"  Rows: {result.new_row_count}")
        click.echo(f"  Accounts: {result.new_account_count}")
        click.echo(f"  Dates: {_format_range(result.new_date_from, result.new_date_to)}")
        _echo_skipped(result.skipped_rows)
        return

    click.echo(f"\nReplacing '{result.prior_file_name}':")
    click.echo(f"  Rows: {result.prior_row_count} -> {result.new_row_count}")
    click.echo(f"  Accounts: {result.prior_account_count} -> {result.new_account_count}")
    click.echo(f"  Dates: {_format_range(result.new_date_from, result.new_date_to)}")
    _echo_skipped(result.skipped_rows)

    if not result.changes:
        click.echo(f"\nNo account changes ({result.unchanged_count} unchanged).")
        return

    click.echo(f"\nChanged accounts ({result.unchanged_count} unchanged):")
    click.echo("-" * 80)
    for change in sorted(result.changes, key=lambda c: c.account_name):
        click.echo(
            f"{CHANGE_LABELS[change.change_type]} {change.account_name:30s} "
            f"{change.change_type.value:9s} "
            f"txns {change.old_transaction_count:>5d} -> {change.new_transaction_count:<5d} "
            f"net {change.old_net_total:>12,.2f} -> {change.new_net_total:,.2f}"
        )


@gl_group.command("upload")
@click.argument("client", metavar="CLIENT")
@click.argument("report", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def upload(ctx, client: str, report: str):
    """Replace the client's general ledger with REPORT.

    CLIENT can be a client code or ID. Any previously uploaded ledger for
    the client is deleted.
    """
    client_id = resolve_client_or_exit(ctx, ClientService(ctx.obj["db"]), client)
    result = _upload_service(ctx).commit_upload(client_id, _read_upload(report))
    if isinstance(result, ActionFailure):
        handle_action_failure(ctx, result)
        return

    click.echo("\nUpload complete:")
    click.echo(f"  Rows: {result.row_count}")
    click.echo(f"  Accounts: {result.account_count}")
    click.echo(f"  Dates: {_format_range(result.date_from, result.date_to)}")
    _echo_skipped(result.skipped_rows)


@gl_group.command("status")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def status(ctx, client: str):
    """Show the client's current ledger upload."""
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    current = LedgerService(db).get_current_upload(client_id)
    if current is None:
        click.echo("No general ledger uploaded.")
        return

    click.echo(f"File: {current.file_name}")
    click.echo(f"Uploaded: {current.created_at:%Y-%m-%d %H:%M}")
    click.echo(f"Rows: {current.row_count}")
    click.echo(f"Accounts: {current.account_count}")
    click.echo(f"Dates: {_format_range(current.date_from, current.date_to)}")


@gl_group.command("accounts")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def accounts(ctx, client: str):
    """List per-account totals of the client's ledger."""
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    summary = LedgerService(db).get_account_summary(client_id)
    if not summary:
        click.echo("No general ledger uploaded.")
        return

    click.echo(f"\n{'Account':40s} {'Txns':>6s} {'Debit':>14s} {'Credit':>14s} {'Net':>14s}")
    click.echo("-" * 92)
    for agg in summary:
        click.echo(
            f"{agg.account_name:40s} {agg.transaction_count:>6d} "
            f"{agg.debit_total:>14,.2f} {agg.credit_total:>14,.2f} {agg.net_total:>14,.2f}"
        )


@gl_group.command("movements")
@click.argument("client", metavar="CLIENT")
@click.argument("account_name", metavar="ACCOUNT")
@click.option("--period", required=True, help="Month as YYYY-MM")
@click.pass_context
def movements(ctx, client: str, account_name: str, period: str):
    """List ledger lines for ACCOUNT within a month.

    Examples:
        glrecon gl movements ACME "Prepayments" --period 2026-02
    """
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    try:
        year, month = parse_period(period)
        lines = LedgerService(db).get_account_movements(client_id, account_name, year, month)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return

    if not lines:
        click.echo("No movements found.")
        return

    for txn in lines:
        click.echo(
            f"{txn.transaction_date.isoformat()} | {(txn.description or ''):35s} | "
            f"{(txn.reference or ''):12s} | {txn.debit:>12,.2f} | {txn.credit:>12,.2f}"
        )
    total = sum((txn.net for txn in lines), Decimal("0"))
    click.echo(f"Net movement: {total:,.2f}")


@gl_group.command("delete")
@click.argument("client", metavar="CLIENT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete(ctx, client: str, yes: bool):
    """Delete the client's general ledger."""
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)

    if not yes and not click.confirm(
        f"Are you sure you want to delete the general ledger of client {client_id}?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        LedgerService(db).delete_ledger(client_id, get_actor(ctx))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    notify_ledger_changed(ctx.obj.get("on_ledger_changed"), client_id)
    click.echo("Deleted general ledger.")


def register_commands(cli):
    """Register general ledger commands with main CLI."""
    cli.add_command(gl_group, name="gl")
