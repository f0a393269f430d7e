"""
History Commands - list, export and import finalized audits.
"""

import logging
from pathlib import Path

import typer
from rich.console import Console

from venueaudit.domain.errors import AuditError
from venueaudit.interface.cli.commands.common import fail, get_container
from venueaudit.interface.cli.formatters.result_formatters import AuditHistoryFormatter

logger = logging.getLogger(__name__)
console = Console()

history_app = typer.Typer(help="🗂️  Finalized audit history", no_args_is_help=True)


@history_app.command("list")
def list_command(
    ctx: typer.Context,
    venue: str = typer.Option(None, "--venue", help="Only audits for this venue"),
):
    """List finalized audits."""
    try:
        service = get_container(ctx).history_service
        AuditHistoryFormatter().display(service.list_audits(venue))
        summary = service.summary(venue)
        if summary["total"]:
            bands = summary["bands"]
            console.print(
                f"[blue]📊 {summary['total']} audit(s): "
                f"{bands['green']} green, {bands['amber']} amber, {bands['red']} red[/blue]"
            )
    except AuditError as e:
        fail(e)


@history_app.command("export")
def export_command(
    ctx: typer.Context,
    path: Path = typer.Argument(Path("auditHistory.json"), help="Destination JSON file"),
):
    """Export the whole history as a JSON document."""
    try:
        count = get_container(ctx).history_service.export_document(path)
        console.print(f"[green]⬇️  Exported {count} audit(s) to {path}[/green]")
    except (AuditError, OSError) as e:
        fail(e)


@history_app.command("import")
def import_command(
    ctx: typer.Context,
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON document to import"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Replace the whole history with a JSON document."""
    if not yes:
        typer.confirm("Importing replaces the existing history. Continue?", abort=True)
    try:
        count = get_container(ctx).history_service.import_document(path)
        console.print(f"[green]⬆️  Imported {count} audit(s) from {path}[/green]")
    except AuditError as e:
        fail(e)
