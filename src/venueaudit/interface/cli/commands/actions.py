"""
Action Commands - work the remediation action list.
"""

import logging

import typer
from rich.console import Console

from venueaudit.application.action_service import ActionTracker
from venueaudit.domain.errors import AuditError
from venueaudit.domain.models import ActionItem
from venueaudit.interface.cli.commands.common import fail, get_container, resolve_id
from venueaudit.interface.cli.formatters.result_formatters import ActionFormatter

logger = logging.getLogger(__name__)
console = Console()

actions_app = typer.Typer(help="🛠️  Remediation actions", no_args_is_help=True)


@actions_app.command("list")
def list_command(
    ctx: typer.Context,
    open_only: bool = typer.Option(False, "--open", help="Hide actions that are Done"),
    venue: str = typer.Option(None, "--venue", help="Only actions for this venue"),
):
    """List remediation actions, newest first."""
    try:
        tracker = get_container(ctx).action_tracker
        items = tracker.list_actions(open_only=open_only, venue=venue)
        late = {item.id for item in items if tracker.is_late(item)}
        ActionFormatter().display(items, late_ids=late)
    except AuditError as e:
        fail(e)


def _transition(ctx: typer.Context, action_id: str, move) -> ActionItem:
    tracker: ActionTracker = get_container(ctx).action_tracker
    full_id = resolve_id(action_id, (a.id for a in tracker.list_actions()), "action")
    return move(tracker, full_id)


@actions_app.command("start")
def start_command(ctx: typer.Context, action_id: str = typer.Argument(..., help="Action id (prefix ok)")):
    """Mark an action In Progress."""
    try:
        item = _transition(ctx, action_id, ActionTracker.start)
        console.print(f"[blue]▶️  {item.checkpoint_text}: {item.status.value}[/blue]")
    except AuditError as e:
        fail(e)


@actions_app.command("close")
def close_command(ctx: typer.Context, action_id: str = typer.Argument(..., help="Action id (prefix ok)")):
    """Mark an action Done."""
    try:
        item = _transition(ctx, action_id, ActionTracker.close)
        console.print(f"[green]✅ {item.checkpoint_text}: {item.status.value}[/green]")
    except AuditError as e:
        fail(e)


@actions_app.command("reopen")
def reopen_command(ctx: typer.Context, action_id: str = typer.Argument(..., help="Action id (prefix ok)")):
    """Move an action back to Open."""
    try:
        item = _transition(ctx, action_id, ActionTracker.reopen)
        console.print(f"[yellow]↩️  {item.checkpoint_text}: {item.status.value}[/yellow]")
    except AuditError as e:
        fail(e)
