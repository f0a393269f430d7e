"""
Deep Clean Commands - schedule, complete and remove deep-clean tasks.
"""

import logging
from datetime import date, datetime

import typer
from rich.console import Console

from venueaudit.domain.errors import AuditError, InputError
from venueaudit.interface.cli.commands.common import fail, get_container, resolve_id
from venueaudit.interface.cli.formatters.result_formatters import DeepCleanFormatter, print_warnings

logger = logging.getLogger(__name__)
console = Console()

clean_app = typer.Typer(help="✨ Deep-clean schedule", no_args_is_help=True)


def _parse_due(value: str | None, today: date) -> date:
    if not value:
        return today
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise InputError(f"Due date must be YYYY-MM-DD, got {value!r}") from None


@clean_app.command("add")
def add_command(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="e.g. 'Deep clean grill & hood'"),
    due: str = typer.Option(None, "--due", help="Due date YYYY-MM-DD (defaults to today)"),
):
    """Schedule a deep-clean task."""
    try:
        container = get_container(ctx)
        scheduler = container.deep_clean
        task = scheduler.add(title, _parse_due(due, container.clock()))
        console.print(f"[green]✨ Scheduled '{task.title}' for {task.due_date.isoformat()}[/green]")
        print_warnings([scheduler.last_warning])
    except AuditError as e:
        fail(e)


@clean_app.command("list")
def list_command(ctx: typer.Context):
    """List deep-clean tasks, flagging overdue ones."""
    try:
        scheduler = get_container(ctx).deep_clean
        overdue = {task.id for task in scheduler.overdue()}
        DeepCleanFormatter().display(scheduler.tasks(), overdue)
    except AuditError as e:
        fail(e)


@clean_app.command("toggle")
def toggle_command(ctx: typer.Context, task_id: str = typer.Argument(..., help="Task id (prefix ok)")):
    """Mark a task done, or undo it."""
    try:
        scheduler = get_container(ctx).deep_clean
        task = scheduler.toggle(resolve_id(task_id, (t.id for t in scheduler.tasks()), "task"))
        state = "done" if task.done else "not done"
        console.print(f"[green]✓[/green] '{task.title}' marked {state}")
        print_warnings([scheduler.last_warning])
    except AuditError as e:
        fail(e)


@clean_app.command("remove")
def remove_command(ctx: typer.Context, task_id: str = typer.Argument(..., help="Task id (prefix ok)")):
    """Remove a task."""
    try:
        scheduler = get_container(ctx).deep_clean
        task = scheduler.remove(resolve_id(task_id, (t.id for t in scheduler.tasks()), "task"))
        console.print(f"[green]🗑️  Removed '{task.title}'[/green]")
        print_warnings([scheduler.last_warning])
    except AuditError as e:
        fail(e)
