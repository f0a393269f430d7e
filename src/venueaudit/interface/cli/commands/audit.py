"""
Audit Commands - draft lifecycle and finalization.

Every invocation recovers the draft from its slot, applies one change and
writes it straight back.
"""

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console

from venueaudit.domain.errors import AuditError, InputError
from venueaudit.domain.models import Rating
from venueaudit.interface.cli.commands.common import fail, get_container, load_session
from venueaudit.interface.cli.formatters.result_formatters import (
    DraftFormatter,
    FinalizeFormatter,
    print_warnings,
)

logger = logging.getLogger(__name__)
console = Console()

audit_app = typer.Typer(
    help="📋 Record, review and finalize the audit in progress",
    no_args_is_help=True,
)


@audit_app.command("start")
def start_command(
    ctx: typer.Context,
    venue: str = typer.Option(None, "--venue", help="Venue to audit (defaults to the first configured venue)"),
    period: str = typer.Option(None, "--period", help="Year-month being audited, YYYY-MM (defaults to this month)"),
    fresh: bool = typer.Option(False, "--fresh", help="Discard any saved draft and start over"),
):
    """
    Start an audit, or resume the saved draft.

    A saved draft always wins over starting fresh unless --fresh is given.
    """
    container = get_container(ctx)
    try:
        settings = container.settings
        venue = venue or settings.venues[0]
        if venue not in settings.venues:
            raise InputError(f"Unknown venue {venue!r}. Configured: {', '.join(settings.venues)}")
        period = period or container.clock().strftime("%Y-%m")

        session = container.draft_session
        recovered = None if fresh else session.recover()
        if recovered is not None:
            console.print(
                f"[blue]↩️  Resuming saved draft for {recovered.venue} • {recovered.period}[/blue] "
                "[dim](use --fresh to start over)[/dim]"
            )
        else:
            session.start(venue, period)
            console.print(f"[green]▶️  Started audit for {venue} • {period}[/green]")
        print_warnings([session.last_warning])
        DraftFormatter().display(session)
    except (AuditError, ValueError) as e:
        fail(e)


@audit_app.command("show")
def show_command(ctx: typer.Context):
    """Show the draft with section progress."""
    try:
        DraftFormatter().display(load_session(get_container(ctx)))
    except AuditError as e:
        fail(e)


@audit_app.command("rate")
def rate_command(
    ctx: typer.Context,
    index: int = typer.Argument(..., help="Row number from `audit show`"),
    rating: str = typer.Argument(..., help="Pass, Minor, Major, Critical or N/A"),
):
    """Rate one checkpoint."""
    try:
        parsed = Rating.from_string(rating)
        if parsed is None:
            raise InputError(f"Unknown rating {rating!r}. Use Pass, Minor, Major, Critical or N/A")
        session = load_session(get_container(ctx))
        row = session.set_rating(index, parsed)
        console.print(f"[green]✓[/green] {row.checkpoint_text} → {row.rating.value}")
        if session.requires_evidence(index) and not row.has_evidence:
            console.print("[yellow]📷 Photo required for this checkpoint[/yellow]")
        print_warnings([session.last_warning])
    except AuditError as e:
        fail(e)


@audit_app.command("note")
def note_command(
    ctx: typer.Context,
    index: int = typer.Argument(..., help="Row number from `audit show`"),
    text: str = typer.Argument("", help="Notes (empty clears them)"),
):
    """Set the notes for one checkpoint."""
    try:
        session = load_session(get_container(ctx))
        row = session.set_notes(index, text)
        console.print(f"[green]✓[/green] Notes saved for {row.checkpoint_text}")
        print_warnings([session.last_warning])
    except AuditError as e:
        fail(e)


@audit_app.command("evidence")
def evidence_command(
    ctx: typer.Context,
    index: int = typer.Argument(..., help="Row number from `audit show`"),
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Image file to attach"),
):
    """Attach a photo to one checkpoint."""
    container = get_container(ctx)
    try:
        session = load_session(container)
        asyncio.run(container.evidence_capture.capture(index, path))
        console.print(f"[green]📷 Attached {path.name} to {session.draft.rows[index].checkpoint_text}[/green]")
        print_warnings([session.last_warning])
    except AuditError as e:
        fail(e)


@audit_app.command("save")
def save_command(ctx: typer.Context):
    """Save the draft explicitly."""
    try:
        session = load_session(get_container(ctx))
        warning = session.save()
        if warning is None:
            console.print("[green]💾 Draft saved[/green]")
        print_warnings([warning])
    except AuditError as e:
        fail(e)


@audit_app.command("discard")
def discard_command(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Discard the saved draft."""
    if not yes:
        typer.confirm("Discard the audit draft?", abort=True)
    session = get_container(ctx).draft_session
    warning = session.discard()
    if warning is None:
        console.print("[green]🗑️  Draft discarded[/green]")
    print_warnings([warning])


@audit_app.command("finalize")
def finalize_command(ctx: typer.Context):
    """
    Finalize the draft: score it, build the action plan, archive it.

    Blocked while any checkpoint still needs a photo.
    """
    container = get_container(ctx)
    try:
        load_session(container)
        result = container.finalize_service.finalize()
    except AuditError as e:
        fail(e)
    FinalizeFormatter().display(result)
