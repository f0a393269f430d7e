"""
CLI result formatters for drafts, audits, actions and deep-clean tasks.

Separates display logic from command logic.
"""

import logging
from typing import List, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from venueaudit.application.draft_service import DraftSession
from venueaudit.application.finalize_service import FinalizeResult
from venueaudit.domain.catalog import CheckpointCatalog
from venueaudit.domain.errors import PersistenceWarning
from venueaudit.domain.models import ActionItem, ActionStatus, Audit, DeepCleanTask, Rating, ScoreBand

logger = logging.getLogger(__name__)
console = Console()

RATING_STYLES = {
    Rating.PASS: "green",
    Rating.MINOR: "yellow",
    Rating.MAJOR: "dark_orange",
    Rating.CRITICAL: "red",
    Rating.NOT_APPLICABLE: "dim",
}

BAND_STYLES = {
    ScoreBand.GREEN: "green",
    ScoreBand.AMBER: "yellow",
    ScoreBand.RED: "red",
}


def score_label(score: int, band: ScoreBand) -> str:
    style = BAND_STYLES[band]
    return f"[{style}]{score}%[/{style}]"


def print_warnings(warnings: Sequence[PersistenceWarning | None]) -> None:
    for warning in warnings:
        if warning is not None:
            console.print(f"[yellow]⚠️  Not saved:[/yellow] {warning}")


class DraftFormatter:
    """Displays the draft grouped by section with completion progress."""

    def display(self, session: DraftSession) -> None:
        draft = session.require_draft()
        progress = {p.category: p for p in session.section_progress()}

        table = Table(title=f"📋 {draft.venue} • {draft.period}")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Checkpoint", style="cyan")
        table.add_column("Rating")
        table.add_column("Photo")
        table.add_column("Notes", style="dim")

        current_category = None
        for index, row in enumerate(draft.rows):
            if row.category != current_category:
                current_category = row.category
                section = progress[row.category]
                marker = "✅" if section.complete else "⏳"
                table.add_section()
                table.add_row(
                    "", f"[bold]{row.category}[/bold] {marker} {section.satisfied}/{section.total}", "", "", ""
                )
            style = RATING_STYLES[row.rating]
            if session.requires_evidence(index):
                photo = "[green]attached[/green]" if row.has_evidence else "[red]required[/red]"
            else:
                photo = "[dim]-[/dim]"
            table.add_row(str(index), row.checkpoint_text, f"[{style}]{row.rating.value}[/{style}]", photo, row.notes)

        console.print(table)
        if session.is_complete:
            console.print("[green]✅ Ready to finalize[/green]")
        else:
            index, row = session.first_unsatisfied()
            console.print(f"[yellow]⏳ Photo still required for #{index}: {row.checkpoint_text}[/yellow]")


class FinalizeFormatter:
    """Displays the outcome of a finalize."""

    def display(self, result: FinalizeResult) -> None:
        audit = result.audit
        console.print(
            Panel(
                f"Venue: {audit.venue}\nPeriod: {audit.period}\nScore: {score_label(audit.score, audit.band)}",
                title="Audit finalized",
            )
        )
        if result.actions:
            ActionFormatter().display(result.actions, title="🛠️  Action Plan")
        else:
            console.print("[green]No actions required. Nice.[/green]")
        print_warnings(result.warnings)


class AuditHistoryFormatter:
    def display(self, audits: List[Audit]) -> None:
        if not audits:
            console.print("[dim]No history yet. Finalize an audit to see it here.[/dim]")
            return
        table = Table(title="🗂️  Audit History")
        table.add_column("ID", style="dim", no_wrap=True)
        table.add_column("Venue", style="cyan")
        table.add_column("Period")
        table.add_column("Score", justify="right")
        table.add_column("Actions", justify="right")
        for audit in audits:
            open_rows = sum(1 for row in audit.rows if not row.rating.is_passing())
            table.add_row(audit.id[:8], audit.venue, audit.period, score_label(audit.score, audit.band), str(open_rows))
        console.print(table)


class ActionFormatter:
    def display(self, actions: List[ActionItem], title: str = "🛠️  Actions", late_ids: set[str] | None = None) -> None:
        if not actions:
            console.print("[dim]No open actions. Nice.[/dim]")
            return
        late_ids = late_ids or set()
        table = Table(title=title)
        table.add_column("ID", style="dim", no_wrap=True)
        table.add_column("Venue / Checkpoint", style="cyan")
        table.add_column("Rating")
        table.add_column("Owner")
        table.add_column("Due")
        table.add_column("Status")
        table.add_column("Description", style="dim")
        for item in actions:
            style = RATING_STYLES[item.rating]
            due = item.due_date.isoformat()
            if item.id in late_ids:
                due = f"[red]{due} • Late[/red]"
            status = item.status.value
            if item.status == ActionStatus.DONE:
                status = f"[green]{status}[/green]"
            table.add_row(
                item.id[:8],
                f"{item.venue} • {item.checkpoint_text}",
                f"[{style}]{item.rating.value}[/{style}]",
                item.owner,
                due,
                status,
                item.description,
            )
        console.print(table)


class DeepCleanFormatter:
    def display(self, tasks: List[DeepCleanTask], overdue_ids: set[str]) -> None:
        if not tasks:
            console.print("[dim]No deep cleans scheduled. Add your first task.[/dim]")
            return
        table = Table(title="✨ Deep Clean Schedule")
        table.add_column("ID", style="dim", no_wrap=True)
        table.add_column("Task")
        table.add_column("Due")
        table.add_column("Done")
        for task in tasks:
            title = f"[strike dim]{task.title}[/strike dim]" if task.done else task.title
            due = task.due_date.isoformat()
            if task.id in overdue_ids:
                due = f"[red]{due} • Overdue[/red]"
            table.add_row(task.id[:8], title, due, "✅" if task.done else "")
        console.print(table)


class CatalogFormatter:
    def display(self, catalog: CheckpointCatalog) -> None:
        table = Table(title="📚 Checkpoint Catalog")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Section", style="cyan")
        table.add_column("Checkpoint")
        table.add_column("Target")
        table.add_column("Owner")
        table.add_column("Due (days)", justify="right")
        table.add_column("Photo")
        for index, cp in enumerate(catalog):
            table.add_row(
                str(index),
                cp.category,
                cp.text,
                cp.target,
                cp.owner,
                str(cp.default_due_offset_days),
                "📷" if cp.photo_mandatory else "",
            )
        console.print(table)
