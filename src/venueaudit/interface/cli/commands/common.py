"""
Shared helpers for CLI commands.
"""

import logging
from typing import Iterable

import typer
from rich.console import Console

from venueaudit.application.container import Container
from venueaudit.application.draft_service import DraftSession
from venueaudit.domain.errors import InputError

logger = logging.getLogger(__name__)
console = Console()


def get_container(ctx: typer.Context) -> Container:
    container = ctx.obj
    if not isinstance(container, Container):
        container = Container()
        ctx.obj = container
    return container


def load_session(container: Container) -> DraftSession:
    """Recover the persisted draft into the session, if not already active."""
    session = container.draft_session
    if not session.active:
        session.recover()
    session.require_draft()
    return session


def resolve_id(prefix: str, ids: Iterable[str], kind: str) -> str:
    """
    Expand a (possibly shortened) id to the full id.

    Raises:
        InputError: If no id or more than one id matches
    """
    matches = [full for full in ids if full.startswith(prefix)]
    if not matches:
        raise InputError(f"No {kind} with id {prefix}")
    if len(matches) > 1:
        raise InputError(f"Id {prefix} matches {len(matches)} {kind}s; use more characters")
    return matches[0]


def fail(error: Exception) -> None:
    """Report a command failure and exit non-zero."""
    logger.debug("Command failed", exc_info=error)
    console.print(f"[red]❌ Error:[/red] {error}")
    raise typer.Exit(1)
