"""
CLI Orchestrator - Main Entry Point

Wires the command sub-apps together and builds the dependency container
shared by every command.
"""

import logging
from pathlib import Path
from typing import Optional

import typer

from venueaudit.application.container import Container
from venueaudit.infrastructure.logging_config import setup_logging
from venueaudit.interface.cli.commands import (
    actions_app,
    audit_app,
    catalog_app,
    clean_app,
    history_app,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="venueaudit",
    help="📋 Venue Compliance Audit - score audits and track remediation",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(audit_app, name="audit")
app.add_typer(history_app, name="history")
app.add_typer(actions_app, name="actions")
app.add_typer(clean_app, name="clean")
app.add_typer(catalog_app, name="catalog")


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        envvar="VENUEAUDIT_CONFIG_DIR",
        help="Directory holding venueaudit.json (defaults to ./config)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """
    📋 VenueAudit - Venue Compliance Audit Tool

    **Workflow:**
    1. Start an audit: `venueaudit audit start --venue "Suzie Q"`
    2. Rate checkpoints: `venueaudit audit rate 3 Major`
    3. Attach photos where required: `venueaudit audit evidence 3 fridge.jpg`
    4. Finalize: `venueaudit audit finalize`
    5. Work the action plan: `venueaudit actions list --open`
    """
    container = ctx.obj if isinstance(ctx.obj, Container) else Container(config_dir=config_dir)
    try:
        settings = container.settings
        container.catalog
    except (ValueError, OSError) as e:
        setup_logging(logging.WARNING)
        logger.error("%s", e)
        raise typer.Exit(1)

    level = logging.DEBUG if verbose else settings.log_level_value
    setup_logging(level, settings.log_file)
    ctx.obj = container
