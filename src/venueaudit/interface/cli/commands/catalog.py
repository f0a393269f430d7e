"""
Catalog Commands - inspect the checkpoint catalog.
"""

import typer

from venueaudit.interface.cli.commands.common import fail, get_container
from venueaudit.interface.cli.formatters.result_formatters import CatalogFormatter

catalog_app = typer.Typer(help="📚 Checkpoint catalog", no_args_is_help=True)


@catalog_app.command("list")
def list_command(ctx: typer.Context):
    """List every checkpoint in audit order."""
    try:
        CatalogFormatter().display(get_container(ctx).catalog)
    except (ValueError, FileNotFoundError) as e:
        fail(e)
