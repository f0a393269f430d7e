"""
CLI commands package.

One typer sub-app per area of the workflow.
"""

from .audit import audit_app
from .history import history_app
from .actions import actions_app
from .clean import clean_app
from .catalog import catalog_app

__all__ = [
    "audit_app",
    "history_app",
    "actions_app",
    "clean_app",
    "catalog_app",
]
