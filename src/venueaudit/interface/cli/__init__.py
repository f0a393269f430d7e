"""
CLI package for VenueAudit.

Contains command-line interface components.
"""

from .cli import main

__all__ = ["main"]
