"""
CLI main entry point.

Delegates to the typer orchestrator.
"""


def main() -> int:
    """
    Main entry point for the VenueAudit CLI.

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    # Import here to avoid circular imports
    from .orchestrator import app

    try:
        app()
    except SystemExit as e:
        # Typer always exits through SystemExit
        return e.code if isinstance(e.code, int) else 0
    return 0
