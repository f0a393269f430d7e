"""
VenueAudit - Venue Compliance Audit Tool.

Records periodic multi-section compliance audits for a venue, scores them
and derives a remediation action list with owners and due dates.

Usage:
    # CLI (recommended)
    venueaudit audit start --venue "Suzie Q" --period 2025-06

    # Programmatic
    from venueaudit.application.container import Container

    container = Container(config_dir=Path("config"))
    session = container.draft_session
    session.open("Suzie Q", "2025-06")
    result = container.finalize_service.finalize()
"""

__version__ = "0.1.0"
__author__ = "VenueAudit Team"

from venueaudit.application.container import Container

__all__ = ["Container", "__version__"]
