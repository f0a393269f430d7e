"""
VenueAudit - Venue Compliance Audit Tool

Records monthly venue audits, scores them and tracks the remediation
actions they produce.
"""

import sys
from venueaudit.interface.cli import main


if __name__ == "__main__":
    sys.exit(main())
