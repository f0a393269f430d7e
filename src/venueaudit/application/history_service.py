"""
History service for finalized audits.

Read access to the history log plus the administrative whole-document
export and import. Import replaces the log in bulk; it must not run while
a finalize is in progress.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from pathlib import Path

from venueaudit.domain.errors import InputError
from venueaudit.domain.models import Audit, ScoreBand
from venueaudit.infrastructure.stores import HistoryLog

logger = logging.getLogger(__name__)


class HistoryService:
    """
    Service for audit history.

    Usage:
        history = HistoryService(HistoryLog(backend))
        history.export_document("auditHistory.json")
        history.import_document("auditHistory.json")
    """

    def __init__(self, log: HistoryLog) -> None:
        self.log = log

    def list_audits(self, venue: str | None = None) -> list[Audit]:
        audits = self.log.load_all()
        if venue:
            audits = [a for a in audits if a.venue == venue]
        return audits

    def summary(self, venue: str | None = None) -> dict:
        """Counts per score band and the latest score."""
        audits = self.list_audits(venue)
        bands = Counter(a.band for a in audits)
        return {
            "total": len(audits),
            "bands": {band.value: bands.get(band, 0) for band in ScoreBand},
            "latest_score": audits[-1].score if audits else None,
        }

    def export_document(self, path: Path | str) -> int:
        """Write the whole history as a JSON array. Returns entry count."""
        audits = self.log.load_all()
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            json.dump([a.to_record() for a in audits], f, indent=2, ensure_ascii=False)
        logger.info("Exported %d audit(s) to %s", len(audits), target)
        return len(audits)

    def import_document(self, path: Path | str) -> int:
        """
        Replace the history with the contents of a JSON document.

        Raises:
            InputError: If the document is unreadable or not an array of audits
        """
        source = Path(path)
        try:
            with open(source, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise InputError(f"Cannot read history document {source}: {e}") from e

        if not isinstance(data, list):
            raise InputError(f"History document {source} must be a JSON array")

        try:
            audits = [Audit.from_record(entry) for entry in data]
        except (KeyError, TypeError, ValueError) as e:
            raise InputError(f"Invalid audit entry in {source}: {e}") from e

        self.log.replace_all(audits)
        logger.info("Imported %d audit(s) from %s", len(audits), source)
        return len(audits)
