"""
Draft session - the single audit in progress.

Owns the in-memory AuditDraft and writes it through to the draft slot on
every mutation. Autosave failures never interrupt the operator: the
in-memory draft stays authoritative and the failure is kept on
``last_warning``.
"""

from __future__ import annotations

import logging

from venueaudit.domain import rules
from venueaudit.domain.catalog import CheckpointCatalog
from venueaudit.domain.errors import InputError, PersistenceWarning
from venueaudit.domain.models import AuditDraft, AuditRow, Rating, is_valid_period
from venueaudit.domain.rules import SectionProgress
from venueaudit.infrastructure.stores import DraftStore

logger = logging.getLogger(__name__)


class DraftSession:
    """
    Service managing the live audit draft.

    Usage:
        session = DraftSession(catalog, DraftStore(backend))
        session.open("Suzie Q", "2025-06")    # recovers a saved draft first
        session.set_rating(3, Rating.MAJOR)
        session.set_evidence(3, "data:image/jpeg;base64,...")
        if session.is_complete:
            ...
    """

    def __init__(self, catalog: CheckpointCatalog, store: DraftStore) -> None:
        self.catalog = catalog
        self.store = store
        self._draft: AuditDraft | None = None
        self.last_warning: PersistenceWarning | None = None

    # ========================================================================
    # Lifecycle
    # ========================================================================

    @property
    def draft(self) -> AuditDraft | None:
        return self._draft

    @property
    def active(self) -> bool:
        return self._draft is not None

    def require_draft(self) -> AuditDraft:
        if self._draft is None:
            raise InputError("No audit in progress. Start one first.")
        return self._draft

    def start(self, venue: str, period: str) -> AuditDraft:
        """Seed a new draft from the catalog, replacing any draft in memory."""
        _validate_period(period)
        self._draft = AuditDraft.seeded(self.catalog.all(), venue, period)
        logger.info("Started audit draft for %s %s (%d rows)", venue, period, len(self._draft.rows))
        self._autosave()
        return self._draft

    def recover(self) -> AuditDraft | None:
        """
        Load the persisted draft into the session.

        A saved draft whose rows no longer line up with the catalog is
        ignored, since its rows cannot be evaluated.
        """
        draft = self.store.load()
        if draft is None:
            return None
        texts = tuple(row.checkpoint_text for row in draft.rows)
        if texts != self.catalog.texts:
            logger.warning(
                "Saved draft for %s %s does not match the catalog; ignoring it",
                draft.venue,
                draft.period,
            )
            return None
        self._draft = draft
        logger.info("Recovered audit draft for %s %s", draft.venue, draft.period)
        return draft

    def open(self, venue: str, period: str) -> AuditDraft:
        """
        Recover the saved draft if there is one, otherwise start fresh.

        Starting fresh overwrites a saved draft that could not be recovered.
        """
        draft = self.recover()
        if draft is not None:
            return draft
        if self.store.load() is not None:
            logger.warning("Replacing unrecoverable saved draft with a new one for %s %s", venue, period)
        return self.start(venue, period)

    def save(self) -> PersistenceWarning | None:
        """Explicit save; same write as autosave."""
        self.require_draft()
        return self._autosave()

    def discard(self) -> PersistenceWarning | None:
        """Drop the draft from memory and clear the slot."""
        if self._draft is not None:
            logger.info("Discarding audit draft for %s %s", self._draft.venue, self._draft.period)
        self._draft = None
        self.last_warning = self.store.clear()
        return self.last_warning

    def close(self) -> None:
        """Forget the in-memory draft without touching the slot."""
        self._draft = None

    # ========================================================================
    # Mutations (each writes through to the draft slot)
    # ========================================================================

    def set_venue(self, venue: str) -> None:
        """Change venue. Rows are kept."""
        self.require_draft().venue = venue
        self._autosave()

    def set_period(self, period: str) -> None:
        """Change period. Rows are kept."""
        _validate_period(period)
        self.require_draft().period = period
        self._autosave()

    def set_rating(self, index: int, rating: Rating) -> AuditRow:
        return self._replace_row(index, rating=rating)

    def set_notes(self, index: int, notes: str) -> AuditRow:
        return self._replace_row(index, notes=notes)

    def set_evidence(self, index: int, payload: str | None) -> AuditRow:
        return self._replace_row(index, evidence=payload or None)

    def _replace_row(self, index: int, **changes) -> AuditRow:
        draft = self.require_draft()
        if not 0 <= index < len(draft.rows):
            raise InputError(f"Row {index} out of range (0-{len(draft.rows) - 1})")
        row = draft.rows[index].with_changes(**changes)
        draft.rows[index] = row
        logger.debug("Row %d (%s) updated: %s", index, row.checkpoint_text, ", ".join(changes))
        self._autosave()
        return row

    def _autosave(self) -> PersistenceWarning | None:
        self.last_warning = self.store.save(self.require_draft())
        return self.last_warning

    # ========================================================================
    # Completion gate (recomputed from current rows every time)
    # ========================================================================

    def requires_evidence(self, index: int) -> bool:
        row = self.require_draft().rows[index]
        return rules.requires_evidence(self.catalog, row.checkpoint_text, row.rating)

    def section_progress(self) -> list[SectionProgress]:
        return rules.section_progress(self.catalog, self.require_draft().rows)

    def first_unsatisfied(self) -> tuple[int, AuditRow] | None:
        return rules.first_unsatisfied(self.catalog, self.require_draft().rows)

    @property
    def is_complete(self) -> bool:
        return rules.is_complete(self.catalog, self.require_draft().rows)


def _validate_period(period: str) -> None:
    if not is_valid_period(period):
        raise InputError(f"Period must be YYYY-MM, got {period!r}")
