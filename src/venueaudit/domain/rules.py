"""
Audit Rules.

This module provides THE authoritative logic for evidence requirements,
draft completion, scoring and remediation deadlines. The completion gate,
finalization and any presentation layer MUST use these functions so the
photo rule is never duplicated.

Architecture Note:
    - Pure domain logic - no I/O, no clock, no persistence
    - Catalog is passed in; "today" is passed in
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from venueaudit.domain.catalog import CheckpointCatalog
from venueaudit.domain.models import AuditRow, Checkpoint, Rating, ScoreBand


STARTING_SCORE = 100
POINTS_PER_WEIGHT = 5
ESCALATION_WEIGHT = 3
ESCALATION_DAYS = 2
GREEN_THRESHOLD = 90
AMBER_THRESHOLD = 75


@dataclass(frozen=True)
class SectionProgress:
    """Satisfied/total row counts for one catalog category."""

    category: str
    satisfied: int
    total: int

    @property
    def complete(self) -> bool:
        return self.satisfied == self.total


# =============================================================================
# Evidence policy and completion gate
# =============================================================================

def requires_evidence(catalog: CheckpointCatalog, checkpoint_text: str, rating: Rating) -> bool:
    """
    Decide whether a row needs photo evidence.

    Rules:
        1. Checkpoint marked photo-mandatory -> required for every rating
        2. Rating outside PASS / N/A -> required
        3. Otherwise -> not required

    Raises:
        CheckpointLookupError: If the checkpoint is not in the catalog
    """
    if catalog.lookup(checkpoint_text).photo_mandatory:
        return True
    return not rating.is_passing()


def is_row_satisfied(catalog: CheckpointCatalog, row: AuditRow) -> bool:
    """A row is satisfied when it needs no evidence or has some attached."""
    return not requires_evidence(catalog, row.checkpoint_text, row.rating) or row.has_evidence


def section_progress(catalog: CheckpointCatalog, rows: Sequence[AuditRow]) -> list[SectionProgress]:
    """Group rows by category in first-seen order and count satisfied rows."""
    counts: dict[str, list[int]] = {}
    for row in rows:
        bucket = counts.setdefault(row.category, [0, 0])
        bucket[1] += 1
        if is_row_satisfied(catalog, row):
            bucket[0] += 1
    return [
        SectionProgress(category=category, satisfied=done, total=total)
        for category, (done, total) in counts.items()
    ]


def first_unsatisfied(catalog: CheckpointCatalog, rows: Sequence[AuditRow]) -> tuple[int, AuditRow] | None:
    """Return (index, row) of the first unsatisfied row in order, or None."""
    for index, row in enumerate(rows):
        if not is_row_satisfied(catalog, row):
            return index, row
    return None


def is_complete(catalog: CheckpointCatalog, rows: Sequence[AuditRow]) -> bool:
    """Completion gate: every row satisfied."""
    return first_unsatisfied(catalog, rows) is None


# =============================================================================
# Scoring
# =============================================================================

def score_progression(rows: Sequence[AuditRow]) -> list[int]:
    """
    Running score after each row, in row order.

    Each row deducts weight * 5 points; the score never drops below zero.
    An empty sequence yields an empty list (score stays at 100).
    """
    running = STARTING_SCORE
    progression: list[int] = []
    for row in rows:
        running = max(0, running - row.rating.weight * POINTS_PER_WEIGHT)
        progression.append(running)
    return progression


def compute_score(rows: Sequence[AuditRow]) -> int:
    progression = score_progression(rows)
    return progression[-1] if progression else STARTING_SCORE


def score_band(score: int) -> ScoreBand:
    if score >= GREEN_THRESHOLD:
        return ScoreBand.GREEN
    if score >= AMBER_THRESHOLD:
        return ScoreBand.AMBER
    return ScoreBand.RED


# =============================================================================
# Remediation
# =============================================================================

def needs_remediation(rating: Rating) -> bool:
    return not rating.is_passing()


def remediation_due_date(checkpoint: Checkpoint, rating: Rating, today: date) -> date:
    """
    Due date for a remediation action.

    Major and Critical ratings (weight >= 3) pull the date two days earlier.
    The offset is floored at zero so the date is never in the past.
    """
    offset = checkpoint.default_due_offset_days
    if rating.weight >= ESCALATION_WEIGHT:
        offset -= ESCALATION_DAYS
    return today + timedelta(days=max(0, offset))


def remediation_description(checkpoint: Checkpoint, notes: str) -> str:
    """Suggested remediation, followed by the inspector's notes when present."""
    if notes:
        return f"{checkpoint.suggested_remediation} Notes: {notes}"
    return checkpoint.suggested_remediation
