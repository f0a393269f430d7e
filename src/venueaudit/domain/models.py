"""
Domain models for VenueAudit.

This module contains the core business entities that represent:
- Checkpoints from the fixed compliance catalog
- Rows of an audit in progress and the draft that owns them
- Finalized audits and the remediation actions derived from them
- Deep-clean tasks

These models are pure data structures with no I/O dependencies.
They convert to/from the JSON records kept by the infrastructure layer.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any


PERIOD_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def new_id() -> str:
    """Generate a collision-resistant identifier."""
    return uuid.uuid4().hex


def is_valid_period(period: str) -> bool:
    """Check that a period is a YYYY-MM year-month identifier."""
    return bool(PERIOD_PATTERN.match(period or ""))


# ============================================================================
# Enumerations
# ============================================================================

class Rating(str, Enum):
    """
    Inspector's verdict for one checkpoint.

    Non-passing ratings (MINOR, MAJOR, CRITICAL) deduct from the score
    and produce a remediation action.
    """

    PASS = "Pass"
    MINOR = "Minor"
    MAJOR = "Major"
    CRITICAL = "Critical"
    NOT_APPLICABLE = "N/A"

    @property
    def weight(self) -> int:
        """Severity weight used for score deduction and due-date escalation."""
        weights = {
            Rating.PASS: 0,
            Rating.NOT_APPLICABLE: 0,
            Rating.MINOR: 1,
            Rating.MAJOR: 3,
            Rating.CRITICAL: 5,
        }
        return weights[self]

    def is_passing(self) -> bool:
        """PASS and N/A need no remediation."""
        return self in (Rating.PASS, Rating.NOT_APPLICABLE)

    @classmethod
    def from_string(cls, value: str | None) -> Rating | None:
        """Parse a rating from user input, handling common spellings."""
        if value is None:
            return None
        lowered = str(value).strip().lower()
        if lowered in ("pass", "ok", "✓"):
            return cls.PASS
        if lowered in ("n/a", "na", "not applicable", "-"):
            return cls.NOT_APPLICABLE
        for rating in (cls.MINOR, cls.MAJOR, cls.CRITICAL):
            if lowered == rating.value.lower():
                return rating
        return None


class ActionStatus(str, Enum):
    """Status of a remediation action. Any state may move to any other."""

    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    DONE = "Done"

    @classmethod
    def from_string(cls, value: str | None) -> ActionStatus | None:
        if value is None:
            return None
        normalized = str(value).strip().lower().replace("_", " ").replace("-", " ")
        for status in cls:
            if status.value.lower() == normalized:
                return status
        return None


class ScoreBand(str, Enum):
    """Display band for an audit score."""

    GREEN = "green"
    AMBER = "amber"
    RED = "red"


# ============================================================================
# Catalog
# ============================================================================

@dataclass(frozen=True)
class Checkpoint:
    """
    A single auditable compliance item from the fixed catalog.

    Attributes:
        category: Label grouping related checkpoints into a section
        text: The check being performed (natural key within an audit)
        target: Human-readable pass criterion (informational only)
        owner: Default responsible role for remediation
        default_due_offset_days: Days from today a remediation is due
        suggested_remediation: Remediation text copied onto actions
        photo_mandatory: Evidence required regardless of rating
    """

    category: str
    text: str
    target: str
    owner: str
    default_due_offset_days: int
    suggested_remediation: str
    photo_mandatory: bool = False


# ============================================================================
# Audit rows, drafts and finalized audits
# ============================================================================

@dataclass(frozen=True)
class AuditRow:
    """
    The inspector's record for one checkpoint within one audit.

    Rows are replaced, never edited in place.
    """

    category: str
    checkpoint_text: str
    rating: Rating = Rating.PASS
    notes: str = ""
    evidence: str | None = None

    @property
    def has_evidence(self) -> bool:
        return bool(self.evidence)

    def with_changes(self, **changes: Any) -> AuditRow:
        return replace(self, **changes)

    def to_record(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "checkpointText": self.checkpoint_text,
            "rating": self.rating.value,
            "notes": self.notes,
            "evidence": self.evidence,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> AuditRow:
        return cls(
            category=record["category"],
            checkpoint_text=record["checkpointText"],
            rating=Rating(record.get("rating", Rating.PASS.value)),
            notes=record.get("notes") or "",
            evidence=record.get("evidence") or None,
        )


@dataclass
class AuditDraft:
    """
    The live, editable state of the single audit in progress.

    Attributes:
        venue: Venue being audited
        period: Year-month identifier (YYYY-MM)
        rows: One row per catalog entry, in catalog order
    """

    venue: str
    period: str
    rows: list[AuditRow] = field(default_factory=list)

    @classmethod
    def seeded(cls, checkpoints: list[Checkpoint] | tuple[Checkpoint, ...], venue: str, period: str) -> AuditDraft:
        """Create a fresh draft with every row defaulted to PASS."""
        return cls(
            venue=venue,
            period=period,
            rows=[AuditRow(category=cp.category, checkpoint_text=cp.text) for cp in checkpoints],
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "venue": self.venue,
            "period": self.period,
            "rows": [row.to_record() for row in self.rows],
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> AuditDraft:
        return cls(
            venue=record["venue"],
            period=record["period"],
            rows=[AuditRow.from_record(r) for r in record.get("rows", [])],
        )


@dataclass(frozen=True)
class Audit:
    """
    A finalized audit. Immutable once created.

    Attributes:
        id: Unique identifier
        venue: Venue that was audited
        period: Year-month identifier (YYYY-MM)
        score: Compliance score, 0-100
        rows: Frozen copy of the draft rows at finalize time
    """

    id: str
    venue: str
    period: str
    score: int
    rows: tuple[AuditRow, ...]

    @property
    def band(self) -> ScoreBand:
        from venueaudit.domain.rules import score_band

        return score_band(self.score)

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "venue": self.venue,
            "period": self.period,
            "score": self.score,
            "rows": [row.to_record() for row in self.rows],
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Audit:
        return cls(
            id=str(record["id"]),
            venue=record["venue"],
            period=record["period"],
            score=int(record["score"]),
            rows=tuple(AuditRow.from_record(r) for r in record.get("rows", [])),
        )


@dataclass
class ActionItem:
    """
    A remediation task derived from a non-passing checkpoint.

    Only the finalization engine creates these; status is advanced
    afterwards by whoever works the action list.
    """

    id: str
    venue: str
    period: str
    category: str
    checkpoint_text: str
    rating: Rating
    owner: str
    due_date: date
    status: ActionStatus = ActionStatus.OPEN
    description: str = ""

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "venue": self.venue,
            "period": self.period,
            "category": self.category,
            "checkpointText": self.checkpoint_text,
            "rating": self.rating.value,
            "owner": self.owner,
            "dueDate": self.due_date.isoformat(),
            "status": self.status.value,
            "description": self.description,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> ActionItem:
        return cls(
            id=str(record["id"]),
            venue=record["venue"],
            period=record["period"],
            category=record["category"],
            checkpoint_text=record["checkpointText"],
            rating=Rating(record["rating"]),
            owner=record["owner"],
            due_date=date.fromisoformat(record["dueDate"]),
            status=ActionStatus(record.get("status", ActionStatus.OPEN.value)),
            description=record.get("description", ""),
        )


# ============================================================================
# Deep clean
# ============================================================================

@dataclass
class DeepCleanTask:
    """A scheduled deep-clean job."""

    id: str
    title: str
    due_date: date
    done: bool = False

    def is_overdue(self, today: date) -> bool:
        return not self.done and self.due_date < today

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "dueDate": self.due_date.isoformat(),
            "done": self.done,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> DeepCleanTask:
        return cls(
            id=str(record["id"]),
            title=record["title"],
            due_date=date.fromisoformat(record["dueDate"]),
            done=bool(record.get("done", False)),
        )
