"""
Domain layer package.

Contains pure data models and rules with no I/O dependencies.
Models convert to/from JSON records via the infrastructure layer.
"""

from venueaudit.domain.models import (
    # Enums
    Rating,
    ActionStatus,
    ScoreBand,
    # Core Models
    Checkpoint,
    AuditRow,
    AuditDraft,
    Audit,
    ActionItem,
    DeepCleanTask,
    new_id,
    is_valid_period,
)

from venueaudit.domain.catalog import CheckpointCatalog, DEFAULT_CHECKPOINTS

from venueaudit.domain.errors import (
    AuditError,
    ValidationError,
    CheckpointLookupError,
    InputError,
    StoreError,
    PersistenceWarning,
)

from venueaudit.domain.rules import (
    SectionProgress,
    requires_evidence,
    is_row_satisfied,
    section_progress,
    first_unsatisfied,
    is_complete,
    score_progression,
    compute_score,
    score_band,
    remediation_due_date,
    remediation_description,
)

__all__ = [
    # Enums
    "Rating",
    "ActionStatus",
    "ScoreBand",
    # Models
    "Checkpoint",
    "AuditRow",
    "AuditDraft",
    "Audit",
    "ActionItem",
    "DeepCleanTask",
    "new_id",
    "is_valid_period",
    # Catalog
    "CheckpointCatalog",
    "DEFAULT_CHECKPOINTS",
    # Errors
    "AuditError",
    "ValidationError",
    "CheckpointLookupError",
    "InputError",
    "StoreError",
    "PersistenceWarning",
    # Rules
    "SectionProgress",
    "requires_evidence",
    "is_row_satisfied",
    "section_progress",
    "first_unsatisfied",
    "is_complete",
    "score_progression",
    "compute_score",
    "score_band",
    "remediation_due_date",
    "remediation_description",
]
