"""
Finalize service - closes the draft into an audit and its action plan.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable

from venueaudit.domain import rules
from venueaudit.domain.errors import PersistenceWarning, StoreError, ValidationError
from venueaudit.domain.models import ActionItem, ActionStatus, Audit, AuditDraft, new_id
from venueaudit.application.draft_service import DraftSession
from venueaudit.infrastructure.stores import ActionLog, HistoryLog

logger = logging.getLogger(__name__)


@dataclass
class FinalizeResult:
    """
    Outcome of a successful finalize.

    ``warnings`` lists store writes that failed; the audit and actions
    are valid regardless.
    """

    audit: Audit
    actions: list[ActionItem]
    warnings: list[PersistenceWarning] = field(default_factory=list)

    @property
    def persisted(self) -> bool:
        return not self.warnings


class FinalizeService:
    """
    Service for finalizing the audit draft.

    Enforces the end of the draft lifecycle:
    1. Completion gate must pass (photo evidence present where required)
    2. Score the rows and derive remediation actions
    3. Append the audit to history and record the actions
    4. Clear the draft slot

    Steps 3-4 are best effort: failures come back as warnings.
    """

    def __init__(
        self,
        session: DraftSession,
        history: HistoryLog,
        actions: ActionLog | None = None,
        clock: Callable[[], date] = date.today,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self.session = session
        self.catalog = session.catalog
        self.history = history
        self.actions = actions
        self.clock = clock
        self.id_factory = id_factory

    def check(self) -> None:
        """
        Raise if the draft cannot be finalized.

        Raises:
            InputError: If no draft is in progress
            ValidationError: Naming the first unsatisfied checkpoint
        """
        missing = self.session.first_unsatisfied()
        if missing is not None:
            index, row = missing
            raise ValidationError(row.checkpoint_text, index)

    def finalize(self) -> FinalizeResult:
        """
        Finalize the current draft.

        Raises:
            ValidationError: If the completion gate is unsatisfied; no store
                is touched in that case.
        """
        draft = self.session.require_draft()
        self.check()

        audit = self.build_audit(draft)
        action_items = self.build_actions(draft)
        logger.info(
            "Finalized %s %s: score %d (%s), %d action(s)",
            audit.venue,
            audit.period,
            audit.score,
            audit.band.value,
            len(action_items),
        )

        warnings: list[PersistenceWarning] = []
        try:
            self.history.append(audit)
        except StoreError as e:
            logger.warning("Audit %s not saved to history: %s", audit.id, e)
            warnings.append(PersistenceWarning.from_error(e))

        if self.actions is not None:
            try:
                self.actions.prepend(action_items)
            except StoreError as e:
                logger.warning("Actions for audit %s not saved: %s", audit.id, e)
                warnings.append(PersistenceWarning.from_error(e))

        cleared = self.session.discard()
        if cleared is not None:
            warnings.append(cleared)

        return FinalizeResult(audit=audit, actions=action_items, warnings=warnings)

    def build_audit(self, draft: AuditDraft) -> Audit:
        rows = tuple(draft.rows)
        progression = rules.score_progression(rows)
        for row, running in zip(rows, progression):
            logger.debug("Score %3d after %s (%s)", running, row.checkpoint_text, row.rating.value)
        score = progression[-1] if progression else rules.STARTING_SCORE
        return Audit(
            id=self.id_factory(),
            venue=draft.venue,
            period=draft.period,
            score=score,
            rows=rows,
        )

    def build_actions(self, draft: AuditDraft) -> list[ActionItem]:
        """One OPEN action per row rated Minor, Major or Critical."""
        today = self.clock()
        items: list[ActionItem] = []
        for row in draft.rows:
            if not rules.needs_remediation(row.rating):
                continue
            checkpoint = self.catalog.lookup(row.checkpoint_text)
            items.append(
                ActionItem(
                    id=self.id_factory(),
                    venue=draft.venue,
                    period=draft.period,
                    category=row.category,
                    checkpoint_text=row.checkpoint_text,
                    rating=row.rating,
                    owner=checkpoint.owner,
                    due_date=rules.remediation_due_date(checkpoint, row.rating, today),
                    status=ActionStatus.OPEN,
                    description=rules.remediation_description(checkpoint, row.notes),
                )
            )
        return items
