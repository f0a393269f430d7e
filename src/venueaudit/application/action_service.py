"""
Action tracker - works the remediation action list after finalization.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from venueaudit.domain.models import ActionItem, ActionStatus
from venueaudit.infrastructure.stores import ActionLog

logger = logging.getLogger(__name__)


class ActionTracker:
    """Lists actions and moves them between Open, In Progress and Done."""

    def __init__(self, log: ActionLog, clock: Callable[[], date] = date.today) -> None:
        self.log = log
        self.clock = clock

    def list_actions(self, open_only: bool = False, venue: str | None = None) -> list[ActionItem]:
        items = self.log.load()
        if venue:
            items = [a for a in items if a.venue == venue]
        if open_only:
            items = [a for a in items if a.status != ActionStatus.DONE]
        return items

    def is_late(self, item: ActionItem) -> bool:
        return item.status != ActionStatus.DONE and item.due_date < self.clock()

    def start(self, action_id: str) -> ActionItem:
        return self.log.update_status(action_id, ActionStatus.IN_PROGRESS)

    def close(self, action_id: str) -> ActionItem:
        return self.log.update_status(action_id, ActionStatus.DONE)

    def reopen(self, action_id: str) -> ActionItem:
        return self.log.update_status(action_id, ActionStatus.OPEN)
