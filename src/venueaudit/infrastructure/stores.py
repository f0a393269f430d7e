"""
Persistence contracts built on named slots.

- DraftStore: single mutable draft slot, soft-fail on every operation
- HistoryLog: append-only audit history (bulk replace for imports only)
- TaskStore: deep-clean task list
- ActionLog: remediation actions produced by finalization

Each store owns one slot. Payloads are JSON documents matching the
persisted record layout of the domain models.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Sequence, TypeVar

from venueaudit.domain.errors import InputError, PersistenceWarning, StoreError
from venueaudit.domain.models import ActionItem, ActionStatus, Audit, AuditDraft, DeepCleanTask
from venueaudit.infrastructure.slots import (
    ACTIONS_SLOT,
    DRAFT_SLOT,
    HISTORY_SLOT,
    TASKS_SLOT,
    SlotBackend,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _dump(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False)


def _load_list(
    backend: SlotBackend,
    slot: str,
    parse: Callable[[dict[str, Any]], T],
    strict: bool = False,
) -> list[T]:
    """
    Read a slot holding a JSON array.

    An empty slot reads as an empty list. Corrupt data also reads as an
    empty list, unless ``strict`` is set: read-modify-write paths must not
    replace a document they could not parse.

    Raises:
        StoreError: If ``strict`` and the slot does not parse
    """
    payload = backend.read(slot)
    if payload is None:
        return []
    try:
        data = json.loads(payload)
        if not isinstance(data, list):
            raise ValueError("expected a JSON array")
        return [parse(item) for item in data]
    except (ValueError, KeyError, TypeError) as e:
        if strict:
            raise StoreError(slot, "read", e) from e
        logger.warning("Slot '%s' holds unreadable data, treating as empty: %s", slot, e)
        return []


class DraftStore:
    """
    The single "current draft" slot.

    Last write wins. Every failure is swallowed and logged: the in-memory
    draft stays authoritative for the session. Write methods return a
    PersistenceWarning when the store could not be updated.
    """

    slot = DRAFT_SLOT

    def __init__(self, backend: SlotBackend) -> None:
        self.backend = backend

    def save(self, draft: AuditDraft) -> PersistenceWarning | None:
        try:
            self.backend.write(self.slot, _dump(draft.to_record()))
        except StoreError as e:
            logger.warning("Autosave failed, continuing from memory: %s", e)
            return PersistenceWarning.from_error(e)
        return None

    def load(self) -> AuditDraft | None:
        try:
            payload = self.backend.read(self.slot)
        except StoreError as e:
            logger.warning("Could not read saved draft: %s", e)
            return None
        if payload is None:
            return None
        try:
            return AuditDraft.from_record(json.loads(payload))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Saved draft is unreadable, ignoring it: %s", e)
            return None

    def clear(self) -> PersistenceWarning | None:
        try:
            self.backend.delete(self.slot)
        except StoreError as e:
            logger.warning("Could not clear saved draft: %s", e)
            return PersistenceWarning.from_error(e)
        return None


class HistoryLog:
    """
    Append-only log of finalized audits.

    Raises:
        StoreError: When the backend fails; callers decide whether to degrade.
    """

    slot = HISTORY_SLOT

    def __init__(self, backend: SlotBackend) -> None:
        self.backend = backend

    def load_all(self) -> list[Audit]:
        return _load_list(self.backend, self.slot, Audit.from_record)

    def append(self, audit: Audit) -> None:
        """Read-modify-write inside one backend transaction."""
        with self.backend.transaction():
            audits = _load_list(self.backend, self.slot, Audit.from_record, strict=True)
            audits.append(audit)
            self.backend.write(self.slot, _dump([a.to_record() for a in audits]))
        logger.info("Audit %s appended to history (%d entries)", audit.id, len(audits))

    def replace_all(self, audits: Sequence[Audit]) -> None:
        """Bulk replace. Administrative import only, never called by finalize."""
        self.backend.write(self.slot, _dump([a.to_record() for a in audits]))
        logger.info("History replaced with %d entries", len(audits))


class TaskStore:
    """Deep-clean task list slot."""

    slot = TASKS_SLOT

    def __init__(self, backend: SlotBackend) -> None:
        self.backend = backend

    def load(self) -> list[DeepCleanTask]:
        return _load_list(self.backend, self.slot, DeepCleanTask.from_record)

    def save(self, tasks: Sequence[DeepCleanTask]) -> None:
        self.backend.write(self.slot, _dump([t.to_record() for t in tasks]))


class ActionLog:
    """Remediation actions, newest first."""

    slot = ACTIONS_SLOT

    def __init__(self, backend: SlotBackend) -> None:
        self.backend = backend

    def load(self) -> list[ActionItem]:
        return _load_list(self.backend, self.slot, ActionItem.from_record)

    def prepend(self, items: Sequence[ActionItem]) -> None:
        if not items:
            return
        with self.backend.transaction():
            merged = list(items) + _load_list(self.backend, self.slot, ActionItem.from_record, strict=True)
            self.backend.write(self.slot, _dump([a.to_record() for a in merged]))
        logger.info("Recorded %d new action(s)", len(items))

    def update_status(self, action_id: str, status: ActionStatus) -> ActionItem:
        """
        Set the status of one action. Any status may follow any other.

        Raises:
            InputError: If no action has that id
            StoreError: If the stored list cannot be parsed
        """
        with self.backend.transaction():
            items = _load_list(self.backend, self.slot, ActionItem.from_record, strict=True)
            for item in items:
                if item.id == action_id:
                    item.status = status
                    break
            else:
                raise InputError(f"No action with id {action_id}")
            self.backend.write(self.slot, _dump([a.to_record() for a in items]))
        logger.info("Action %s -> %s", action_id, status.value)
        return item
