"""
Slot backend protocol and in-memory implementation.

A slot is a named JSON document. Every store in the system keeps its
state in exactly one slot, so a failure in one slot never touches another.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Protocol

from venueaudit.domain.errors import StoreError

logger = logging.getLogger(__name__)


DRAFT_SLOT = "auditDraft"
HISTORY_SLOT = "auditHistory"
TASKS_SLOT = "deepCleanTasks"
ACTIONS_SLOT = "auditActions"


class SlotBackend(Protocol):
    """Protocol for named-slot persistence."""

    def read(self, name: str) -> str | None:
        """Return the raw payload stored in a slot, or None if empty."""
        ...

    def write(self, name: str, payload: str) -> None:
        """Replace the payload of a slot."""
        ...

    def delete(self, name: str) -> None:
        """Empty a slot. Deleting an empty slot is a no-op."""
        ...

    def transaction(self) -> Iterator[None]:
        """Context manager grouping a read-modify-write."""
        ...


class MemorySlotBackend:
    """
    Dict-backed slot backend.

    Used as the in-memory stand-in for tests and for running without a
    database. Individual slots can be switched to fail on write.
    """

    def __init__(self) -> None:
        self._slots: dict[str, str] = {}
        self._failing: set[str] = set()

    def fail_writes(self, name: str, failing: bool = True) -> None:
        if failing:
            self._failing.add(name)
        else:
            self._failing.discard(name)

    def read(self, name: str) -> str | None:
        return self._slots.get(name)

    def write(self, name: str, payload: str) -> None:
        if name in self._failing:
            raise StoreError(name, "write", "storage unavailable")
        self._slots[name] = payload

    def delete(self, name: str) -> None:
        if name in self._failing:
            raise StoreError(name, "delete", "storage unavailable")
        self._slots.pop(name, None)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        snapshot = dict(self._slots)
        try:
            yield
        except Exception:
            self._slots = snapshot
            raise
