"""
Error taxonomy for the audit workflow.

- ValidationError: finalize blocked by the completion gate (recoverable)
- CheckpointLookupError: a row references text missing from the catalog
- InputError: bad operator input (row index, period, unknown id)
- StoreError: a persistence slot could not be read or written
- PersistenceWarning: non-blocking record of a failed store write
"""

from __future__ import annotations

from dataclasses import dataclass


class AuditError(Exception):
    """Base class for all workflow errors."""


class ValidationError(AuditError):
    """
    Finalize was attempted while the completion gate is unsatisfied.

    Attributes:
        checkpoint_text: First unsatisfied checkpoint in catalog order
        index: Row index of that checkpoint
    """

    def __init__(self, checkpoint_text: str, index: int) -> None:
        self.checkpoint_text = checkpoint_text
        self.index = index
        super().__init__(f"Photo required for: {checkpoint_text}")


class CheckpointLookupError(AuditError, LookupError):
    """A checkpoint reference does not exist in the catalog."""

    def __init__(self, checkpoint_text: str) -> None:
        self.checkpoint_text = checkpoint_text
        super().__init__(f"Checkpoint not in catalog: {checkpoint_text!r}")


class InputError(AuditError):
    """Operator input that cannot be applied."""


class StoreError(AuditError):
    """A persistence slot failed to read or write."""

    def __init__(self, slot: str, operation: str, cause: BaseException | str) -> None:
        self.slot = slot
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} on slot '{slot}' failed: {cause}")


@dataclass(frozen=True)
class PersistenceWarning:
    """A store write that failed without unwinding in-memory results."""

    slot: str
    operation: str
    message: str

    @classmethod
    def from_error(cls, error: StoreError) -> PersistenceWarning:
        return cls(slot=error.slot, operation=error.operation, message=str(error.cause))

    def __str__(self) -> str:
        return f"{self.operation} on '{self.slot}' failed: {self.message}"
