"""
Infrastructure layer package.

Contains all I/O integrations:
- Configuration file loading (config/)
- Logging setup
- Slot backends (in-memory and SQLite)
- Persistence contracts for drafts, history, tasks and actions
"""

from venueaudit.infrastructure.config import ConfigRepository
from venueaudit.infrastructure.logging_config import setup_logging
from venueaudit.infrastructure.slots import SlotBackend, MemorySlotBackend
from venueaudit.infrastructure.sqlite import SqliteSlotBackend
from venueaudit.infrastructure.stores import DraftStore, HistoryLog, TaskStore, ActionLog

__all__ = [
    # Config
    "ConfigRepository",
    # Logging
    "setup_logging",
    # Backends
    "SlotBackend",
    "MemorySlotBackend",
    "SqliteSlotBackend",
    # Stores
    "DraftStore",
    "HistoryLog",
    "TaskStore",
    "ActionLog",
]
