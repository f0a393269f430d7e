"""
SQLite infrastructure package.

Provides SQLite slot storage for audit data persistence.
"""

from venueaudit.infrastructure.sqlite.store import SqliteSlotBackend, SCHEMA_VERSION

__all__ = [
    "SqliteSlotBackend",
    "SCHEMA_VERSION",
]
