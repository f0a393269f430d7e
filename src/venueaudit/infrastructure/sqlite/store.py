"""
SQLite-backed slot store for audit persistence.

Keeps every slot as one row holding a JSON document:
- auditDraft (current draft)
- auditHistory (finalized audits)
- deepCleanTasks (deep-clean schedule)
- auditActions (remediation actions)

Uses stdlib sqlite3 with no ORM.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from venueaudit.domain.errors import StoreError

logger = logging.getLogger(__name__)

# Schema version - increment when making breaking changes
SCHEMA_VERSION = 1


class SqliteSlotBackend:
    """
    SQLite-backed storage for named slots.

    Usage:
        backend = SqliteSlotBackend(Path("output/audit_history.db"))
        backend.initialize_schema()

        backend.write("auditDraft", '{"venue": "Suzie Q", ...}')
        payload = backend.read("auditDraft")
        backend.delete("auditDraft")
    """

    def __init__(self, db_path: Path | str) -> None:
        """
        Initialize slot store.

        Args:
            db_path: Path to SQLite database file (created if not exists)
        """
        self.db_path = Path(db_path)
        self._connection: sqlite3.Connection | None = None
        self._in_transaction = False
        logger.debug("SqliteSlotBackend initialized: %s", self.db_path)

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create database connection, creating the schema on first use."""
        if self._connection is None:
            # Ensure parent directory exists
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            self._connection = sqlite3.connect(self.db_path)
            # Use Row factory for dict-like access
            self._connection.row_factory = sqlite3.Row
            logger.debug("Database connection established")
            self._create_tables(self._connection)
        return self._connection

    def close(self) -> None:
        """Close database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None
            logger.debug("Database connection closed")

    # ========================================================================
    # Schema Management
    # ========================================================================

    def initialize_schema(self) -> None:
        """
        Create database tables if they don't exist.

        Safe to call multiple times - uses CREATE TABLE IF NOT EXISTS.
        """
        try:
            self._get_connection()
        except (sqlite3.Error, OSError) as e:
            raise StoreError("*", "initialize", e) from e

    def _create_tables(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS slots (
                name TEXT PRIMARY KEY,
                payload TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """
        )

        # Schema metadata (for future migrations)
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_meta (
                key TEXT PRIMARY KEY,
                value TEXT
            )
        """
        )

        conn.execute(
            """
            INSERT OR REPLACE INTO schema_meta (key, value)
            VALUES ('version', ?)
        """,
            (str(SCHEMA_VERSION),),
        )

        conn.commit()
        logger.info("Database schema initialized (version %d)", SCHEMA_VERSION)

    # ========================================================================
    # Slot Operations
    # ========================================================================

    def read(self, name: str) -> str | None:
        try:
            row = self._get_connection().execute(
                "SELECT payload FROM slots WHERE name = ?", (name,)
            ).fetchone()
        except (sqlite3.Error, OSError) as e:
            raise StoreError(name, "read", e) from e
        return row["payload"] if row else None

    def write(self, name: str, payload: str) -> None:
        now = datetime.now(timezone.utc).isoformat()
        try:
            conn = self._get_connection()
            conn.execute(
                """
                INSERT INTO slots (name, payload, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(name) DO UPDATE SET
                    payload = excluded.payload,
                    updated_at = excluded.updated_at
            """,
                (name, payload, now),
            )
            if not self._in_transaction:
                conn.commit()
        except (sqlite3.Error, OSError) as e:
            raise StoreError(name, "write", e) from e
        logger.debug("Slot '%s' written (%d bytes)", name, len(payload))

    def delete(self, name: str) -> None:
        try:
            conn = self._get_connection()
            conn.execute("DELETE FROM slots WHERE name = ?", (name,))
            if not self._in_transaction:
                conn.commit()
        except (sqlite3.Error, OSError) as e:
            raise StoreError(name, "delete", e) from e
        logger.debug("Slot '%s' cleared", name)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """
        Group reads and writes into one transaction.

        Commits on success, rolls back if the body raises.
        """
        try:
            conn = self._get_connection()
        except (sqlite3.Error, OSError) as e:
            raise StoreError("*", "transaction", e) from e
        self._in_transaction = True
        try:
            yield
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._in_transaction = False

    def slot_names(self) -> list[str]:
        """List non-empty slots (for diagnostics)."""
        try:
            rows = self._get_connection().execute(
                "SELECT name FROM slots ORDER BY name"
            ).fetchall()
        except (sqlite3.Error, OSError) as e:
            raise StoreError("*", "list", e) from e
        return [row["name"] for row in rows]
