"""Summary: SQLite-backed key-value store for SmartTodo.

Importance: Provides durable get/set/remove storage that survives process restarts.
Alternatives: Use a JSON file per key or a hosted key-value service.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from smarttodo.errors import StorageError


class SqliteStore:
    """Summary: Stores text values under string keys in a single SQLite table.

    Importance: Mirrors a browser-style key-value store with local-first persistence.
    Alternatives: Use Postgres and SQLAlchemy from day one.
    """

    def __init__(self, db_path: str) -> None:
        """Summary: Initialize the storage with a database path.

        Importance: Allows configurable database location per environment.
        Alternatives: Hardcode a default path in the class.
        """

        self._db_path = Path(db_path)

    def initialize(self) -> None:
        """Summary: Create the key-value table if it does not exist.

        Importance: Ensures the database is ready before the first read.
        Alternatives: Run migrations using a dedicated migration tool.
        """

        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connection() as connection:
            connection.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            connection.commit()

    def get(self, key: str) -> str | None:
        """Summary: Return the value stored under a key, if any.

        Importance: Lets callers distinguish never-written keys from empty values.
        Alternatives: Return an empty string for missing keys.
        """

        with self._connection() as connection:
            row = connection.execute(
                "SELECT value FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        """Summary: Store a value under a key, replacing any previous value.

        Importance: A single statement keeps writes all-or-nothing.
        Alternatives: Append versions and read the newest.
        """

        with self._connection() as connection:
            connection.execute(
                """
                INSERT INTO kv_store (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, value),
            )
            connection.commit()

    def remove(self, key: str) -> None:
        """Summary: Delete a key if present."""

        with self._connection() as connection:
            connection.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            connection.commit()

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        """Summary: Context manager for SQLite connections.

        Importance: Ensures connections are closed cleanly and errors are labeled.
        Alternatives: Keep a single long-lived connection.
        """

        try:
            connection = sqlite3.connect(self._db_path)
        except sqlite3.Error as exc:
            raise StorageError(f"Could not open {self._db_path}: {exc}") from exc
        try:
            yield connection
        except sqlite3.Error as exc:
            raise StorageError(f"Storage operation failed: {exc}") from exc
        finally:
            connection.close()

