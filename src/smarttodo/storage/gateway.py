"""Summary: Persistence gateway mapping named collections to JSON record lists.

Importance: Gives services a whole-collection read/write contract over a key-value store.
Alternatives: Store each record under its own key.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any

from smarttodo.errors import StorageError
from smarttodo.seeds import DEFAULT_CATEGORIES, DEFAULT_CONTEXT, DEFAULT_TASKS, seed_records
from smarttodo.storage.sqlite_store import SqliteStore


logger = logging.getLogger(__name__)


class Collection(str, Enum):
    """Summary: Named collections and the fixed keys they are stored under."""

    TASKS = "smart-todo-tasks"
    CONTEXT = "smart-todo-context"
    CATEGORIES = "smart-todo-categories"


_SEEDS: dict[Collection, list[dict[str, Any]]] = {
    Collection.TASKS: DEFAULT_TASKS,
    Collection.CONTEXT: DEFAULT_CONTEXT,
    Collection.CATEGORIES: DEFAULT_CATEGORIES,
}


class PersistenceGateway:
    """Summary: Reads and replaces whole collections of records.

    Importance: Single seam between services and durable storage.
    Alternatives: Let every service talk to the key-value store directly.
    """

    def __init__(self, store: SqliteStore) -> None:
        self._store = store

    def read(self, collection: Collection) -> list[dict[str, Any]]:
        """Summary: Return the stored records, or the seed set if never written.

        Importance: First runs start from a documented, non-empty data set.
        Alternatives: Return an empty list and seed explicitly at startup.
        """

        raw = self._store.get(collection.value)
        if raw is None:
            return seed_records(_SEEDS[collection])
        try:
            records = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Collection {collection.value} is not valid JSON") from exc
        if not isinstance(records, list):
            raise StorageError(f"Collection {collection.value} is not a list")
        return records

    def write(self, collection: Collection, records: list[dict[str, Any]]) -> None:
        """Summary: Replace a collection wholesale.

        Importance: One serialized document per key means no partial write is observable.
        Alternatives: Diff and patch individual records.
        """

        try:
            payload = json.dumps(records)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Collection {collection.value} is not serializable") from exc
        self._store.set(collection.value, payload)
        logger.debug("Wrote %s records to %s.", len(records), collection.value)

    def remove(self, collection: Collection) -> None:
        """Summary: Forget a collection so the next read returns its seed set."""

        self._store.remove(collection.value)
