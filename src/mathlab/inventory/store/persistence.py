"""Load and save the entity store through the blob database.

Each collection is stored as a JSON array under its own blob name, using the
``netId`` / ``checkedOutTo`` keys. Saving replaces both blobs in a single
transaction; loading falls back to an empty collection when a blob is
missing or cannot be read.
"""

import json
import logging
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from ..db.sqlite import Database, get_db
from .entity_store import EntityStore
from .schemas import Item, Student

logger = logging.getLogger(__name__)

STUDENTS_BLOB = "mathLabStudents"
ITEMS_BLOB = "mathLabItems"

_students_adapter = TypeAdapter(list[Student])
_items_adapter = TypeAdapter(list[Item])


class InventoryRepository:
    """Persists an EntityStore as two named blobs."""

    def __init__(self, db: Optional[Database] = None):
        """Initialize repository.

        Args:
            db: Database instance
        """
        self.db = db or get_db()

    def load(self, store: Optional[EntityStore] = None) -> EntityStore:
        """Load both collections.

        Args:
            store: Store to fill (a new one is created if omitted)

        Returns:
            The populated store
        """
        store = store or EntityStore()
        students = self._read(STUDENTS_BLOB, _students_adapter)
        items = self._read(ITEMS_BLOB, _items_adapter)
        store.replace_all(students, items)
        logger.debug("Loaded %d students and %d items", len(students), len(items))
        return store

    def save(self, store: EntityStore) -> None:
        """Write both collections, replacing what was stored."""
        self.db.save_blobs(
            {
                STUDENTS_BLOB: self._dump(store.students),
                ITEMS_BLOB: self._dump(store.items),
            }
        )

    def _read(self, name: str, adapter: TypeAdapter) -> list:
        payload = self.db.load_blob(name)
        if payload is None:
            return []
        try:
            return adapter.validate_json(payload)
        except ValidationError as e:
            logger.warning(
                "Ignoring unreadable blob %s (%d error(s)); starting empty",
                name,
                e.error_count(),
            )
            return []

    @staticmethod
    def _dump(records: list) -> str:
        return json.dumps([r.model_dump(by_alias=True) for r in records])
