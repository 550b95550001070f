"""Entity store, checkout relationships and persistence."""

from .desk import LendingDesk
from .entity_store import EntityStore
from .persistence import ITEMS_BLOB, STUDENTS_BLOB, InventoryRepository
from .relationships import RelationshipManager
from .results import Failure, OperationResult
from .schemas import (
    Item,
    ItemCreate,
    ItemUpdate,
    Student,
    StudentCreate,
    StudentUpdate,
)

__all__ = [
    "EntityStore",
    "Failure",
    "ITEMS_BLOB",
    "InventoryRepository",
    "Item",
    "ItemCreate",
    "ItemUpdate",
    "LendingDesk",
    "OperationResult",
    "RelationshipManager",
    "STUDENTS_BLOB",
    "Student",
    "StudentCreate",
    "StudentUpdate",
]
