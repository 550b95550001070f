"""Lending inventory for students and lab items.

Tracks a roster of students and a catalog of items, where each item can be
checked out to at most one student at a time.
"""

from .store import (
    EntityStore,
    Failure,
    Item,
    ItemCreate,
    LendingDesk,
    OperationResult,
    RelationshipManager,
    Student,
    StudentCreate,
)

__all__ = [
    "EntityStore",
    "Failure",
    "Item",
    "ItemCreate",
    "LendingDesk",
    "OperationResult",
    "RelationshipManager",
    "Student",
    "StudentCreate",
]
