"""Pytest configuration and shared fixtures.

This module provides fixtures for testing the inventory, including
in-memory stores, sample data and databases.
"""

import itertools
from typing import Generator

import pytest

from mathlab.inventory.config import reset_config
from mathlab.inventory.db.sqlite import Database, reset_db
from mathlab.inventory.store import (
    EntityStore,
    InventoryRepository,
    ItemCreate,
    StudentCreate,
)


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def clock():
    """Deterministic clock returning 1000, 1001, 1002, ..."""
    counter = itertools.count(1000)
    return lambda: next(counter)


@pytest.fixture
def store(clock) -> EntityStore:
    """Create an empty store."""
    return EntityStore(clock=clock)


@pytest.fixture
def ann() -> StudentCreate:
    return StudentCreate(name="Ann Lee", net_id="alee1", phone="555-0100")


@pytest.fixture
def calculator() -> ItemCreate:
    return ItemCreate(name="Calculator", number="C-01")


@pytest.fixture
def populated_store(store: EntityStore) -> EntityStore:
    """Store with three students and four items, two checked out."""
    store.add_student(StudentCreate(name="Ann Lee", net_id="alee1", phone="555-0100"))
    store.add_student(StudentCreate(name="Bob Stone", net_id="bob1", phone="555-0101"))
    store.add_student(StudentCreate(name="Cara Diaz", net_id="cdiaz", phone="555-0199"))

    store.add_item(ItemCreate(name="Calculator", number="C-01"))
    store.add_item(ItemCreate(name="Calculator", number="C-02"))
    store.add_item(ItemCreate(name="Protractor", number="P-01"))
    store.add_item(ItemCreate(name="Ruler", number="R-01"))

    store.relationships.checkout("C-01", "alee1")
    store.relationships.checkout("P-01", "alee1")
    return store


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
def db() -> Generator[Database, None, None]:
    """Create an in-memory database for testing."""
    reset_db()
    reset_config()
    database = Database(":memory:")
    database.create_tables()
    yield database
    reset_db()


@pytest.fixture
def repo(db: Database) -> InventoryRepository:
    """Create a repository over the test database."""
    return InventoryRepository(db)
