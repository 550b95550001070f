"""Tests for logging setup."""

import logging

from rich.logging import RichHandler

from mathlab.inventory.logging_config import PACKAGE_LOGGER, configure_logging
from mathlab.inventory.store import ItemCreate, StudentCreate


def test_configure_once():
    logger = configure_logging("INFO")
    configure_logging("DEBUG")

    handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
    assert len(handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.name == PACKAGE_LOGGER


def test_overwrite_checkout_logs_warning(populated_store, caplog):
    with caplog.at_level(logging.WARNING, logger="mathlab"):
        populated_store.relationships.checkout("C-01", "bob1")

    assert any("was checked out to 'alee1'" in r.getMessage() for r in caplog.records)


def test_import_summary_logged(store, caplog):
    from mathlab.inventory.imports import StudentImporter

    with caplog.at_level(logging.INFO, logger="mathlab"):
        StudentImporter(store).import_text("Name,NetID,Phone\nA,a1,1")

    assert any("Imported: 1" in r.getMessage() for r in caplog.records)


def test_orphan_warning(store, caplog):
    store.add_student(StudentCreate(name="A", net_id="a1"))
    store.add_item(ItemCreate(name="Ruler", number="R-1", checked_out_to="gone"))

    with caplog.at_level(logging.WARNING, logger="mathlab"):
        store.relationships.orphaned_items()

    assert any("missing students" in r.getMessage() for r in caplog.records)
