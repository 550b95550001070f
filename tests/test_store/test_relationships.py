"""Tests for RelationshipManager."""

import pytest

from mathlab.inventory.store import (
    Failure,
    ItemCreate,
    ItemUpdate,
    StudentCreate,
    StudentUpdate,
)


@pytest.fixture
def manager(populated_store):
    return populated_store.relationships


class TestCheckout:
    """Tests for checkout and return."""

    def test_checkout(self, manager, populated_store):
        result = manager.checkout("R-01", "bob1")

        assert result.success is True
        assert result.previous_holder is None
        assert result.warnings == []
        assert populated_store.find_item("R-01").checked_out_to == "bob1"

    def test_checkout_then_return(self, manager, populated_store):
        """Test a checkout followed by a return leaves the item available."""
        manager.checkout("R-01", "bob1")
        result = manager.return_item("R-01")

        assert result.success is True
        assert result.previous_holder == "bob1"
        assert populated_store.find_item("R-01").checked_out_to is None

    def test_items_held_by_follows_checkout_and_return(self, store):
        store.add_student(StudentCreate(name="A", net_id="abc123"))
        store.add_item(ItemCreate(name="Graphing calculator", number="X001"))

        store.relationships.checkout("X001", "abc123")
        held = store.relationships.items_held_by("abc123")
        assert [i.number for i in held] == ["X001"]

        store.relationships.return_item("X001")
        assert store.relationships.items_held_by("abc123") == []

    def test_recheckout_overwrites_holder(self, manager, populated_store):
        """Test checking out a held item replaces the holder with a warning."""
        result = manager.checkout("C-01", "bob1")

        assert result.success is True
        assert result.previous_holder == "alee1"
        assert len(result.warnings) == 1
        assert populated_store.find_item("C-01").checked_out_to == "bob1"

    def test_recheckout_to_same_holder_has_no_warning(self, manager):
        result = manager.checkout("C-01", "alee1")

        assert result.success is True
        assert result.warnings == []

    def test_strict_checkout_rejects_held_item(self, manager, populated_store):
        result = manager.checkout("C-01", "bob1", strict=True)

        assert result.success is False
        assert result.failure == Failure.ALREADY_CHECKED_OUT
        assert populated_store.find_item("C-01").checked_out_to == "alee1"

    def test_strict_checkout_allows_available_item(self, manager):
        assert manager.checkout("R-01", "bob1", strict=True).success is True

    def test_checkout_missing_item(self, manager):
        result = manager.checkout("NOPE", "bob1")
        assert result.failure == Failure.NOT_FOUND

    def test_checkout_missing_student(self, manager, populated_store):
        """Test a checkout to an unknown NetID changes nothing."""
        result = manager.checkout("R-01", "ghost")

        assert result.failure == Failure.NOT_FOUND
        assert populated_store.find_item("R-01").checked_out_to is None

    def test_return_missing_item(self, manager):
        assert manager.return_item("NOPE").failure == Failure.NOT_FOUND

    def test_return_available_item(self, manager):
        result = manager.return_item("R-01")
        assert result.success is True
        assert result.previous_holder is None


class TestQueries:
    """Tests for derived queries."""

    def test_items_held_by(self, manager):
        held = manager.items_held_by("alee1")
        assert sorted(i.number for i in held) == ["C-01", "P-01"]

    def test_items_held_by_nobody(self, manager):
        assert manager.items_held_by("cdiaz") == []

    def test_holder_of(self, manager):
        assert manager.holder_of("C-01").net_id == "alee1"
        assert manager.holder_of("R-01") is None
        assert manager.holder_of("NOPE") is None

    def test_available_items(self, manager):
        numbers = [i.number for i in manager.available_items()]
        assert numbers == ["R-01", "C-02"]

    def test_available_items_filtered(self, manager):
        numbers = [i.number for i in manager.available_items("calc")]
        assert numbers == ["C-02"]

    def test_orphaned_items(self, store):
        store.add_item(ItemCreate(name="Lost Ruler", number="R-9", checked_out_to="gone"))
        store.add_item(ItemCreate(name="Ruler", number="R-1"))

        orphans = store.relationships.orphaned_items()
        assert [i.number for i in orphans] == ["R-9"]
        assert store.relationships.holder_of("R-9") is None


class TestDeleteCascade:
    """Tests for delete cascades."""

    def test_delete_student_returns_items(self, populated_store):
        populated_store.remove_student("alee1")

        for item in populated_store.items:
            assert item.checked_out_to != "alee1"
        assert populated_store.find_item("C-01").checked_out_to is None
        assert populated_store.find_item("P-01").checked_out_to is None

    def test_delete_student_leaves_other_checkouts(self, populated_store):
        populated_store.relationships.checkout("R-01", "bob1")
        populated_store.remove_student("alee1")

        assert populated_store.find_item("R-01").checked_out_to == "bob1"

    def test_on_delete_student_reports_released(self, manager):
        released = manager.on_delete_student("alee1")
        assert sorted(i.number for i in released) == ["C-01", "P-01"]

    def test_delete_item_held_by_student(self, populated_store):
        populated_store.remove_item("C-01")

        held = populated_store.relationships.items_held_by("alee1")
        assert [i.number for i in held] == ["P-01"]

    def test_lending_scenario(self, store):
        """Test add, checkout and delete from an empty store."""
        store.add_student(StudentCreate(name="Ann Lee", net_id="alee1", phone="555-0100"))
        store.add_item(ItemCreate(name="Calculator", number="C-01"))

        store.relationships.checkout("C-01", "alee1")
        assert store.find_item("C-01").checked_out_to == "alee1"

        store.remove_student("alee1")
        assert store.find_item("C-01").checked_out_to is None
        assert store.find_student("alee1") is None


class TestEdits:
    """Tests for edit paths."""

    def test_edit_student(self, manager, populated_store):
        result = manager.edit_student("bob1", StudentUpdate(name="Robert Stone", phone="555-2222"))

        assert result.success is True
        student = populated_store.find_student("bob1")
        assert student.name == "Robert Stone"
        assert student.phone == "555-2222"

    def test_edit_student_partial(self, manager, populated_store):
        manager.edit_student("bob1", StudentUpdate(phone="555-3333"))

        student = populated_store.find_student("bob1")
        assert student.name == "Bob Stone"
        assert student.phone == "555-3333"

    def test_edit_student_keeps_checkouts(self, manager, populated_store):
        manager.edit_student("alee1", StudentUpdate(name="Ann L."))
        assert len(manager.items_held_by("alee1")) == 2

    def test_edit_missing_student(self, manager):
        result = manager.edit_student("ghost", StudentUpdate(name="X"))
        assert result.failure == Failure.NOT_FOUND

    def test_edit_item(self, manager, populated_store):
        manager.edit_item("C-01", ItemUpdate(name="TI-84"))

        item = populated_store.find_item("C-01")
        assert item.name == "TI-84"
        assert item.checked_out_to == "alee1"

    def test_edit_missing_item(self, manager):
        assert manager.edit_item("NOPE", ItemUpdate(name="X")).failure == Failure.NOT_FOUND

    def test_edit_item_blank_name_ignored(self, manager, populated_store):
        result = manager.edit_item("C-01", ItemUpdate(name="  "))

        assert result.success is True
        assert populated_store.find_item("C-01").name == "Calculator"

    def test_edit_student_blank_name_ignored(self, manager, populated_store):
        manager.edit_student("bob1", StudentUpdate(name="", phone="555-4444"))

        student = populated_store.find_student("bob1")
        assert student.name == "Bob Stone"
        assert student.phone == "555-4444"
