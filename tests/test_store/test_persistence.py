"""Tests for InventoryRepository."""

import json

from mathlab.inventory.store import (
    ITEMS_BLOB,
    STUDENTS_BLOB,
    EntityStore,
    InventoryRepository,
)


class TestSaveLoad:
    """Tests for saving and loading the store."""

    def test_load_empty_database(self, repo):
        store = repo.load()
        assert store.student_count == 0
        assert store.item_count == 0

    def test_save_then_load(self, repo, populated_store):
        repo.save(populated_store)
        loaded = repo.load()

        assert [s.net_id for s in loaded.students] == ["cdiaz", "bob1", "alee1"]
        assert [i.number for i in loaded.items] == ["R-01", "P-01", "C-02", "C-01"]
        assert loaded.find_item("C-01").checked_out_to == "alee1"
        assert loaded.find_student("bob1").timestamp == populated_store.find_student("bob1").timestamp

    def test_loaded_store_keeps_relationships(self, repo, populated_store):
        repo.save(populated_store)
        loaded = repo.load()

        loaded.remove_student("alee1")
        assert loaded.relationships.items_held_by("alee1") == []

    def test_save_uses_stored_keys(self, repo, db, populated_store):
        repo.save(populated_store)

        students = json.loads(db.load_blob(STUDENTS_BLOB))
        items = json.loads(db.load_blob(ITEMS_BLOB))
        assert students[0] == {
            "name": "Cara Diaz",
            "netId": "cdiaz",
            "phone": "555-0199",
            "timestamp": 1002,
        }
        assert items[-1]["checkedOutTo"] == "alee1"
        assert items[0]["checkedOutTo"] is None

    def test_save_replaces_previous(self, repo, populated_store):
        repo.save(populated_store)
        populated_store.remove_item("R-01")
        repo.save(populated_store)

        assert repo.load().find_item("R-01") is None

    def test_load_into_existing_store(self, repo, populated_store):
        repo.save(populated_store)
        target = EntityStore()
        assert repo.load(target) is target
        assert target.student_count == 3


class TestFailOpen:
    """Tests for unreadable blobs."""

    def test_corrupt_students_blob(self, repo, db):
        db.save_blobs({STUDENTS_BLOB: "{not json", ITEMS_BLOB: "[]"})
        store = repo.load()
        assert store.student_count == 0

    def test_wrong_shape_blob(self, repo, db):
        db.save_blobs({ITEMS_BLOB: json.dumps({"name": "not a list"})})
        assert repo.load().item_count == 0

    def test_one_bad_blob_keeps_the_other(self, repo, db):
        items = [{"name": "Ruler", "number": "R-1", "checkedOutTo": None, "timestamp": 1}]
        db.save_blobs({STUDENTS_BLOB: "garbage", ITEMS_BLOB: json.dumps(items)})

        store = repo.load()
        assert store.student_count == 0
        assert store.find_item("R-1").name == "Ruler"

    def test_blob_without_timestamps(self, repo, db):
        db.save_blobs({STUDENTS_BLOB: json.dumps([{"name": "Ann", "netId": "a1", "phone": ""}])})
        assert repo.load().find_student("a1").timestamp == 0


def test_repository_defaults_to_global_db(monkeypatch, tmp_path):
    """Test the repository falls back to the configured database."""
    from mathlab.inventory.config import reset_config
    from mathlab.inventory.db.sqlite import reset_db

    monkeypatch.setenv("MATHLAB_DB_PATH", str(tmp_path / "inv.db"))
    reset_config()
    reset_db()
    try:
        repo = InventoryRepository()
        assert repo.db.db_path == tmp_path / "inv.db"
    finally:
        reset_db()
        reset_config()
