"""
Tests for core/store.py

Uses a temporary SQLite file so the real summary DB is never touched.

Run with: pytest tests/test_store.py
"""

import json
import sqlite3

import pytest

import core.store as store
from core.errors import PersistenceError


@pytest.fixture(autouse=True)
def temp_db(tmp_path, monkeypatch):
    """Point DB_PATH to a fresh temp file for each test."""
    db_file = tmp_path / "test_summaries.db"
    monkeypatch.setenv("DB_PATH", str(db_file))
    store.init_db()
    yield


@pytest.fixture
def blob() -> str:
    return json.dumps({"summary_points": ["First", "Second"]})


class TestInsertAndRetrieve:
    def test_insert_returns_row(self, blob):
        row = store.insert("https://example.com", "Example", blob)

        assert isinstance(row["id"], int)
        assert row["id"] > 0
        assert row["original_url"] == "https://example.com"
        assert row["title"] == "Example"
        assert row["summary"] == blob
        assert row["created_at"]

    def test_get_by_id_returns_row(self, blob):
        row = store.insert("https://example.com", "Example", blob)
        fetched = store.get_by_id(row["id"])

        assert fetched == row

    def test_get_by_id_missing_returns_none(self):
        assert store.get_by_id(99999) is None

    def test_get_all_returns_newest_first(self, blob):
        first = store.insert("https://a.example", "A", blob)
        second = store.insert("https://b.example", "B", blob)

        rows = store.get_all()

        assert rows[0]["id"] == second["id"]
        assert rows[1]["id"] == first["id"]

    def test_get_all_respects_limit(self, blob):
        for i in range(5):
            store.insert(f"https://{i}.example", f"T{i}", blob)

        assert len(store.get_all(limit=3)) == 3


class TestDelete:
    def test_delete_existing(self, blob):
        row = store.insert("https://example.com", "Example", blob)
        assert store.delete(row["id"]) is True
        assert store.get_by_id(row["id"]) is None

    def test_delete_missing_returns_false(self):
        assert store.delete(99999) is False


class TestFailures:
    def test_sqlite_error_becomes_persistence_error(self, blob, monkeypatch):
        def broken_connect(*args, **kwargs):
            raise sqlite3.OperationalError("disk I/O error")

        monkeypatch.setattr(store.sqlite3, "connect", broken_connect)

        with pytest.raises(PersistenceError, match="disk I/O error"):
            store.insert("https://example.com", "Example", blob)

    def test_missing_table_becomes_persistence_error(self, blob, tmp_path, monkeypatch):
        monkeypatch.setenv("DB_PATH", str(tmp_path / "empty.db"))

        with pytest.raises(PersistenceError):
            store.insert("https://example.com", "Example", blob)
