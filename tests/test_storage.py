"""
Tests for key-value storage backends.
"""

import json
import os

import pytest

from config import LedgerStore
from errors import PersistenceError
from storage import JsonFileStore, MemoryStore


class TestMemoryStore:

    def test_get_missing(self):
        assert MemoryStore().get("roster") is None

    def test_set_and_get(self):
        store = MemoryStore()
        store.set_many({"a": "1", "b": "2"})
        assert store.get("a") == "1"
        assert store.snapshot() == {"a": "1", "b": "2"}


class TestJsonFileStore:

    def test_missing_file_reads_as_empty(self, tmp_path):
        assert JsonFileStore(str(tmp_path / "ledger.json")).get("roster") is None

    def test_write_creates_file(self, tmp_path):
        path = tmp_path / "nested" / "ledger.json"
        store = JsonFileStore(str(path))
        store.set_many({"roster": '["Alice"]', "sessions": "[]"})
        assert json.loads(path.read_text(encoding="utf-8")) == {"roster": '["Alice"]', "sessions": "[]"}
        assert store.get("roster") == '["Alice"]'

    def test_set_keeps_other_keys(self, tmp_path):
        store = JsonFileStore(str(tmp_path / "ledger.json"))
        store.set("roster", "[]")
        store.set("sessions", "[]")
        assert store.get("roster") == "[]"

    def test_no_temp_files_left(self, tmp_path):
        store = JsonFileStore(str(tmp_path / "ledger.json"))
        store.set("roster", "[]")
        assert os.listdir(tmp_path) == ["ledger.json"]

    @pytest.mark.parametrize("content", ["{broken", "[1, 2]", '{"roster": 5}'])
    def test_corrupt_file_raises(self, tmp_path, content):
        path = tmp_path / "ledger.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(PersistenceError) as exc:
            JsonFileStore(str(path)).get("roster")
        assert exc.value.operation == "read"

    def test_unwritable_location_raises(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        store = JsonFileStore(str(blocker / "ledger.json"))
        with pytest.raises(PersistenceError) as exc:
            store.set("roster", "[]")
        assert exc.value.operation == "write"

    def test_ledger_survives_reopen(self, tmp_path):
        path = str(tmp_path / "ledger.json")
        LedgerStore(JsonFileStore(path)).save(["Alice", "Bob"], [])
        ledger = LedgerStore(JsonFileStore(path)).load()
        assert ledger.roster == ["Alice", "Bob"]
        assert ledger.sessions == []
