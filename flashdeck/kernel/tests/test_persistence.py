"""
Flashdeck Kernel -- Persistence Tests

Covers:
  - Slot round trip through serialize/deserialize
  - Startup fallback for absent, corrupt and structurally invalid slots
  - Tolerance of missing tags and missing/zero maxKey
  - FileStorage writes, reads and overwrites one file per slot
  - Write failures are logged and swallowed
  - Export strips keys; import rejects malformed documents
"""

import json
import logging

import pytest

from flashdeck.kernel.persistence import (
    FileStorage,
    MalformedImportDocument,
    MalformedPersistedState,
    MemoryStorage,
    PersistenceAdapter,
    deserialize_state,
    export_document,
    load_state,
    parse_import_document,
    serialize_state,
)
from flashdeck.kernel.store import empty_state


class TestSlotCodec:
    def test_round_trip(self, tagged_state):
        assert deserialize_state(serialize_state(tagged_state)) == tagged_state

    def test_slot_uses_max_key_field(self, tagged_state):
        data = json.loads(serialize_state(tagged_state))
        assert data["maxKey"] == 3
        assert data["questions"][0] == {"q": "1+1", "a": "2", "tags": ["math"], "key": 0}

    def test_missing_tags(self):
        state = deserialize_state('{"questions": [{"q": "a", "a": "b", "key": 4}], "maxKey": 5}')
        assert state.questions[0].tags == []
        assert state.next_key == 5

    def test_missing_max_key_rebuilt_from_keys(self):
        state = deserialize_state('{"questions": [{"q": "a", "a": "b", "key": 4}]}')
        assert state.next_key == 5

    def test_zero_max_key_rebuilt_from_keys(self):
        state = deserialize_state(
            '{"questions": [{"q": "a", "a": "b", "key": 0}, {"q": "c", "a": "d", "key": 1}], "maxKey": 0}'
        )
        assert state.next_key == 2

    @pytest.mark.parametrize("text", [
        "{not json",
        "null",
        "[]",
        '{"questions": {}}',
        '{"questions": [{"q": "a"}]}',
        '{"questions": [{"q": "a", "a": "b", "key": 1}, {"q": "c", "a": "d", "key": 1}]}',
        '{"questions": [{"q": "a", "a": "b", "key": 0}], "maxKey": -3}',
    ])
    def test_malformed(self, text):
        with pytest.raises(MalformedPersistedState):
            deserialize_state(text)


class TestLoadState:
    def test_absent_slot(self):
        assert load_state(MemoryStorage(), "appState") == empty_state()

    def test_corrupt_slot_falls_back(self, caplog):
        storage = MemoryStorage()
        storage.put("appState", "{not json")
        with caplog.at_level(logging.WARNING):
            assert load_state(storage, "appState") == empty_state()
        assert "malformed" in caplog.text

    def test_unreadable_slot_falls_back(self):
        class BrokenStorage(MemoryStorage):
            def get(self, slot):
                raise PermissionError("denied")

        assert load_state(BrokenStorage(), "appState") == empty_state()

    def test_undecodable_slot_file_falls_back(self, tmp_path, caplog):
        (tmp_path / "appState.json").write_bytes(b'{"questions": [], "maxKey": 0}\xff\xfe')
        with caplog.at_level(logging.WARNING):
            assert load_state(FileStorage(tmp_path), "appState") == empty_state()
        assert "unreadable" in caplog.text


class TestFileStorage:
    def test_missing_slot_reads_none(self, tmp_path):
        assert FileStorage(tmp_path).get("appState") is None

    def test_put_then_get(self, tmp_path):
        storage = FileStorage(tmp_path / "nested")
        storage.put("appState", "one")
        storage.put("appState", "two")
        assert storage.get("appState") == "two"
        assert sorted(p.name for p in (tmp_path / "nested").iterdir()) == ["appState.json"]

    def test_delete(self, tmp_path):
        storage = FileStorage(tmp_path)
        storage.put("appState", "x")
        storage.delete("appState")
        storage.delete("appState")
        assert storage.get("appState") is None


class TestPersistenceAdapter:
    def test_save_then_load(self, tagged_state):
        adapter = PersistenceAdapter(MemoryStorage(), "appState")
        adapter(tagged_state)
        assert adapter.load() == tagged_state

    def test_failed_write_is_logged_not_raised(self, tagged_state, caplog):
        class FullDisk(MemoryStorage):
            def put(self, slot, text):
                raise OSError("no space left on device")

        adapter = PersistenceAdapter(FullDisk(), "appState")
        with caplog.at_level(logging.WARNING):
            adapter.save(tagged_state)
        assert "failed to write" in caplog.text


class TestExportImport:
    def test_export_strips_keys(self, tagged_state):
        data = json.loads(export_document(tagged_state.questions))
        assert set(data) == {"questions"}
        assert data["questions"][0] == {"q": "1+1", "a": "2", "tags": ["math"]}
        assert all("key" not in item for item in data["questions"])

    def test_round_trip_preserves_order_and_content(self, tagged_state):
        items = parse_import_document(export_document(tagged_state.questions))
        assert items == [
            {"q": question.q, "a": question.a, "tags": question.tags}
            for question in tagged_state.questions
        ]

    def test_import_ignores_extra_fields(self):
        items = parse_import_document(
            '{"questions": [{"q": "x", "a": "y", "key": 9, "extra": true}], "maxKey": 10}'
        )
        assert items == [{"q": "x", "a": "y", "tags": []}]

    def test_import_accepts_null_tags(self):
        items = parse_import_document('{"questions": [{"q": "x", "a": "y", "tags": null}]}')
        assert items[0]["tags"] == []

    @pytest.mark.parametrize("text", [
        "{not json",
        "",
        "{}",
        '{"questions": "nope"}',
        '{"questions": [{"q": "x"}]}',
        '{"questions": [{"q": "x", "a": "y"}, 3]}',
    ])
    def test_malformed_document(self, text):
        with pytest.raises(MalformedImportDocument):
            parse_import_document(text)
