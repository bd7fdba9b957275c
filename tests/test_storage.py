import json

import pytest

from timebank.ledger.modules.storage import ENTRIES_SLOT, SETTINGS_SLOT, JsonFileStorage, MemoryStorage


def test_json_storage_roundtrip(tmp_path):
    storage = JsonFileStorage(tmp_path / "data")
    assert storage.load(ENTRIES_SLOT) is None
    storage.save(ENTRIES_SLOT, [{"date": "2024-01-15", "notes": "Reunião"}])
    storage.save(SETTINGS_SLOT, {"default_contractual_hours": 8})
    assert storage.load(ENTRIES_SLOT) == [{"date": "2024-01-15", "notes": "Reunião"}]
    assert storage.load(SETTINGS_SLOT) == {"default_contractual_hours": 8}
    assert sorted(p.name for p in (tmp_path / "data").iterdir()) == [
        "timebank_entries.json",
        "timebank_settings.json",
    ]


def test_json_storage_overwrites_snapshot(tmp_path):
    storage = JsonFileStorage(tmp_path)
    storage.save(ENTRIES_SLOT, [1, 2, 3])
    storage.save(ENTRIES_SLOT, [])
    assert json.loads((tmp_path / "timebank_entries.json").read_text(encoding="utf-8")) == []


def test_json_storage_malformed_file_is_absent(tmp_path):
    (tmp_path / "timebank_settings.json").write_text("{not json", encoding="utf-8")
    assert JsonFileStorage(tmp_path).load(SETTINGS_SLOT) is None


def test_unknown_slot_rejected(tmp_path):
    with pytest.raises(KeyError):
        JsonFileStorage(tmp_path).save("other", {})
    with pytest.raises(KeyError):
        MemoryStorage().load("other")


def test_memory_storage_copies_snapshot():
    storage = MemoryStorage()
    snapshot = [{"a": 1}]
    storage.save(ENTRIES_SLOT, snapshot)
    snapshot.append({"b": 2})
    assert storage.load(ENTRIES_SLOT) == [{"a": 1}]
