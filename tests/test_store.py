import json
from pathlib import Path

from database.manager import KeyValueStore


def test_values_survive_reopen(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    store = KeyValueStore(path)

    assert store.set("activityData", {"2025-01-01": {"0": True}})
    reopened = KeyValueStore(path)

    assert reopened.get("activityData") == {"2025-01-01": {"0": True}}
    assert "activityData" in reopened
    assert store.save_count == 1


def test_missing_file_starts_empty(tmp_path: Path) -> None:
    store = KeyValueStore(tmp_path / "absent.json")

    assert store.keys() == []
    assert store.get("anything", "fallback") == "fallback"


def test_corrupted_file_is_moved_to_backups(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")

    store = KeyValueStore(path)

    assert store.keys() == []
    assert not path.exists()
    backups = list((tmp_path / "backups").glob("corrupted_backup_*.json"))
    assert len(backups) == 1
    assert backups[0].read_text(encoding="utf-8") == "{not json"


def test_invalid_utf8_file_is_moved_to_backups(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_bytes(b'{"activityData": {}, "x": "\xff\xfe"}')

    store = KeyValueStore(path)

    assert store.keys() == []
    assert not path.exists()
    assert len(list((tmp_path / "backups").glob("corrupted_backup_*.json"))) == 1


def test_non_object_document_is_reset(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")

    store = KeyValueStore(path, backup_dir=tmp_path / "old")

    assert store.keys() == []
    assert len(list((tmp_path / "old").iterdir())) == 1


def test_unserializable_value_is_rejected_without_losing_state(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    store = KeyValueStore(path)
    store.set("good", [1, 2])

    assert store.set("bad", {1, 2}) is False
    assert store.failed_saves == 1
    assert "bad" not in store
    assert store.set("other", "ok")
    assert json.loads(path.read_text(encoding="utf-8")) == {"good": [1, 2], "other": "ok"}
    assert not path.with_suffix(".tmp").exists()


def test_delete_removes_key_from_disk(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    store = KeyValueStore(path)
    store.set("activityData", {})

    assert store.delete("activityData")
    assert store.delete("activityData") is False
    assert "activityData" not in KeyValueStore(path)
