from pathlib import Path
from typing import List

import pytest

from core.catalog import ActivityCatalog
from core.models import Activity, RGBColor, ValidationError
from database.manager import KeyValueStore
from tests.conftest import seed_catalog


def test_fresh_store_gets_default_catalog(store: KeyValueStore) -> None:
    catalog = ActivityCatalog(store)

    assert len(catalog) == 13
    assert store.get("activityCatalog")[0]["colorHex"] == "#FF3B30"
    # Повторное открытие сохраняет те же id
    assert [a.id for a in ActivityCatalog(store)] == [a.id for a in catalog]


def test_unreadable_catalog_falls_back_to_defaults(store: KeyValueStore) -> None:
    store.set("activityCatalog", [{"id": "x"}, "junk"])

    assert len(ActivityCatalog(store)) == 13


def test_invalid_and_duplicate_items_are_skipped(store: KeyValueStore) -> None:
    store.set("activityCatalog", [
        {"id": "a", "name": "Read", "colorHex": "#FFCC00"},
        {"id": "a", "name": "Copy", "colorHex": "#FFCC00"},
        {"id": "b", "name": "Bad", "colorHex": "nope"},
        {"id": "c", "name": "Work", "colorHex": "#30B0C7"},
    ])

    assert ActivityCatalog(store).names() == ["Read", "Work"]


def test_empty_catalog_is_respected(store: KeyValueStore) -> None:
    store.set("activityCatalog", [])

    assert len(ActivityCatalog(store)) == 0


def test_add_persists_and_rejects_duplicate_id(store: KeyValueStore) -> None:
    seed_catalog(store, "Exercise")
    catalog = ActivityCatalog(store)
    activity = Activity(id="new", name="Swim", color=RGBColor(0, 122, 255))

    assert catalog.add(activity)
    assert ActivityCatalog(store).names() == ["Exercise", "Swim"]
    with pytest.raises(ValidationError):
        catalog.add(activity)


def test_move_reorders_catalog(store: KeyValueStore) -> None:
    seed_catalog(store, "Exercise", "Read", "Food", "Work")
    catalog = ActivityCatalog(store)

    assert catalog.move({2}, 0)
    assert catalog.names() == ["Food", "Exercise", "Read", "Work"]
    assert catalog.move({0, 1}, 4)
    assert catalog.names() == ["Read", "Work", "Food", "Exercise"]


def test_out_of_range_changes_are_silent_no_ops(store: KeyValueStore) -> None:
    seed_catalog(store, "Exercise", "Read")
    catalog = ActivityCatalog(store)
    events: List[str] = []
    catalog.subscribe(events.append)

    assert catalog.delete_at(5) is False
    assert catalog.move({7}, 0) is False
    assert catalog.move({0}, 3) is False
    assert catalog.update(2, name="Nope") is False
    assert catalog.names() == ["Exercise", "Read"]
    assert events == []


def test_update_keeps_identity(store: KeyValueStore) -> None:
    activities = seed_catalog(store, "Exercise", "Read")
    catalog = ActivityCatalog(store)

    assert catalog.update(1, name="Books", color=RGBColor(1, 2, 3))

    reloaded = ActivityCatalog(store).get(1)
    assert reloaded.id == activities[1].id
    assert reloaded.name == "Books"
    assert reloaded.color.to_hex() == "#010203"


def test_delete_and_lookup(store: KeyValueStore) -> None:
    seed_catalog(store, "Exercise", "Read", "Food")
    catalog = ActivityCatalog(store)

    assert catalog.position_of("id-food") == 2
    assert catalog.delete_at(0)
    assert catalog.position_of("id-food") == 1
    assert catalog.get(2) is None


def test_undecodable_store_file_yields_defaults(tmp_path: Path) -> None:
    path = tmp_path / "journal_store.json"
    path.write_bytes(b'{"activityCatalog": [], "x": "\xff\xfe"}')

    assert len(ActivityCatalog(KeyValueStore(path))) == 13
