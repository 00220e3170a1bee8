from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from core.models import Activity, RGBColor
from database.manager import KeyValueStore
from services.journal_service import JournalService

RED = RGBColor(255, 0, 0)
YELLOW = RGBColor(255, 255, 0)
GREEN = RGBColor(0, 128, 0)


@pytest.fixture
def store(tmp_path: Path) -> KeyValueStore:
    return KeyValueStore(tmp_path / "journal_store.json")


def make_activities(*names: str) -> list[Activity]:
    palette = [RED, YELLOW, GREEN, RGBColor(0, 0, 255), RGBColor(128, 0, 128)]
    return [Activity(id=f"id-{name.lower()}", name=name, color=palette[i % len(palette)]) for i, name in enumerate(names)]


def seed_catalog(store: KeyValueStore, *names: str) -> list[Activity]:
    activities = make_activities(*names)
    store.set("activityCatalog", [activity.to_dict() for activity in activities])
    return activities


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 6, 20, 12, 0)


@pytest.fixture
def service(store: KeyValueStore, fixed_now: datetime, tmp_path: Path) -> JournalService:
    seed_catalog(store, "Exercise", "Read", "Food", "Work")
    return JournalService(store, export_dir=tmp_path / "exports", clock=lambda: fixed_now)
