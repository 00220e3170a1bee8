from pathlib import Path
from typing import List

import pytest

from core.models import AppTheme, RGBColor, ValidationError
from database.manager import KeyValueStore
from services.google_sheets import GoogleSheetsService, RemoteSheetsError
from services.journal_service import JournalService
from tests.test_google_sheets import FakeClient, FakeSession


def test_status_vector_matches_catalog_size(service: JournalService) -> None:
    service.toggle_on("2025-03-01", 0)
    service.toggle_on("2025-03-01", 1)

    assert service.status_vector("2025-03-01") == [True, True, False, False]
    assert service.status_vector("2025-03-02") == [False] * 4


def test_toggle_rejects_unknown_activity(service: JournalService) -> None:
    with pytest.raises(ValidationError):
        service.toggle_on("2025-03-01", 4)
    with pytest.raises(ValidationError):
        service.status_vector("March 1")


def test_move_keeps_history_with_activity(service: JournalService) -> None:
    service.toggle_on("2025-06-01", 2)

    assert service.move_activity({2}, 0)

    assert service.catalog.names() == ["Food", "Exercise", "Read", "Work"]
    assert service.status_vector("2025-06-01") == [True, False, False, False]


def test_invalid_move_changes_nothing(service: JournalService) -> None:
    service.toggle_on("2025-06-01", 2)

    assert service.move_activity({9}, 0) is False

    assert service.catalog.names() == ["Exercise", "Read", "Food", "Work"]
    assert service.status_vector("2025-06-01") == [False, False, True, False]


def test_delete_drops_history_and_shifts(service: JournalService) -> None:
    service.toggle_on("2025-06-01", 1)
    service.toggle_on("2025-06-01", 3)

    assert service.delete_activity(1)

    assert service.catalog.names() == ["Exercise", "Food", "Work"]
    assert service.status_vector("2025-06-01") == [False, False, True]
    assert service.delete_activity(10) is False


def test_projection_rebuilds_when_catalog_grows(service: JournalService) -> None:
    service.toggle_on("2025-01-01", 0)
    first = service.projection()

    assert first.activity_count == 4
    assert service.projection() is first

    service.add_activity("Swim", RGBColor(0, 122, 255))
    second = service.projection()

    assert second.activity_count == 5
    assert second.day(1) == [True, False, False, False, False]


def test_projection_follows_toggles_without_rebuild(service: JournalService) -> None:
    service.projection()
    service.toggle_on("2025-06-20", 3)

    assert service.projection().is_active(171, 3)


def test_streaks_through_service(service: JournalService) -> None:
    for day in ("2025-06-18", "2025-06-19", "2025-06-20"):
        service.toggle_on(day, 0)
    service.toggle_on("2025-06-10", 0)

    assert service.current_streak(0) == 3
    assert [segment.run_length for segment in service.streaks(0)] == [3]
    badges = service.streak_badges()
    assert badges[0]["name"] == "Exercise"
    assert badges[0]["current_streak"] == 3
    assert badges[0]["longest_streak"] == 3
    assert badges[1]["current_streak"] == 0


def test_subscribe_reports_both_sources(service: JournalService) -> None:
    events: List[str] = []
    unsubscribe = service.subscribe(events.append)

    service.toggle_on("2025-01-01", 0)
    service.update_activity(0, name="Run")
    unsubscribe()
    service.clear_all()

    assert events == ["ledger", "catalog"]


def test_csv_export_uses_current_year(service: JournalService, tmp_path: Path) -> None:
    content = service.export_csv()

    assert content.splitlines()[0] == "Date,Exercise,Read,Food,Work"
    assert content.count("\n") == 366

    path = service.export_csv_file()
    assert path.parent == tmp_path / "exports"
    assert path.name == "colorjournal_export_20250620_120000.csv"


def test_theme_round_trip(service: JournalService, store: KeyValueStore) -> None:
    assert service.theme is AppTheme.SYSTEM

    assert service.set_theme(AppTheme.DARK)

    assert service.theme is AppTheme.DARK
    assert store.get("appSettings") == {"theme": "dark"}


@pytest.mark.asyncio
async def test_sheets_not_configured(service: JournalService) -> None:
    with pytest.raises(RemoteSheetsError) as exc_info:
        await service.export_to_sheets("sheet-1")

    assert exc_info.value.category == "auth"


@pytest.mark.asyncio
async def test_sheets_need_spreadsheet_id(service: JournalService) -> None:
    service.sheets = GoogleSheetsService(FakeSession(FakeClient()))

    with pytest.raises(RemoteSheetsError) as exc_info:
        await service.export_to_sheets()

    assert exc_info.value.category == "not_found"


@pytest.mark.asyncio
async def test_export_and_import_sheets(service: JournalService) -> None:
    client = FakeClient()
    service.sheets = GoogleSheetsService(FakeSession(client))
    service.spreadsheet_id = "sheet-1"
    client.metadata = {
        "sheets": [{"properties": {"sheetId": 0}, "data": [{"rowData": [{}, {}, {"values": [{}, {}, {"userEnteredFormat": {"backgroundColor": {"red": 1.0}}}]}]}]}]
    }

    assert await service.export_to_sheets()
    entries = await service.fetch_from_sheets(replace=True)

    assert len(client.batches) == 1
    assert entries == {"2025-01-02": {1: True}}
    assert service.ledger.entries == {"2025-01-02": {1: True}}


@pytest.mark.asyncio
async def test_closed_service_ignores_late_import(service: JournalService) -> None:
    client = FakeClient()
    client.metadata = {
        "sheets": [{"properties": {"sheetId": 0}, "data": [{"rowData": [{}, {"values": [{}, {"userEnteredFormat": {"backgroundColor": {"red": 1.0}}}]}]}]}]
    }
    service.sheets = GoogleSheetsService(FakeSession(client))
    service.close()

    assert await service.fetch_from_sheets("sheet-1", replace=True) is None
    assert service.ledger.entries == {}


def test_health_check_reports_counts(service: JournalService) -> None:
    service.toggle_on("2025-01-01", 0)

    report = service.health_check()

    assert report["status"] == "healthy"
    assert report["activities"] == 4
    assert report["days_recorded"] == 1
    assert report["google_sheets"] is False


def test_sign_out_of_sheets(service: JournalService) -> None:
    assert service.sign_out_of_sheets() is False

    session = FakeSession(FakeClient())
    service.sheets = GoogleSheetsService(session)

    assert service.sign_out_of_sheets() is True
    assert session.is_signed_in is False
    assert service.sign_out_of_sheets() is False
    assert service.health_check()["google_sheets"] is False
