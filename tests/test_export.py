from datetime import datetime
from pathlib import Path

from core.ledger import CHECK_MARK, DayLedger
from core.models import Activity, RGBColor
from database.manager import KeyValueStore
from services.data_export import (
    CELL_FIELDS,
    DAY_COLUMN_WIDTH,
    build_sheet_requests,
    export_csv_file,
    to_colored_batch,
    to_csv,
)
from tests.conftest import make_activities


def test_empty_ledger_exports_every_day_of_leap_year(store: KeyValueStore) -> None:
    content = to_csv(DayLedger(store), make_activities("Exercise", "Read"), 2024)
    lines = content.split("\n")

    assert content.endswith("\n")
    assert len(lines) - 1 == 367
    assert lines[0] == "Date,Exercise,Read"
    assert lines[1] == "2024-01-01,,"
    assert lines[366] == "2024-12-31,,"


def test_common_year_has_365_day_rows(store: KeyValueStore) -> None:
    content = to_csv(DayLedger(store), make_activities("Exercise"), 2025)

    assert content.count("\n") == 366


def test_active_cells_get_check_mark(store: KeyValueStore) -> None:
    ledger = DayLedger(store)
    ledger.toggle_on("2025-03-01", 1)

    lines = to_csv(ledger, make_activities("Exercise", "Read"), 2025).splitlines()

    assert lines[60] == f"2025-03-01,,{CHECK_MARK}"


def test_plain_csv_does_not_escape_commas(store: KeyValueStore) -> None:
    activities = [Activity(id="a", name="Eat, drink", color=RGBColor(0, 0, 0))]

    plain = to_csv(DayLedger(store), activities, 2025).splitlines()[0]
    quoted = to_csv(DayLedger(store), activities, 2025, rfc4180=True).splitlines()[0]

    assert plain == "Date,Eat, drink"
    assert quoted == 'Date,"Eat, drink"'


def test_export_file_name_has_timestamp(tmp_path: Path) -> None:
    path = export_csv_file("Date\n", tmp_path / "exports", datetime(2025, 6, 20, 9, 5, 7))

    assert path.name == "colorjournal_export_20250620_090507.csv"
    assert path.read_text(encoding="utf-8") == "Date\n"


def test_colored_batch_shape(store: KeyValueStore) -> None:
    ledger = DayLedger(store)
    ledger.toggle_on("2025-01-05", 0)
    activities = [Activity(id="a", name="Exercise", color=RGBColor(255, 0, 51))]

    rows = to_colored_batch(ledger, activities, 2025)

    header = rows[0]["values"]
    assert len(rows) == 2
    assert len(header) == 366
    assert header[0] == {"userEnteredValue": {"stringValue": ""}}
    assert header[5] == {"userEnteredValue": {"stringValue": "Jan 5"}}
    assert header[365] == {"userEnteredValue": {"stringValue": "Dec 31"}}

    cells = rows[1]["values"]
    assert cells[0] == {"userEnteredValue": {"stringValue": "Exercise"}}
    assert cells[5] == {"userEnteredFormat": {"backgroundColor": {"red": 1.0, "green": 0.0, "blue": 0.2}}}
    assert cells[4] == {}
    assert cells[6] == {}


def test_sheet_requests_resize_widen_and_write(store: KeyValueStore) -> None:
    requests = build_sheet_requests(DayLedger(store), make_activities("Exercise", "Read"), 2024)

    assert [next(iter(request)) for request in requests] == [
        "updateSheetProperties", "updateDimensionProperties", "updateCells",
    ]
    grid = requests[0]["updateSheetProperties"]["properties"]["gridProperties"]
    assert grid == {"rowCount": 3, "columnCount": 367}

    dimension = requests[1]["updateDimensionProperties"]
    assert dimension["range"]["startIndex"] == 1
    assert dimension["range"]["endIndex"] == 367
    assert dimension["properties"] == {"pixelSize": DAY_COLUMN_WIDTH}

    cells = requests[2]["updateCells"]
    assert cells["fields"] == CELL_FIELDS
    assert cells["range"]["endRowIndex"] == 3
    assert cells["range"]["endColumnIndex"] == 367
    assert len(cells["rows"]) == 3
