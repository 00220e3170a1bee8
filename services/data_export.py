# services/data_export.py

import csv
import io
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from core.ledger import CHECK_MARK, DayLedger
from core.models import Activity
from core.projection import YearProjection, date_for_day_of_year, day_key, project
from utils.datetime_utils import export_timestamp, short_month_day

logger = logging.getLogger(__name__)

SHEET_ID = 0
DAY_COLUMN_WIDTH = 24

CELL_FIELDS = "userEnteredValue,userEnteredFormat.backgroundColor"

def _year_projection(ledger: DayLedger, activities: Sequence[Activity], year: int) -> YearProjection:
    # Экспорт только читает журнал: проекция строится отдельно от живой
    return project(ledger.entries, len(activities), year)

# ===== CSV =====

def csv_rows(ledger: DayLedger, activities: Sequence[Activity], year: int) -> List[List[str]]:
    """Заголовок + строка на каждый день года, даже без отметок"""
    projection = _year_projection(ledger, activities, year)
    rows = [["Date"] + [activity.name for activity in activities]]
    for day in range(1, projection.days_in_year + 1):
        statuses = projection.day(day)
        rows.append(
            [day_key(date_for_day_of_year(year, day))]
            + [CHECK_MARK if active else "" for active in statuses]
        )
    return rows

def to_csv(ledger: DayLedger, activities: Sequence[Activity], year: int, rfc4180: bool = False) -> str:
    """
    CSV сетка года.

    По умолчанию поля просто соединяются запятыми: запятая или перевод
    строки в имени активности ломают разметку. rfc4180=True включает
    экранирование через модуль csv.
    """
    rows = csv_rows(ledger, activities, year)
    if not rfc4180:
        return "".join(",".join(row) + "\n" for row in rows)

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue()

def export_csv_file(content: str, export_dir: Path, now: Optional[datetime] = None) -> Path:
    """Записать CSV в export_dir с меткой времени в имени"""
    export_dir = Path(export_dir)
    export_dir.mkdir(parents=True, exist_ok=True)
    filename = export_dir / f"colorjournal_export_{export_timestamp(now)}.csv"
    with open(filename, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    logger.info(f"📤 CSV экспорт сохранён: {filename}")
    return filename

# ===== GOOGLE SHEETS =====

def _text_cell(text: str) -> Dict[str, Any]:
    return {"userEnteredValue": {"stringValue": text}}

def to_colored_batch(ledger: DayLedger, activities: Sequence[Activity], year: int) -> List[Dict[str, Any]]:
    """
    Строки для updateCells: заголовок с подписями дней и по строке на
    активность. Активный день - пустая ячейка с заливкой цветом активности.
    """
    projection = _year_projection(ledger, activities, year)
    total_days = projection.days_in_year

    header = [_text_cell("")] + [
        _text_cell(short_month_day(date_for_day_of_year(year, day))) for day in range(1, total_days + 1)
    ]
    rows = [{"values": header}]

    for index, activity in enumerate(activities):
        fill = {"userEnteredFormat": {"backgroundColor": activity.color.to_floats()}}
        values = [_text_cell(activity.name)]
        for day in range(1, total_days + 1):
            values.append(dict(fill) if projection.is_active(day, index) else {})
        rows.append({"values": values})

    return rows

def grid_range(start_row: int, end_row: int, start_column: int, end_column: int, sheet_id: int = SHEET_ID) -> Dict[str, int]:
    """GridRange: индексы с 0, end не включается"""
    return {
        "sheetId": sheet_id,
        "startRowIndex": start_row,
        "endRowIndex": end_row,
        "startColumnIndex": start_column,
        "endColumnIndex": end_column,
    }

def build_sheet_requests(ledger: DayLedger, activities: Sequence[Activity], year: int,
                         sheet_id: int = SHEET_ID) -> List[Dict[str, Any]]:
    """Запросы batchUpdate: размер сетки, ширина столбцов, одна запись ячеек"""
    rows = to_colored_batch(ledger, activities, year)
    column_count = len(rows[0]["values"])
    row_count = len(rows)

    return [
        {
            "updateSheetProperties": {
                "properties": {
                    "sheetId": sheet_id,
                    "gridProperties": {"rowCount": row_count, "columnCount": column_count},
                },
                "fields": "gridProperties(rowCount,columnCount)",
            }
        },
        {
            "updateDimensionProperties": {
                "range": {
                    "sheetId": sheet_id,
                    "dimension": "COLUMNS",
                    "startIndex": 1,
                    "endIndex": column_count,
                },
                "properties": {"pixelSize": DAY_COLUMN_WIDTH},
                "fields": "pixelSize",
            }
        },
        {
            "updateCells": {
                "range": grid_range(0, row_count, 0, column_count, sheet_id),
                "rows": rows,
                "fields": CELL_FIELDS,
            }
        },
    ]
