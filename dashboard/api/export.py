from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from services import JournalService
from shared.models import SheetsImportRequest, SheetsRequest
from utils.datetime_utils import export_timestamp
from ..dependencies import get_journal_service

router = APIRouter(prefix="/api", tags=["export"])

@router.get("/export/csv", response_class=PlainTextResponse)
async def export_csv(service: JournalService = Depends(get_journal_service)):
    filename = f"colorjournal_export_{export_timestamp(service.now())}.csv"
    return PlainTextResponse(
        service.export_csv(),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )

@router.post("/export/csv/file")
async def export_csv_file(service: JournalService = Depends(get_journal_service)):
    """Сохранить CSV в каталог экспорта"""
    path = service.export_csv_file()
    return {"path": str(path)}

@router.post("/export/sheets")
async def export_sheets(payload: SheetsRequest, service: JournalService = Depends(get_journal_service)):
    applied = await service.export_to_sheets(payload.spreadsheet_id)
    return {"exported": applied}

@router.delete("/sheets/session")
async def sign_out_sheets(service: JournalService = Depends(get_journal_service)):
    """Выход из Google аккаунта"""
    return {"signed_out": service.sign_out_of_sheets()}

@router.post("/import/sheets")
async def import_sheets(payload: SheetsImportRequest, service: JournalService = Depends(get_journal_service)):
    """Прочитать отметки из таблицы; replace=true заменяет локальный журнал"""
    entries = await service.fetch_from_sheets(payload.spreadsheet_id, replace=payload.replace)
    if entries is None:
        return {"days": 0, "replaced": False, "entries": {}}
    return {
        "days": len(entries),
        "replaced": payload.replace,
        "entries": {key: sorted(statuses) for key, statuses in entries.items()}
    }
