from datetime import date

from fastapi import APIRouter, Depends

from core.models import validate_day_key
from core.projection import day_of_year
from services import JournalService
from shared.models import DayStatus, ToggleResult
from ..dependencies import get_journal_service

router = APIRouter(prefix="/api/days", tags=["days"])

@router.get("/{day_key}", response_model=DayStatus)
async def get_day(day_key: str, service: JournalService = Depends(get_journal_service)):
    """Статусы всех активностей за день"""
    validate_day_key(day_key)
    return DayStatus(
        day=day_key,
        day_of_year=day_of_year(date.fromisoformat(day_key)),
        statuses=service.status_vector(day_key)
    )

@router.post("/{day_key}/activities/{index}", response_model=ToggleResult)
async def toggle_on(day_key: str, index: int, service: JournalService = Depends(get_journal_service)):
    saved = service.toggle_on(day_key, index)
    return ToggleResult(day=day_key, index=index, active=True, saved=saved)

@router.delete("/{day_key}/activities/{index}", response_model=ToggleResult)
async def toggle_off(day_key: str, index: int, service: JournalService = Depends(get_journal_service)):
    saved = service.toggle_off(day_key, index)
    return ToggleResult(day=day_key, index=index, active=False, saved=saved)

@router.delete("")
async def clear_all(service: JournalService = Depends(get_journal_service)):
    """Очистить журнал. Каталог не меняется."""
    service.clear_all()
    return {"cleared": True}
