from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from core.models import validate_day_key
from core.projection import clamp_to_current_year, day_of_year
from services import JournalService
from ..dependencies import get_journal_service

router = APIRouter(prefix="/api", tags=["grid"])

@router.get("/grid", response_model=Dict[str, Any])
async def get_grid(
    refresh: bool = Query(False, description="Перестроить проекцию"),
    selected: Optional[str] = Query(None, description="Выбранный день YYYY-MM-DD"),
    service: JournalService = Depends(get_journal_service)
):
    """Сетка текущего года: день года -> статусы активностей"""
    projection = service.projection(refresh=refresh)
    now = service.now()
    if selected:
        selected_date = clamp_to_current_year(date.fromisoformat(validate_day_key(selected)), now)
    else:
        selected_date = now.date()

    result = projection.to_dict()
    result["today"] = day_of_year(now)
    result["selected"] = day_of_year(selected_date)
    result["colors"] = [activity.color.to_hex() for activity in service.catalog]
    return result

@router.get("/streaks", response_model=List[Dict[str, Any]])
async def get_streak_badges(service: JournalService = Depends(get_journal_service)):
    """Текущая и лучшая серия по каждой активности"""
    return service.streak_badges()

@router.get("/streaks/{index}", response_model=List[Dict[str, int]])
async def get_streaks(index: int, service: JournalService = Depends(get_journal_service)):
    """Серии от двух дней для подписи поверх сетки"""
    return [segment.to_dict() for segment in service.streaks(index)]
