from fastapi import APIRouter, Depends, HTTPException
from typing import List

from services import JournalService
from shared.models import ActivityIn, ActivityOut, ActivityUpdate, MoveRequest
from ..dependencies import get_journal_service

router = APIRouter(prefix="/api/activities", tags=["activities"])

def _catalog(service: JournalService) -> List[ActivityOut]:
    return [ActivityOut.from_activity(position, activity) for position, activity in enumerate(service.catalog)]

@router.get("", response_model=List[ActivityOut])
async def list_activities(service: JournalService = Depends(get_journal_service)):
    """Каталог активностей в текущем порядке"""
    return _catalog(service)

@router.post("", response_model=ActivityOut, status_code=201)
async def add_activity(payload: ActivityIn, service: JournalService = Depends(get_journal_service)):
    activity = service.add_activity(payload.name, payload.rgb())
    return ActivityOut.from_activity(len(service.catalog) - 1, activity)

@router.put("/{position}", response_model=ActivityOut)
async def update_activity(position: int, payload: ActivityUpdate,
                          service: JournalService = Depends(get_journal_service)):
    activity = service.catalog.get(position)
    if activity is None:
        raise HTTPException(status_code=404, detail=f"Активность {position} не найдена")
    service.update_activity(position, name=payload.name, color=payload.rgb())
    return ActivityOut.from_activity(position, activity)

@router.delete("/{position}", response_model=List[ActivityOut])
async def delete_activity(position: int, service: JournalService = Depends(get_journal_service)):
    """Удаление активности вместе с её отметками в журнале"""
    if service.catalog.get(position) is None:
        raise HTTPException(status_code=404, detail=f"Активность {position} не найдена")
    service.delete_activity(position)
    return _catalog(service)

@router.post("/move", response_model=List[ActivityOut])
async def move_activities(payload: MoveRequest, service: JournalService = Depends(get_journal_service)):
    from_positions = set(payload.from_positions)
    if not service.catalog.can_move(from_positions, payload.to_position):
        raise HTTPException(status_code=404, detail="Позиция вне диапазона")
    service.move_activity(from_positions, payload.to_position)
    return _catalog(service)
