from fastapi import APIRouter, Depends

from services import JournalService
from shared.models import ThemeIn
from ..dependencies import get_journal_service

router = APIRouter(prefix="/api/settings", tags=["settings"])

@router.get("/theme")
async def get_theme(service: JournalService = Depends(get_journal_service)):
    theme = service.theme
    return {"theme": theme.value, "name": theme.display_name}

@router.put("/theme")
async def set_theme(payload: ThemeIn, service: JournalService = Depends(get_journal_service)):
    saved = service.set_theme(payload.theme)
    return {"theme": payload.theme.value, "saved": saved}
