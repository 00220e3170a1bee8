#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ColorJournal - Dashboard Dependencies
Провайдеры зависимостей для FastAPI приложения
"""

import logging

from fastapi import HTTPException, Request, status

from services import JournalService

logger = logging.getLogger(__name__)

def get_journal_service(request: Request) -> JournalService:
    """Получить сервис журнала текущего приложения"""
    manager = getattr(request.app.state, "service_manager", None)
    if manager is None or manager.journal_service is None:
        logger.error("❌ Сервис журнала не инициализирован")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Сервис недоступен")
    return manager.journal_service
