#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ColorJournal Web Dashboard - FastAPI Application
JSON API поверх сервиса журнала: отметки, сетка года, серии, экспорт

Версия: 1.0.0
Дата: 2025-01-04
"""

import logging
import logging.config
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from config import JournalConfig, load_config
from core.models import ValidationError
from services import ServiceManager
from services.google_sheets import RemoteSheetsError
from shared.models import HealthCheck

from dashboard.api import activities, days, export, grid, settings

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

def create_app(config: Optional[JournalConfig] = None, configure_logging: bool = True) -> FastAPI:
    """Создание FastAPI приложения"""
    config = config or load_config()
    if configure_logging:
        logging.config.dictConfig(config.get_logging_config())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Управление жизненным циклом приложения"""
        logger.info("🚀 Запуск ColorJournal Dashboard...")
        manager = ServiceManager(config)
        if not manager.initialize_services():
            raise RuntimeError("Не удалось инициализировать сервисы")
        app.state.service_manager = manager
        app.state.start_time = time.time()
        logger.info(f"🌐 Dashboard доступен на: http://{config.server.host}:{config.server.port}")

        yield

        logger.info("🛑 Остановка Dashboard...")
        manager.close_services()

    app = FastAPI(
        title="ColorJournal Dashboard",
        description="Журнал ежедневных активностей с сеткой года",
        version=VERSION,
        docs_url="/api/docs" if config.server.debug_mode else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if config.server.debug_mode else None,
        lifespan=lifespan
    )

    # ===== MIDDLEWARE =====

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Логирование запросов"""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} "
            f"- {response.status_code} "
            f"- {process_time:.3f}s"
        )
        response.headers["X-Process-Time"] = str(process_time)
        return response

    # ===== ОБРАБОТКА ОШИБОК =====

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(RemoteSheetsError)
    async def remote_error_handler(request: Request, exc: RemoteSheetsError):
        logger.warning(f"⚠️ Ошибка Google Sheets ({exc.category}): {exc.detail or exc.message}")
        return JSONResponse(status_code=502, content={"detail": exc.message, "category": exc.category})

    # ===== ROUTES =====

    @app.get("/health", response_model=HealthCheck)
    async def health(request: Request):
        manager: ServiceManager = request.app.state.service_manager
        report = manager.health_check()
        return HealthCheck(
            status=report["status"],
            service="colorjournal-dashboard",
            version=VERSION,
            timestamp=time.time(),
            details={**report["services"], "config": config.to_dict()}
        )

    app.include_router(activities.router)
    app.include_router(days.router)
    app.include_router(grid.router)
    app.include_router(export.router)
    app.include_router(settings.router)

    return app
