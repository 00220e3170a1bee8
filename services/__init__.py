# services/__init__.py

"""
Модуль сервисов ColorJournal

Содержит сервис журнала, экспорт и интеграцию с Google Sheets.
"""

import logging
from typing import Optional

from config import JournalConfig
from .journal_service import JournalService

logger = logging.getLogger(__name__)

class ServiceManager:
    """
    Менеджер сервисов

    Обеспечивает:
    - Инициализацию сервиса журнала из конфигурации
    - Проверку состояния
    - Корректное закрытие
    """

    def __init__(self, config: JournalConfig):
        self.config = config
        self.journal_service: Optional[JournalService] = None
        self.initialized = False

    def initialize_services(self) -> bool:
        """Инициализация всех сервисов"""
        try:
            logger.info("🔧 Инициализация сервисов ColorJournal...")
            self.journal_service = JournalService.from_config(self.config)
            self.initialized = True
            logger.info("✅ Все сервисы инициализированы успешно!")
            return True

        except Exception as e:
            logger.error(f"❌ Ошибка инициализации сервисов: {e}")
            self.close_services()
            return False

    def health_check(self) -> dict:
        """Проверка состояния всех сервисов"""
        health = {
            "status": "healthy",
            "services": {}
        }

        if self.journal_service:
            health["services"]["journal_service"] = self.journal_service.health_check()
        else:
            health["status"] = "error"

        service_statuses = [s.get("status", "unknown") for s in health["services"].values()]
        if "error" in service_statuses:
            health["status"] = "error"
        elif "warning" in service_statuses:
            health["status"] = "warning"

        return health

    def close_services(self):
        """Закрытие всех сервисов"""
        if self.journal_service:
            logger.info("📂 Закрытие JournalService...")
            self.journal_service.close()
            self.journal_service = None

        self.initialized = False
        logger.info("✅ Все сервисы закрыты")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close_services()

__all__ = [
    'JournalService',
    'ServiceManager'
]
