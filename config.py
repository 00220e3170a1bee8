#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ColorJournal - Configuration
Централизованная конфигурация с валидацией

Версия: 1.0.0
Дата: 2025-01-04
"""

import os
import sys
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass
from enum import Enum

import pytz

class Environment(Enum):
    """Среды выполнения"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

class LogLevel(Enum):
    """Уровни логирования"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

@dataclass
class StorageConfig:
    """Конфигурация локального хранилища"""
    data_dir: Path
    store_file: str = "journal_store.json"
    catalog_key: str = "activityCatalog"
    ledger_key: str = "activityData"
    settings_key: str = "appSettings"

    @property
    def path(self) -> Path:
        return self.data_dir / self.store_file

    @property
    def backup_dir(self) -> Path:
        return self.data_dir / "backups"

@dataclass
class ServerConfig:
    """Конфигурация сервера"""
    host: str = "0.0.0.0"
    port: int = 8080
    debug_mode: bool = False

@dataclass
class IntegrationsConfig:
    """Конфигурация интеграций"""
    google_sheet_id: Optional[str] = None
    google_credentials_file: str = "service_account.json"
    google_enabled: bool = False

def _env_bool(key: str, default: str) -> bool:
    return os.getenv(key, default).lower() == 'true'

class JournalConfig:
    """Главный класс конфигурации"""

    def __init__(self):
        self.environment = Environment(os.getenv('ENVIRONMENT', 'development'))
        self._load_config()
        self._validate_config()
        self._ensure_directories()

    def _load_config(self):
        """Загрузка конфигурации из переменных окружения"""

        # Директории
        self.data_dir = Path(os.getenv('DATA_DIR', 'data'))
        self.export_dir = Path(os.getenv('EXPORT_DIR', 'exports'))
        self.log_dir = Path(os.getenv('LOG_DIR', 'logs'))

        # Хранилище
        self.storage = StorageConfig(
            data_dir=self.data_dir,
            store_file=os.getenv('STORE_FILE', 'journal_store.json')
        )

        # Сервер
        self.server = ServerConfig(
            host=os.getenv('HOST', '0.0.0.0'),
            port=int(os.getenv('PORT', 8080)),
            debug_mode=_env_bool('DEBUG_MODE', 'false')
        )

        # Интеграции
        self.integrations = IntegrationsConfig(
            google_sheet_id=os.getenv('GOOGLE_SHEET_ID') or None,
            google_credentials_file=os.getenv('GOOGLE_CREDENTIALS_FILE', 'service_account.json'),
            google_enabled=bool(os.getenv('GOOGLE_SHEET_ID'))
        )

        # Время
        self.timezone = os.getenv('TIMEZONE', 'UTC')

        # Логирование
        self.log_level = LogLevel(os.getenv('LOG_LEVEL', 'INFO').upper())
        self.log_to_file = _env_bool('LOG_TO_FILE', 'true')
        self.log_format = os.getenv(
            'LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

        # Экспорт
        self.csv_rfc4180 = _env_bool('CSV_RFC4180', 'false')

    def _validate_config(self):
        """Валидация конфигурации"""
        errors = []

        if not 1024 <= self.server.port <= 65535:
            errors.append(f"Порт {self.server.port} вне допустимого диапазона (1024-65535)")

        if self.timezone not in pytz.all_timezones_set:
            errors.append(f"Неизвестная таймзона: {self.timezone}")

        if not self.storage.store_file.endswith('.json'):
            errors.append("STORE_FILE должен иметь расширение .json")

        if errors:
            raise ValueError("Ошибки конфигурации:\n" + "\n".join(f"• {error}" for error in errors))

    def _ensure_directories(self):
        """Создание необходимых директорий"""
        directories = [
            self.data_dir,
            self.export_dir
        ]
        if self.log_to_file:
            directories.append(self.log_dir)

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    def get_logging_config(self) -> Dict[str, Any]:
        """Конфигурация для logging.config.dictConfig"""
        handlers = ['console']
        if self.log_to_file:
            handlers.append('file')

        config = {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'level': self.log_level.value,
                    'formatter': 'default',
                    'stream': sys.stdout
                }
            },
            'loggers': {
                '': {
                    'level': self.log_level.value,
                    'handlers': handlers,
                    'propagate': False
                },
                'urllib3': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                },
                'google': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                }
            }
        }

        if self.log_to_file:
            config['handlers']['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'filename': str(self.log_dir / f"colorjournal_{self.environment.value}.log"),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5,
                'encoding': 'utf-8'
            }

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Сводка настроек для /health (без путей к ключам Google)"""
        return {
            'environment': self.environment.value,
            'store_file': self.storage.store_file,
            'export_dir': str(self.export_dir),
            'timezone': self.timezone,
            'csv_rfc4180': self.csv_rfc4180,
            'google_sheets': self.integrations.google_enabled,
            'log_level': self.log_level.value
        }

def load_config() -> JournalConfig:
    """Новая конфигурация из текущего окружения"""
    return JournalConfig()

__all__ = [
    'JournalConfig',
    'load_config',
    'Environment',
    'LogLevel',
    'StorageConfig',
    'ServerConfig',
    'IntegrationsConfig'
]
