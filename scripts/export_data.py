#!/usr/bin/env python3
"""
Экспорт журнала ColorJournal из командной строки
Использование: python scripts/export_data.py [--format csv|sheets] [--spreadsheet-id ID]
"""

import argparse
import asyncio
import logging.config
import sys
from pathlib import Path

# Добавляем корневую папку в Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config import load_config
from services import ServiceManager
from services.google_sheets import RemoteSheetsError

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Экспорт журнала ColorJournal")
    parser.add_argument("--format", choices=["csv", "sheets"], default="csv", help="Формат экспорта")
    parser.add_argument("--spreadsheet-id", default=None, help="ID Google таблицы (по умолчанию GOOGLE_SHEET_ID)")
    return parser.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    config = load_config()
    logging.config.dictConfig(config.get_logging_config())

    with ServiceManager(config) as manager:
        if not manager.initialize_services():
            print("❌ Не удалось инициализировать сервисы")
            return 1
        service = manager.journal_service

        if args.format == "csv":
            path = service.export_csv_file()
            print(f"✅ CSV сохранён: {path}")
            return 0

        try:
            asyncio.run(service.export_to_sheets(args.spreadsheet_id))
        except RemoteSheetsError as e:
            print(f"❌ {e.message}")
            return 2
        print("✅ Таблица обновлена")
        return 0

if __name__ == "__main__":
    sys.exit(main())
