#!/usr/bin/env python3
"""
Скрипт запуска веб-дашборда ColorJournal
Использование: python scripts/start_web.py [--port PORT] [--host HOST] [--dev]
"""

import argparse
import os
import sys
from pathlib import Path

# Добавляем корневую папку в Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="ColorJournal Web Dashboard")
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"), help="Хост (по умолчанию 0.0.0.0)")
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", 8080)), help="Порт (по умолчанию 8080)")
    parser.add_argument("--dev", action="store_true", help="Режим разработки: автоперезагрузка и debug")
    return parser.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)

    # Конфигурация читается из окружения внутри create_app
    os.environ["HOST"] = args.host
    os.environ["PORT"] = str(args.port)
    if args.dev:
        os.environ["DEBUG_MODE"] = "true"
        os.environ.setdefault("LOG_LEVEL", "DEBUG")

    print(f"🚀 ColorJournal Dashboard: http://{args.host}:{args.port}")
    uvicorn.run(
        "dashboard.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.dev,
        log_level="debug" if args.dev else "info"
    )
    return 0

if __name__ == "__main__":
    sys.exit(main())
