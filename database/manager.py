# database/manager.py

import json
import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional, Dict, Any, List

logger = logging.getLogger(__name__)

class StoreError(Exception):
    """Хранилище нельзя прочитать"""
    pass

class KeyValueStore:
    """
    Локальное хранилище: один JSON файл, ключ -> сериализованный блоб.

    Каждая запись синхронная: весь документ пишется во временный файл,
    который затем заменяет основной. Ошибка записи логируется и не
    пробрасывается вызывающему коду.
    """

    def __init__(self, path: Path, backup_dir: Optional[Path] = None):
        self.path = Path(path)
        self.backup_dir = Path(backup_dir) if backup_dir else self.path.parent / "backups"
        self._data: Dict[str, Any] = {}
        self.save_count = 0
        self.failed_saves = 0
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            logger.info(f"📂 Файл хранилища {self.path} не найден, начинаем с пустого")
            self._data = {}
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"❌ Файл хранилища повреждён: {e}")
            self._create_backup_and_reset()
            return
        except OSError as e:
            raise StoreError(f"Не удалось прочитать {self.path}: {e}")

        if not isinstance(data, dict):
            logger.warning("⚠️ Неверный формат файла хранилища")
            self._create_backup_and_reset()
            return

        self._data = data
        logger.info(f"📂 Загружено ключей: {len(self._data)} из {self.path}")

    def _create_backup_and_reset(self) -> None:
        """Поврежденный файл переносится в бэкапы, хранилище очищается"""
        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)
            backup_name = f"corrupted_backup_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
            backup_path = self.backup_dir / backup_name
            shutil.move(str(self.path), str(backup_path))
            logger.warning(f"🔄 Поврежденный файл перемещен в {backup_path}")
        except OSError as e:
            logger.error(f"❌ Ошибка создания бэкапа: {e}")

        self._data = {}

    def _save(self) -> bool:
        temp_file = self.path.with_suffix(".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(self._data, ensure_ascii=False, indent=2)
            with open(temp_file, "w", encoding="utf-8") as f:
                f.write(payload)
            temp_file.replace(self.path)
            self.save_count += 1
            return True
        except (TypeError, ValueError, OSError) as e:
            logger.error(f"❌ Ошибка сохранения хранилища {self.path}: {e}")
            self.failed_saves += 1
            if temp_file.exists():
                temp_file.unlink()
            return False

    # ===== ПУБЛИЧНЫЙ ИНТЕРФЕЙС =====

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> bool:
        """Записать блоб и сохранить весь документ на диск"""
        previous = self._data.get(key)
        had_key = key in self._data
        self._data[key] = value
        if self._save():
            logger.debug(f"💾 Ключ {key} сохранён")
            return True

        # Несериализуемое значение не должно ломать следующие записи
        if had_key:
            self._data[key] = previous
        else:
            self._data.pop(key, None)
        return False

    def delete(self, key: str) -> bool:
        if key not in self._data:
            return False
        del self._data[key]
        return self._save()

    def keys(self) -> List[str]:
        return list(self._data.keys())

    def __contains__(self, key: str) -> bool:
        return key in self._data
