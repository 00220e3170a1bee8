#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ColorJournal - Day Ledger
Разреженный журнал: ключ дня -> {индекс активности: активна}

Отсутствие дня или индекса означает "не активна".
Каждое изменение синхронно сохраняет весь журнал.
"""

import logging
from datetime import date
from typing import Dict, Iterator, List, Mapping, Optional, Sequence

from core.events import Observable
from core.models import Activity, ValidationError, validate_day_key
from core.projection import YearProjection, day_of_year, project
from database.manager import KeyValueStore

logger = logging.getLogger(__name__)

CHECK_MARK = "✓"

Entries = Dict[str, Dict[int, bool]]

def decode_entries(raw) -> Entries:
    """
    Разбор сохранённого журнала. Ошибочные элементы отбрасываются,
    нераспознаваемый документ даёт пустой журнал.
    """
    if not isinstance(raw, dict):
        if raw is not None:
            logger.warning("⚠️ Неверный формат журнала, начинаем с пустого")
        return {}

    entries: Entries = {}
    for key, day_data in raw.items():
        if not isinstance(day_data, dict):
            logger.warning(f"⚠️ Пропущена запись журнала: {key!r}")
            continue
        try:
            validate_day_key(key)
        except ValidationError as e:
            logger.warning(f"⚠️ Пропущена запись журнала: {e}")
            continue
        statuses: Dict[int, bool] = {}
        for index, active in day_data.items():
            try:
                index = int(index)
            except (TypeError, ValueError):
                logger.warning(f"⚠️ Неверный индекс активности {index!r} в {key}")
                continue
            if index < 0:
                logger.warning(f"⚠️ Отрицательный индекс активности {index} в {key}")
                continue
            if not isinstance(active, bool):
                logger.warning(f"⚠️ Неверное значение {active!r} в {key}")
                continue
            statuses[index] = active
        # Пустые дни не хранятся
        if statuses:
            entries[key] = statuses
    return entries

def encode_entries(entries: Entries) -> Dict[str, Dict[str, bool]]:
    return {key: {str(index): active for index, active in statuses.items()} for key, statuses in entries.items()}

class DayLedger(Observable):
    """Журнал отметок по дням"""

    event_name = "ledger"

    def __init__(self, store: KeyValueStore, key: str = "activityData"):
        super().__init__()
        self.store = store
        self.key = key
        self._entries: Entries = decode_entries(store.get(key))
        self._projection: Optional[YearProjection] = None
        logger.info(f"📂 Журнал загружен: дней с записями {len(self._entries)}")

    # ===== ЧТЕНИЕ =====

    @property
    def entries(self) -> Entries:
        """Копия разреженного журнала"""
        return {key: dict(statuses) for key, statuses in self._entries.items()}

    @property
    def projection(self) -> Optional[YearProjection]:
        """Последняя построенная проекция (или None)"""
        return self._projection

    def is_active(self, day_key: str, activity_index: int) -> bool:
        return self._entries.get(day_key, {}).get(activity_index, False)

    def status_vector(self, day_key: str, activity_count: int) -> List[bool]:
        """Плотный список статусов дня длиной activity_count"""
        day_data = self._entries.get(day_key, {})
        return [day_data.get(index, False) for index in range(activity_count)]

    def day_keys(self) -> List[str]:
        return sorted(self._entries)

    # ===== ИЗМЕНЕНИЕ =====

    def toggle_on(self, day_key: str, activity_index: int) -> bool:
        return self._set(day_key, activity_index, True)

    def toggle_off(self, day_key: str, activity_index: int) -> bool:
        return self._set(day_key, activity_index, False)

    def _set(self, day_key: str, activity_index: int, active: bool) -> bool:
        validate_day_key(day_key)
        if activity_index < 0:
            raise ValueError(f"Отрицательный индекс активности: {activity_index}")

        day_data = self._entries.get(day_key)
        if day_data is None:
            if not active:
                # Выключать нечего, состояние уже совпадает
                self._update_projection(day_key, activity_index, active)
                return True
            day_data = self._entries[day_key] = {}

        if active:
            day_data[activity_index] = True
        else:
            # Явное False не хранится: отсутствие и так означает "не активна"
            day_data.pop(activity_index, None)
            if not day_data:
                del self._entries[day_key]

        saved = self._persist()
        self._update_projection(day_key, activity_index, active)
        self._notify()
        return saved

    def _update_projection(self, day_key: str, activity_index: int, active: bool) -> None:
        """Точечное обновление живой проекции вместо полной перестройки"""
        if self._projection is None:
            return
        year = int(day_key[:4])
        if year != self._projection.year:
            return
        day = day_of_year(date.fromisoformat(day_key))
        self._projection = self._projection.with_cell(day, activity_index, active)

    def apply_mapping(self, mapping: Mapping[int, int]) -> bool:
        """
        Переписать индексы всех дней через mapping (старый -> новый).
        Индексы без отображения удаляются.
        """
        remapped: Entries = {}
        for key, statuses in self._entries.items():
            new_statuses = {mapping[index]: active for index, active in statuses.items() if index in mapping}
            if new_statuses:
                remapped[key] = new_statuses
        self._entries = remapped
        self._projection = None
        saved = self._persist()
        self._notify()
        return saved

    def clear_all(self) -> bool:
        """Очистить журнал и удалить его из хранилища. Каталог не трогается."""
        self._entries = {}
        self._projection = None
        removed = self.store.delete(self.key)
        logger.info("🗑️ Журнал очищен")
        self._notify()
        return removed

    def replace_entries(self, entries: Entries) -> bool:
        """Заменить журнал целиком (например, данными из таблицы)"""
        self._entries = {key: dict(statuses) for key, statuses in entries.items() if statuses}
        self._projection = None
        saved = self._persist()
        self._notify()
        return saved

    def _persist(self) -> bool:
        return self.store.set(self.key, encode_entries(self._entries))

    # ===== ПРОЕКЦИЯ И ЭКСПОРТ =====

    def rebuild_projection(self, activity_count: int, year: int) -> YearProjection:
        """Полная перестройка проекции: O(days_in_year * activity_count)"""
        self._projection = project(self._entries, activity_count, year)
        return self._projection

    def export_rows(self, activities: Sequence[Activity]) -> Iterator[List[str]]:
        """Строки [ключ дня, отметка или пусто по каждой активности] по возрастанию дат"""
        for key in self.day_keys():
            day_data = self._entries[key]
            yield [key] + [CHECK_MARK if day_data.get(index) else "" for index in range(len(activities))]
