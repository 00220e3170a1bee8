#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ColorJournal - Activity Catalog
Упорядоченный список активностей. Позиция в списке - индекс столбца журнала.
"""

import logging
from typing import AbstractSet, List, Optional

from core.events import Observable
from core.models import Activity, RGBColor, ValidationError, default_activities, validate_text
from core.reindex import build_move_mapping
from database.manager import KeyValueStore

logger = logging.getLogger(__name__)

class ActivityCatalog(Observable):
    """
    Каталог активностей.

    Каждое изменение сразу сохраняет весь список. Ошибка сохранения
    только логируется: в памяти каталог остаётся корректным до перезапуска.
    Индекс вне диапазона - тихий no-op.
    """

    event_name = "catalog"

    def __init__(self, store: KeyValueStore, key: str = "activityCatalog"):
        super().__init__()
        self.store = store
        self.key = key
        self._activities: List[Activity] = self._load()
        if self.key not in self.store:
            self.store.set(self.key, [activity.to_dict() for activity in self._activities])

    def _load(self) -> List[Activity]:
        raw = self.store.get(self.key)
        if raw is None:
            logger.info("🆕 Каталог не найден, используем встроенный набор")
            return default_activities()

        if not isinstance(raw, list):
            logger.warning("⚠️ Неверный формат каталога, используем встроенный набор")
            return default_activities()

        activities: List[Activity] = []
        seen_ids = set()
        for item in raw:
            try:
                activity = Activity.from_dict(item)
            except ValidationError as e:
                logger.warning(f"⚠️ Пропущена активность {item!r}: {e}")
                continue
            if activity.id in seen_ids:
                logger.warning(f"⚠️ Повторный id активности {activity.id}, пропущен")
                continue
            seen_ids.add(activity.id)
            activities.append(activity)

        if raw and not activities:
            logger.warning("⚠️ Ни одна активность не прочитана, используем встроенный набор")
            return default_activities()

        logger.info(f"📂 Загружено активностей: {len(activities)}")
        return activities

    def _commit(self) -> bool:
        saved = self.store.set(self.key, [activity.to_dict() for activity in self._activities])
        self._notify()
        return saved

    # ===== ЧТЕНИЕ =====

    @property
    def activities(self) -> List[Activity]:
        return list(self._activities)

    def __len__(self) -> int:
        return len(self._activities)

    def __iter__(self):
        return iter(list(self._activities))

    def get(self, position: int) -> Optional[Activity]:
        if 0 <= position < len(self._activities):
            return self._activities[position]
        return None

    def position_of(self, activity_id: str) -> Optional[int]:
        for position, activity in enumerate(self._activities):
            if activity.id == activity_id:
                return position
        return None

    def names(self) -> List[str]:
        return [activity.name for activity in self._activities]

    # ===== ИЗМЕНЕНИЕ =====

    def add(self, activity: Activity) -> bool:
        if self.position_of(activity.id) is not None:
            raise ValidationError(f"Активность с id {activity.id} уже существует")
        self._activities.append(activity)
        logger.info(f"➕ Добавлена активность {activity.name}")
        return self._commit()

    def delete_at(self, position: int) -> bool:
        """
        Удалить активность. Перед этим вызывающий код обязан перенумеровать
        журнал (см. core.reindex.remap с to_position=None).
        """
        if not 0 <= position < len(self._activities):
            logger.debug(f"Удаление: позиция {position} вне диапазона")
            return False
        removed = self._activities.pop(position)
        logger.info(f"🗑️ Удалена активность {removed.name}")
        return self._commit()

    def can_move(self, from_positions: AbstractSet[int], to_position: int) -> bool:
        total = len(self._activities)
        if not from_positions or not 0 <= to_position <= total:
            return False
        return all(0 <= p < total for p in from_positions)

    def move(self, from_positions: AbstractSet[int], to_position: int) -> bool:
        """
        Переставить активности. Журнал должен быть перенумерован тем же
        (from_positions, to_position) до вызова.
        """
        if not self.can_move(from_positions, to_position):
            logger.debug(f"Перемещение {set(from_positions)} -> {to_position} вне диапазона")
            return False

        total = len(self._activities)
        mapping = build_move_mapping(from_positions, to_position, total)
        reordered: List[Optional[Activity]] = [None] * total
        for old, new in mapping.items():
            reordered[new] = self._activities[old]
        self._activities = reordered
        return self._commit()

    def update(self, position: int, name: Optional[str] = None, color: Optional[RGBColor] = None) -> bool:
        """Правка имени/цвета на месте, id сохраняется"""
        activity = self.get(position)
        if activity is None:
            logger.debug(f"Правка: позиция {position} вне диапазона")
            return False
        if name is not None:
            activity.name = validate_text(name, min_length=1, max_length=100, field_name="name")
        if color is not None:
            activity.color = color
        return self._commit()
