#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ColorJournal - Core Data Models
Модели данных журнала активностей с валидацией

Версия: 1.0.0
Дата: 2025-01-04
"""

import re
from datetime import date
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Any, Tuple
import logging

logger = logging.getLogger(__name__)

# ===== ENUMS =====

class AppTheme(Enum):
    """Темы оформления"""
    SYSTEM = "system"
    LIGHT = "light"
    DARK = "dark"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: Optional[str]) -> "AppTheme":
        """Неизвестное значение превращается в SYSTEM"""
        try:
            return cls(value)
        except ValueError:
            return cls.SYSTEM

# ===== VALIDATION HELPERS =====

class ValidationError(Exception):
    """Ошибка валидации данных"""
    pass

DAY_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
HEX_PATTERN = re.compile(r"^[0-9A-Fa-f]+$")

def validate_text(text: str, min_length: int = 1, max_length: int = 100, field_name: str = "text") -> str:
    """Валидация текстовых полей"""
    if not isinstance(text, str):
        raise ValidationError(f"{field_name} должен быть строкой")

    text = text.strip()
    if len(text) < min_length:
        raise ValidationError(f"{field_name} должен содержать минимум {min_length} символов")

    if len(text) > max_length:
        raise ValidationError(f"{field_name} должен содержать максимум {max_length} символов")

    return text

# ===== CORE MODELS =====

@dataclass(frozen=True)
class RGBColor:
    """Цвет активности, каналы 0..255"""
    red: int
    green: int
    blue: int

    def __post_init__(self):
        for channel in (self.red, self.green, self.blue):
            if not isinstance(channel, int) or isinstance(channel, bool) or not 0 <= channel <= 255:
                raise ValidationError(f"Канал цвета вне диапазона 0..255: {channel!r}")

    @classmethod
    def from_hex(cls, value: str) -> "RGBColor":
        """
        Разбор строки цвета.

        Поддерживаются форматы RGB (12 бит), RRGGBB (24 бита) и AARRGGBB
        (32 бита, альфа отбрасывается). Ведущий символ
        '#' необязателен.
        """
        if not isinstance(value, str):
            raise ValidationError(f"Цвет должен быть строкой: {value!r}")

        digits = value.strip().strip("#")
        if not digits or not HEX_PATTERN.match(digits):
            raise ValidationError(f"Неверный формат цвета: {value!r}")

        number = int(digits, 16)
        if len(digits) == 3:
            return cls((number >> 8) * 17, (number >> 4 & 0xF) * 17, (number & 0xF) * 17)
        if len(digits) == 6:
            return cls(number >> 16, number >> 8 & 0xFF, number & 0xFF)
        if len(digits) == 8:
            return cls(number >> 16 & 0xFF, number >> 8 & 0xFF, number & 0xFF)

        raise ValidationError(f"Неверная длина цвета: {value!r}")

    @classmethod
    def from_floats(cls, red: float, green: float, blue: float) -> "RGBColor":
        """Цвет из нормализованных каналов 0..1"""
        def _channel(component: float) -> int:
            return int(round(min(max(float(component), 0.0), 1.0) * 255))

        return cls(_channel(red), _channel(green), _channel(blue))

    def to_hex(self) -> str:
        """#RRGGBB в верхнем регистре"""
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"

    def to_floats(self) -> Dict[str, float]:
        """Каналы 0..1 в формате Google Sheets (без альфы)"""
        return {
            "red": self.red / 255,
            "green": self.green / 255,
            "blue": self.blue / 255,
        }

    @property
    def luminance(self) -> float:
        """Относительная яркость по sRGB"""
        def _linear(channel: int) -> float:
            c = channel / 255
            return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

        return 0.2126 * _linear(self.red) + 0.7152 * _linear(self.green) + 0.0722 * _linear(self.blue)

    def prefers_dark_text(self) -> bool:
        """Светлый фон - подпись тёмным цветом"""
        return self.luminance > 0.35

    def is_white(self) -> bool:
        return self.red == self.green == self.blue == 255

@dataclass
class Activity:
    """Отслеживаемая активность: имя и цвет. id неизменен."""
    id: str
    name: str
    color: RGBColor

    def __post_init__(self):
        if not self.id:
            raise ValidationError("id активности не может быть пустым")
        self.name = validate_text(self.name, min_length=1, max_length=100, field_name="name")

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "colorHex": self.color.to_hex()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Activity":
        if not isinstance(data, dict):
            raise ValidationError(f"Ожидался объект активности, получено: {type(data).__name__}")
        try:
            return cls(
                id=str(data["id"]),
                name=data["name"],
                color=RGBColor.from_hex(data["colorHex"]),
            )
        except KeyError as e:
            raise ValidationError(f"Отсутствует поле активности: {e}")

    @classmethod
    def create(cls, name: str, color: RGBColor) -> "Activity":
        """Создание новой активности со свежим id"""
        return cls(id=str(uuid.uuid4()), name=name, color=color)

@dataclass(frozen=True)
class StreakSegment:
    """Непрерывная серия активных дней одной активности"""
    activity_index: int
    start_day_of_year: int
    run_length: int

    @property
    def end_day_of_year(self) -> int:
        return self.start_day_of_year + self.run_length - 1

    def to_dict(self) -> Dict[str, int]:
        return {
            "activity_index": self.activity_index,
            "start_day_of_year": self.start_day_of_year,
            "run_length": self.run_length,
        }

# ===== DEFAULTS =====

# Системные цвета iOS
DEFAULT_ACTIVITIES: List[Tuple[str, RGBColor]] = [
    ("Exercise 🏋️‍♂️", RGBColor(255, 59, 48)),     # red
    ("Stretch 🤸‍♀️", RGBColor(0, 199, 190)),       # mint
    ("Food 🥦", RGBColor(52, 199, 89)),            # green
    ("Create 🛠️", RGBColor(0, 122, 255)),          # blue
    ("Work 💻", RGBColor(48, 176, 199)),           # teal
    ("Read 📚", RGBColor(255, 204, 0)),            # yellow
    ("Journal ✍️", RGBColor(175, 82, 222)),        # purple
    ("Meditate 🧘", RGBColor(255, 149, 0)),        # orange
    ("Music 🎵", RGBColor(88, 86, 214)),           # indigo
    ("Chores 🧹", RGBColor(255, 45, 85)),          # pink
    ("Sleep 💤", RGBColor(50, 173, 230)),          # cyan
    ("Leafless 🌿", RGBColor(142, 142, 147)),      # gray
    ("Sick 🤒", RGBColor(162, 132, 94)),           # brown
]

def default_activities() -> List[Activity]:
    """Встроенный набор активностей со свежими id"""
    return [Activity.create(name, color) for name, color in DEFAULT_ACTIVITIES]

def validate_day_key(day_key: str) -> str:
    """Проверка ключа дня YYYY-MM-DD"""
    if not isinstance(day_key, str) or not DAY_KEY_PATTERN.match(day_key):
        raise ValidationError(f"Неверный формат даты: {day_key!r}")
    try:
        date.fromisoformat(day_key)
    except ValueError:
        raise ValidationError(f"Несуществующая дата: {day_key}")
    return day_key
