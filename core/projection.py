#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ColorJournal - Year Projection
Плотное представление года: день года -> статусы активностей

Сетка всегда привязана к текущему году: на границе лет она не
перелистывается на следующий год автоматически.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Dict, Iterator, List, Mapping, Tuple, Union

DateLike = Union[date, datetime]

def days_in_year(year: int) -> int:
    """365 или 366"""
    return 366 if calendar.isleap(year) else 365

def day_of_year(value: DateLike) -> int:
    """Порядковый номер дня (с 1) в году самой даты"""
    if isinstance(value, datetime):
        value = value.date()
    return (value - date(value.year, 1, 1)).days + 1

def date_for_day_of_year(year: int, day: int) -> date:
    if not 1 <= day <= days_in_year(year):
        raise ValueError(f"День {day} вне диапазона года {year}")
    return date(year, 1, 1) + timedelta(days=day - 1)

def day_key(value: DateLike) -> str:
    """Канонический ключ дня YYYY-MM-DD"""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()

def clamp_to_current_year(selected: DateLike, now: DateLike) -> date:
    """Выбор даты ограничен 1 января .. 31 декабря года now"""
    if isinstance(selected, datetime):
        selected = selected.date()
    year = now.year
    first, last = date(year, 1, 1), date(year, 12, 31)
    return min(max(selected, first), last)

class YearProjection:
    """
    Неизменяемая проекция журнала на год.

    Для каждого дня 1..days_in_year хранится список длины activity_count.
    Дни без записей дают список из False.
    """

    def __init__(self, year: int, activity_count: int, days: Dict[int, List[bool]]):
        self.year = year
        self.activity_count = activity_count
        self._days = days

    @property
    def days_in_year(self) -> int:
        return days_in_year(self.year)

    def __len__(self) -> int:
        return len(self._days)

    def __contains__(self, day: int) -> bool:
        return day in self._days

    def day(self, day: int) -> List[bool]:
        """Копия статусов дня; отсутствующий день - все False"""
        statuses = self._days.get(day)
        if statuses is None:
            return [False] * self.activity_count
        return list(statuses)

    def is_active(self, day: int, activity_index: int) -> bool:
        statuses = self._days.get(day)
        if statuses is None or not 0 <= activity_index < len(statuses):
            return False
        return statuses[activity_index]

    def column(self, activity_index: int) -> List[bool]:
        """Столбец одной активности по дням 1..days_in_year"""
        return [self.is_active(day, activity_index) for day in range(1, self.days_in_year + 1)]

    def items(self) -> Iterator[Tuple[int, List[bool]]]:
        for day in sorted(self._days):
            yield day, list(self._days[day])

    def with_cell(self, day: int, activity_index: int, active: bool) -> "YearProjection":
        """Новая проекция с одной изменённой ячейкой"""
        if not 1 <= day <= self.days_in_year or not 0 <= activity_index < self.activity_count:
            return self
        days = dict(self._days)
        statuses = list(days.get(day, [False] * self.activity_count))
        statuses[activity_index] = active
        days[day] = statuses
        return YearProjection(self.year, self.activity_count, days)

    def to_dict(self) -> Dict[str, object]:
        return {
            "year": self.year,
            "activity_count": self.activity_count,
            "days_in_year": self.days_in_year,
            "days": {str(day): statuses for day, statuses in self.items()},
        }

def project(entries: Mapping[str, Mapping[int, bool]], activity_count: int, year: int) -> YearProjection:
    """
    Чистая функция: разреженный журнал -> плотная проекция года.

    Индексы вне [0, activity_count) игнорируются.
    """
    days: Dict[int, List[bool]] = {}
    for day in range(1, days_in_year(year) + 1):
        statuses = [False] * activity_count
        day_entries = entries.get(day_key(date_for_day_of_year(year, day)))
        if day_entries:
            for index, active in day_entries.items():
                if 0 <= index < activity_count:
                    statuses[index] = bool(active)
        days[day] = statuses
    return YearProjection(year, activity_count, days)
