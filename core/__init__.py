#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ColorJournal - Core Package
Каталог активностей, журнал по дням, проекция года и серии

Версия: 1.0.0
"""

from .models import (
    AppTheme,
    RGBColor,
    Activity,
    StreakSegment,
    ValidationError,
    DEFAULT_ACTIVITIES,
    default_activities,
    validate_day_key
)

from .projection import (
    YearProjection,
    project,
    day_of_year,
    days_in_year,
    date_for_day_of_year,
    day_key,
    clamp_to_current_year
)

from .ledger import DayLedger, CHECK_MARK
from .catalog import ActivityCatalog
from .reindex import build_move_mapping, build_delete_mapping, remap
from .streaks import streaks_for, current_streak, longest_streak

__all__ = [
    # Models
    'AppTheme',
    'RGBColor',
    'Activity',
    'StreakSegment',
    'ValidationError',
    'DEFAULT_ACTIVITIES',
    'default_activities',
    'validate_day_key',

    # Projection
    'YearProjection',
    'project',
    'day_of_year',
    'days_in_year',
    'date_for_day_of_year',
    'day_key',
    'clamp_to_current_year',

    # Ledger / catalog
    'DayLedger',
    'CHECK_MARK',
    'ActivityCatalog',

    # Reindex
    'build_move_mapping',
    'build_delete_mapping',
    'remap',

    # Streaks
    'streaks_for',
    'current_streak',
    'longest_streak'
]
