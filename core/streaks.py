# core/streaks.py

from datetime import date, datetime
from typing import List, Union

from core.models import StreakSegment
from core.projection import YearProjection, day_of_year

# Одиночные дни серией не считаются
MIN_SEGMENT_LENGTH = 2

def streaks_for(projection: YearProjection, activity_index: int) -> List[StreakSegment]:
    """Все серии длиной от MIN_SEGMENT_LENGTH за один проход по году"""
    segments: List[StreakSegment] = []
    run_start = 0
    run_length = 0

    for day in range(1, projection.days_in_year + 1):
        if projection.is_active(day, activity_index):
            if run_length == 0:
                run_start = day
            run_length += 1
            continue
        if run_length >= MIN_SEGMENT_LENGTH:
            segments.append(StreakSegment(activity_index, run_start, run_length))
        run_length = 0

    if run_length >= MIN_SEGMENT_LENGTH:
        segments.append(StreakSegment(activity_index, run_start, run_length))

    return segments

def current_streak(projection: YearProjection, activity_index: int, today: Union[date, datetime]) -> int:
    """
    Длина серии, заканчивающейся сегодня.

    Счёт идёт назад от дня года today до первого пропуска или начала года.
    Если сегодня не отмечено, серия равна 0.
    """
    if today.year != projection.year:
        return 0

    count = 0
    day = day_of_year(today)
    while day > 0 and projection.is_active(day, activity_index):
        count += 1
        day -= 1
    return count

def longest_streak(projection: YearProjection, activity_index: int) -> int:
    longest = 0
    run = 0
    for active in projection.column(activity_index):
        run = run + 1 if active else 0
        longest = max(longest, run)
    return longest
