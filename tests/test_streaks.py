from datetime import date

from core.models import StreakSegment
from core.projection import date_for_day_of_year, day_key, project
from core.streaks import current_streak, longest_streak, streaks_for


def _projection(active_days, year=2025, index=0, activity_count=2):
    entries = {day_key(date_for_day_of_year(year, day)): {index: True} for day in active_days}
    return project(entries, activity_count, year)


def test_single_days_are_not_segments() -> None:
    projection = _projection([5, 6, 7, 10])

    assert streaks_for(projection, 0) == [StreakSegment(0, 5, 3)]
    assert streaks_for(projection, 1) == []


def test_segment_reaching_year_end_is_closed() -> None:
    projection = _projection([364, 365])

    segments = streaks_for(projection, 0)

    assert segments == [StreakSegment(0, 364, 2)]
    assert segments[0].end_day_of_year == 365


def test_current_streak_counts_back_from_today() -> None:
    projection = _projection([18, 19, 20])

    assert current_streak(projection, 0, date_for_day_of_year(2025, 20)) == 3
    assert current_streak(projection, 0, date_for_day_of_year(2025, 21)) == 0
    assert current_streak(projection, 0, date(2026, 1, 20)) == 0


def test_current_streak_stops_at_start_of_year() -> None:
    projection = _projection([1, 2])

    assert current_streak(projection, 0, date(2025, 1, 2)) == 2


def test_longest_streak_picks_the_longest_run() -> None:
    projection = _projection([1, 2, 10, 11, 12, 13, 30])

    assert longest_streak(projection, 0) == 4
    assert longest_streak(projection, 1) == 0
