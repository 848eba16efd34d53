"""Consecutive-day activity streak."""

from datetime import date, datetime
from typing import Iterable, Union


def _normalize_day(value: Union[date, datetime]) -> date:
    """Drop the time of day, if any."""
    if isinstance(value, datetime):
        return value.date()
    return value


def calculate_streak(streak_dates: Iterable[Union[date, datetime]], today: date) -> int:
    """
    Count consecutive active days ending today or yesterday.

    Args:
        streak_dates: Days on which at least one action was completed
        today: Current calendar date

    Returns:
        Streak length in days, 0 if the latest activity is older than yesterday

    Example:
        today = Mar 10, dates = {Mar 10, Mar 9, Mar 7}
        = 2 (the gap before Mar 9 ends the run)
    """
    days = sorted({_normalize_day(d) for d in streak_dates}, reverse=True)
    if not days:
        return 0

    today = _normalize_day(today)
    if (today - days[0]).days > 1:
        return 0

    streak = 1
    for later, earlier in zip(days, days[1:]):
        gap = (later - earlier).days
        if gap == 1:
            streak += 1
        elif gap > 1:
            break

    return streak
