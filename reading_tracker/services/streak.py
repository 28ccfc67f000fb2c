"""
Streak Calculator — pure function over a user's completed reading days.

A streak is a maximal run of consecutive reading-day integers. The current
streak only counts while it is alive: its last day must be `today` or
`today - 1`. Reading days are ordinals within the year (1–366), so "today"
is the UTC day-of-year (see daily_verses.today_utc).

No I/O, no side effects.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class StreakResult:
    current: int
    longest: int


def calculate_streak(reading_days: Iterable[int], today: int) -> StreakResult:
    """
    Return the current and longest streaks for the given reading days.

    >>> calculate_streak([1, 2, 3, 7, 8], today=8)
    StreakResult(current=2, longest=3)
    """
    days = sorted(set(reading_days))
    if not days:
        return StreakResult(current=0, longest=0)

    longest = 0
    run = 1
    for prev, day in zip(days, days[1:]):
        if day == prev + 1:
            run += 1
        else:
            longest = max(longest, run)
            run = 1
    longest = max(longest, run)

    # `run` is now the trailing run, ending at days[-1]
    current = run if days[-1] in (today, today - 1) else 0
    return StreakResult(current=current, longest=longest)
