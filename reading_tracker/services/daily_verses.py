"""
Daily Verse Selector.

Every caller asking for the same calendar date gets the same ordered
verses: the day-of-year seeds a private `random.Random`, which picks up to
`count` entries from the pool in a seeded order. The pool is never mutated.

A user-triggered shuffle (`DailySelection.shuffled`) reorders the picked
verses for that response only; nothing is persisted.

Public API
----------
today_utc()                                   -> date
day_of_year(d)                                -> int (1-based)
select_daily_verses(pool, on_date, count=3)   -> DailySelection
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from typing import Generic, Optional, Sequence, TypeVar

T = TypeVar("T")

DEFAULT_VERSE_COUNT = 3


def today_utc() -> date:
    return datetime.now(tz=timezone.utc).date()


def day_of_year(d: date) -> int:
    return d.timetuple().tm_yday


@dataclass(frozen=True)
class DailySelection(Generic[T]):
    on_date: date
    day_of_year: int
    verses: tuple[T, ...] = field(default_factory=tuple)
    index: int = 0

    @property
    def current(self) -> Optional[T]:
        if not self.verses:
            return None
        return self.verses[self.index]

    def next(self) -> "DailySelection[T]":
        if self.index < len(self.verses) - 1:
            return replace(self, index=self.index + 1)
        return self

    def previous(self) -> "DailySelection[T]":
        if self.index > 0:
            return replace(self, index=self.index - 1)
        return self

    def shuffled(self, rng: Optional[random.Random] = None) -> "DailySelection[T]":
        """Same verses in a fresh random order, cursor back at the first one."""
        rng = rng or random.Random()
        verses = list(self.verses)
        rng.shuffle(verses)
        return replace(self, verses=tuple(verses), index=0)


def select_daily_verses(
    pool: Sequence[T],
    on_date: date,
    count: int = DEFAULT_VERSE_COUNT,
) -> DailySelection[T]:
    """
    Pick min(count, len(pool)) verses for `on_date`.

    Deterministic for a fixed (pool order, day-of-year). Pools smaller than
    `count` return every entry, never padded; an empty pool returns an
    empty selection.
    """
    doy = day_of_year(on_date)
    k = max(0, min(count, len(pool)))
    if k == 0:
        return DailySelection(on_date=on_date, day_of_year=doy)

    rng = random.Random(doy)
    picked = rng.sample(range(len(pool)), k)
    return DailySelection(
        on_date=on_date,
        day_of_year=doy,
        verses=tuple(pool[i] for i in picked),
    )
