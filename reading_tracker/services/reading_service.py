"""
Reading service — composes the store and the pure calculators into the
operations the reading screens need.

Public API
----------
mark_reading_completed(db, user_id, reading_day, notes, now) -> CompletionOutcome
get_daily_reading(db, user_id, on_date, shuffle)              -> DailyReading
get_reading_summary(db, user_id, today)                       -> ReadingSummary
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from reading_tracker.core.config import settings
from reading_tracker.models.bible_verse import VerseEntry
from reading_tracker.models.reading_progress import CompletedReading
from reading_tracker.services import progress_store
from reading_tracker.services.achievements import (
    YEARLY_GOAL_DAYS,
    AwardResult,
    award_achievements,
)
from reading_tracker.services.daily_verses import (
    DailySelection,
    day_of_year,
    select_daily_verses,
    today_utc,
)
from reading_tracker.services.streak import calculate_streak


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class CompletionOutcome:
    reading: CompletedReading
    awards: AwardResult


@dataclass
class DailyReading:
    selection: DailySelection[VerseEntry]
    is_completed: bool


@dataclass
class ReadingSummary:
    today: date
    day_of_year: int
    completed_days: int
    days_remaining: int
    progress_percentage: float
    current_streak: int
    longest_streak: int
    weekly_average: float
    started_at: Optional[datetime]
    last_read_at: Optional[datetime]
    yearly_goal_reached: bool
    completed_reading_days: list[int]


# ---------------------------------------------------------------------------
# Mark completed
# ---------------------------------------------------------------------------

def mark_reading_completed(
    db: Session,
    user_id: str,
    reading_day: Optional[int] = None,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> CompletionOutcome:
    """
    Upsert today's (or the given) reading day, then run the achievement
    engine against the updated progress.
    """
    now = now or datetime.now(tz=timezone.utc)
    today = now.astimezone(timezone.utc).date()
    day = reading_day if reading_day is not None else day_of_year(today)

    reading = progress_store.upsert_completed_reading(
        db, user_id=user_id, reading_day=day, completed_at=now, notes=notes,
    )
    awards = award_achievements(db, user_id=user_id, on_date=today, now=now)
    return CompletionOutcome(reading=reading, awards=awards)


# ---------------------------------------------------------------------------
# Daily reading card
# ---------------------------------------------------------------------------

def get_daily_reading(
    db: Session,
    user_id: Optional[str],
    on_date: Optional[date] = None,
    shuffle: bool = False,
) -> DailyReading:
    on_date = on_date or today_utc()
    pool = progress_store.fetch_verse_pool(db, limit=settings.VERSE_POOL_LIMIT)
    selection = select_daily_verses(pool, on_date, count=settings.DAILY_VERSE_COUNT)
    if shuffle:
        selection = selection.shuffled()

    is_completed = False
    if user_id is not None:
        is_completed = progress_store.has_completed(db, user_id, selection.day_of_year)
    return DailyReading(selection=selection, is_completed=is_completed)


# ---------------------------------------------------------------------------
# Dashboard summary
# ---------------------------------------------------------------------------

def get_reading_summary(
    db: Session,
    user_id: str,
    today: Optional[date] = None,
) -> ReadingSummary:
    today = today or today_utc()
    doy = day_of_year(today)
    readings = progress_store.fetch_completed_readings(db, user_id)
    days = [r.reading_day for r in readings]
    total = len(readings)
    streak = calculate_streak(days, doy)
    completed_at = [r.completed_at for r in readings]

    return ReadingSummary(
        today=today,
        day_of_year=doy,
        completed_days=total,
        days_remaining=max(0, YEARLY_GOAL_DAYS - total),
        progress_percentage=round(min(total, YEARLY_GOAL_DAYS) / YEARLY_GOAL_DAYS * 100, 1),
        current_streak=streak.current,
        longest_streak=streak.longest,
        weekly_average=round(total / doy * 7, 1) if total else 0.0,
        started_at=min(completed_at, default=None),
        last_read_at=max(completed_at, default=None),
        yearly_goal_reached=total >= YEARLY_GOAL_DAYS,
        completed_reading_days=days,
    )
