"""
Achievement Evaluator — milestone awards driven by reading progress.

Rules (evaluated after every completion write, synchronously)
-------------------------------------------------------------
  1. YEARLY_BIBLE_READING
     Trigger : reading days completed this year >= 365
     Data    : {"year": <year>, "completed_days": <count>}

  2. MONTHLY_COMPLETION
     Trigger : reading days completed this year >= 30
     Data    : {"year": <year>, "completed_days": <count>}

  3. WEEKLY_STREAK
     Trigger : current (live) streak >= 7
     Data    : {"year": <year>, "current_streak": <n>}

Idempotency
-----------
Day counts cover readings completed within the award year only.
Each (user_id, achievement_type, period_year) is awarded at most once. The
pure evaluators skip any rule whose award already exists for the year; the
unique constraint in `user_achievements` is the final guard when two
requests race; each award is written in its own SAVEPOINT so a conflict
on one never discards the others. Re-running after an award exists is a
no-op.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Iterable, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from reading_tracker.core.errors import StoreUnavailableError
from reading_tracker.models.achievement import Achievement
from reading_tracker.services import progress_store
from reading_tracker.services.daily_verses import day_of_year, today_utc
from reading_tracker.services.streak import StreakResult, calculate_streak

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Achievement type constants
# ---------------------------------------------------------------------------

class AchievementType:
    YEARLY_BIBLE_READING = "yearly_bible_reading"
    MONTHLY_COMPLETION   = "monthly_completion"
    WEEKLY_STREAK        = "weekly_streak"


# Thresholds
YEARLY_GOAL_DAYS   = 365
MONTHLY_GOAL_DAYS  = 30
WEEKLY_STREAK_DAYS = 7


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AchievementIntent:
    """A decision to write one Achievement row."""
    achievement_type: str
    period_year: int
    data: dict


@dataclass
class AwardResult:
    """Summary of what the engine did for one evaluation run."""
    user_id: str
    created: list[Achievement] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)   # already awarded


# ---------------------------------------------------------------------------
# Pure evaluators
# ---------------------------------------------------------------------------

def _already_awarded(existing: Iterable[Achievement], achievement_type: str, year: int) -> bool:
    return any(
        a.achievement_type == achievement_type and a.period_year == year
        for a in existing
    )


def _triggered(completed_days: int, streak: StreakResult, year: int) -> list[AchievementIntent]:
    """Every rule whose trigger holds, in rule order, ignoring existing awards."""
    intents = []
    if completed_days >= YEARLY_GOAL_DAYS:
        intents.append(AchievementIntent(
            achievement_type=AchievementType.YEARLY_BIBLE_READING,
            period_year=year,
            data={"year": year, "completed_days": completed_days},
        ))
    if completed_days >= MONTHLY_GOAL_DAYS:
        intents.append(AchievementIntent(
            achievement_type=AchievementType.MONTHLY_COMPLETION,
            period_year=year,
            data={"year": year, "completed_days": completed_days},
        ))
    if streak.current >= WEEKLY_STREAK_DAYS:
        intents.append(AchievementIntent(
            achievement_type=AchievementType.WEEKLY_STREAK,
            period_year=year,
            data={"year": year, "current_streak": streak.current},
        ))
    return intents


def evaluate_milestones(
    completed_days: int,
    streak: StreakResult,
    existing: Iterable[Achievement],
    year: int,
) -> list[AchievementIntent]:
    """Intents that should be written: triggered and not yet awarded for `year`."""
    existing = list(existing)
    return [
        intent for intent in _triggered(completed_days, streak, year)
        if not _already_awarded(existing, intent.achievement_type, year)
    ]


def evaluate_yearly_completion(
    completed_days: int,
    existing: Iterable[Achievement],
    year: int,
) -> Optional[AchievementIntent]:
    """Intent to award the yearly trophy, or None (below goal / already awarded)."""
    for intent in evaluate_milestones(completed_days, StreakResult(0, 0), existing, year):
        if intent.achievement_type == AchievementType.YEARLY_BIBLE_READING:
            return intent
    return None


# ---------------------------------------------------------------------------
# Public — main entry point
# ---------------------------------------------------------------------------

def award_achievements(
    db: Session,
    user_id: str,
    on_date: Optional[date] = None,
    now: Optional[datetime] = None,
) -> AwardResult:
    """
    Evaluate all milestone rules for `user_id` and write any new awards.
    Idempotent: safe to call after every completion write.

    Day counts only include readings completed in `on_date`'s year, so last
    year's progress never re-awards a yearly milestone. Each award is staged
    in its own SAVEPOINT: losing a race on one award leaves the others in
    place. Commits once at the end.
    """
    on_date = on_date or today_utc()
    now = now or datetime.now(tz=timezone.utc)
    year = on_date.year

    readings = progress_store.fetch_completed_readings(db, user_id)
    existing = progress_store.fetch_achievements(db, user_id)
    streak = calculate_streak((r.reading_day for r in readings), day_of_year(on_date))
    completed_days = progress_store.count_completed_readings(db, user_id, year=year)

    intents = evaluate_milestones(completed_days, streak, existing, year)
    pending = {i.achievement_type for i in intents}
    result = AwardResult(
        user_id=user_id,
        skipped=[
            i.achievement_type for i in _triggered(completed_days, streak, year)
            if i.achievement_type not in pending
        ],
    )

    try:
        for intent in intents:
            try:
                with db.begin_nested():
                    row = progress_store.insert_achievement(
                        db,
                        user_id=user_id,
                        achievement_type=intent.achievement_type,
                        earned_at=now,
                        data=intent.data,
                        period_year=intent.period_year,
                    )
                    db.flush()
            except IntegrityError:
                # Race condition: another request awarded this one first
                result.skipped.append(intent.achievement_type)
                continue
            result.created.append(row)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Could not write achievements for user %s: %s", user_id, exc)
        raise StoreUnavailableError("insert_achievement") from exc

    for row in result.created:
        db.refresh(row)
    if result.created:
        logger.info(
            "Awarded %s to user %s",
            ", ".join(a.achievement_type for a in result.created),
            user_id,
        )
    return result
