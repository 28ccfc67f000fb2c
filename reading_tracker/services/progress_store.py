"""
Progress Store — the tabular persistence boundary of the reading tracker.

Every operation takes a SQLAlchemy Session. Database failures are logged
and re-raised as StoreUnavailableError so routers answer with a 503 and the
caller's prior state stays untouched.

Public API
----------
fetch_completed_readings(db, user_id)                       -> list[CompletedReading]
count_completed_readings(db, user_id, year=None)            -> int
has_completed(db, user_id, reading_day)                     -> bool
upsert_completed_reading(db, user_id, reading_day, ...)     -> CompletedReading
fetch_verse_pool(db, limit)                                 -> list[VerseEntry]
fetch_achievements(db, user_id)                             -> list[Achievement]
insert_achievement(db, user_id, achievement_type, ...)      -> Achievement
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from reading_tracker.core.errors import InvalidReadingDayError, StoreUnavailableError
from reading_tracker.models.achievement import Achievement
from reading_tracker.models.bible_verse import VerseEntry
from reading_tracker.models.reading_progress import CompletedReading

logger = logging.getLogger(__name__)

MIN_READING_DAY = 1
MAX_READING_DAY = 366


def _store_failure(db: Session, operation: str, exc: SQLAlchemyError) -> StoreUnavailableError:
    logger.error("Progress store failure during %s: %s", operation, exc)
    db.rollback()
    return StoreUnavailableError(operation)


# ---------------------------------------------------------------------------
# Completed readings
# ---------------------------------------------------------------------------

def fetch_completed_readings(db: Session, user_id: str) -> list[CompletedReading]:
    try:
        return (
            db.query(CompletedReading)
            .filter(CompletedReading.user_id == user_id)
            .order_by(CompletedReading.reading_day.asc())
            .all()
        )
    except SQLAlchemyError as exc:
        raise _store_failure(db, "fetch_completed_readings", exc) from exc


def count_completed_readings(db: Session, user_id: str, year: Optional[int] = None) -> int:
    """Number of completed days; with `year`, only those completed in that UTC year."""
    try:
        query = db.query(func.count(CompletedReading.id)).filter(
            CompletedReading.user_id == user_id
        )
        if year is not None:
            query = query.filter(
                CompletedReading.completed_at >= datetime(year, 1, 1, tzinfo=timezone.utc),
                CompletedReading.completed_at < datetime(year + 1, 1, 1, tzinfo=timezone.utc),
            )
        return query.scalar() or 0
    except SQLAlchemyError as exc:
        raise _store_failure(db, "count_completed_readings", exc) from exc


def has_completed(db: Session, user_id: str, reading_day: int) -> bool:
    try:
        return (
            db.query(CompletedReading.id)
            .filter(
                CompletedReading.user_id == user_id,
                CompletedReading.reading_day == reading_day,
            )
            .first()
            is not None
        )
    except SQLAlchemyError as exc:
        raise _store_failure(db, "has_completed", exc) from exc


def _find_reading(db: Session, user_id: str, reading_day: int) -> Optional[CompletedReading]:
    return (
        db.query(CompletedReading)
        .filter(
            CompletedReading.user_id == user_id,
            CompletedReading.reading_day == reading_day,
        )
        .first()
    )


def upsert_completed_reading(
    db: Session,
    user_id: str,
    reading_day: int,
    completed_at: datetime,
    notes: Optional[str] = None,
) -> CompletedReading:
    """
    Record a completed reading day, overwriting any existing row for the same
    (user_id, reading_day). A concurrent insert that wins the race surfaces as
    an IntegrityError; it is retried once as an update.
    """
    if not MIN_READING_DAY <= reading_day <= MAX_READING_DAY:
        raise InvalidReadingDayError(reading_day)

    try:
        existing = _find_reading(db, user_id, reading_day)
        if existing is not None:
            existing.completed_at = completed_at
            existing.notes = notes
            db.commit()
            db.refresh(existing)
            return existing

        row = CompletedReading(
            user_id=user_id,
            reading_day=reading_day,
            completed_at=completed_at,
            notes=notes,
        )
        db.add(row)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            row = _find_reading(db, user_id, reading_day)
            if row is None:
                raise
            row.completed_at = completed_at
            row.notes = notes
            db.commit()
        db.refresh(row)
        return row
    except SQLAlchemyError as exc:
        raise _store_failure(db, "upsert_completed_reading", exc) from exc


# ---------------------------------------------------------------------------
# Verse pool
# ---------------------------------------------------------------------------

def fetch_verse_pool(db: Session, limit: int) -> list[VerseEntry]:
    """Stable order (reading_day, id) so the seeded daily pick is reproducible."""
    try:
        return (
            db.query(VerseEntry)
            .order_by(VerseEntry.reading_day.asc(), VerseEntry.id.asc())
            .limit(limit)
            .all()
        )
    except SQLAlchemyError as exc:
        raise _store_failure(db, "fetch_verse_pool", exc) from exc


# ---------------------------------------------------------------------------
# Achievements
# ---------------------------------------------------------------------------

def fetch_achievements(db: Session, user_id: str) -> list[Achievement]:
    try:
        return (
            db.query(Achievement)
            .filter(Achievement.user_id == user_id)
            .order_by(Achievement.earned_at.desc(), Achievement.id.desc())
            .all()
        )
    except SQLAlchemyError as exc:
        raise _store_failure(db, "fetch_achievements", exc) from exc


def insert_achievement(
    db: Session,
    user_id: str,
    achievement_type: str,
    earned_at: datetime,
    data: dict,
    period_year: int,
) -> Achievement:
    """
    Stage an Achievement row. The caller flushes and commits; an IntegrityError
    there means another request awarded the same (user, type, period) first.
    """
    row = Achievement(
        user_id=user_id,
        achievement_type=achievement_type,
        period_year=period_year,
        earned_at=earned_at,
        achievement_data=json.dumps(data, default=str),
    )
    db.add(row)
    return row


def parse_achievement_data(raw: Optional[str]) -> Optional[dict]:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (ValueError, TypeError):
        return None
