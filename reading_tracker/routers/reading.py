"""
Reading plan router.

GET  /reading/today      — today's verses (deterministic per date)
POST /reading/complete   — mark a reading day completed (+ achievements)
GET  /reading/progress   — the caller's completed reading days
GET  /reading/summary    — dashboard statistics
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from reading_tracker.core.security import get_current_user_id, get_optional_user_id
from reading_tracker.db.base import get_db
from reading_tracker.models.bible_verse import VerseEntry
from reading_tracker.models.reading_progress import CompletedReading
from reading_tracker.routers.achievements import achievement_to_response
from reading_tracker.schemas.common import ErrorResponse
from reading_tracker.schemas.reading import (
    CompleteReadingRequest,
    CompleteReadingResponse,
    CompletedReadingResponse,
    DailyReadingResponse,
    ProgressListResponse,
    ReadingSummaryResponse,
    VerseResponse,
)
from reading_tracker.services import progress_store
from reading_tracker.services.reading_service import (
    get_daily_reading,
    get_reading_summary,
    mark_reading_completed,
)

router = APIRouter(prefix="/reading", tags=["reading"])

_AUTH_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Missing X-User-Id header."},
    503: {"model": ErrorResponse, "description": "Progress store unavailable."},
}


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _reading_to_response(r: CompletedReading) -> CompletedReadingResponse:
    return CompletedReadingResponse(
        id=r.id,
        reading_day=r.reading_day,
        completed_at=r.completed_at.isoformat(),
        notes=r.notes,
    )


def _verse_to_response(v: VerseEntry) -> VerseResponse:
    return VerseResponse(
        id=v.id,
        reference=v.reference,
        book=v.book,
        chapter=v.chapter,
        verse_start=v.verse_start,
        verse_end=v.verse_end,
        content=v.content,
        content_localized=v.content_localized,
        display_content=v.display_content,
        explanation=v.display_explanation,
        reading_day=v.reading_day,
    )


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


# ---------------------------------------------------------------------------
# GET /reading/today
# ---------------------------------------------------------------------------

@router.get(
    "/today",
    response_model=DailyReadingResponse,
    summary="Verses for the daily reading card",
    responses={503: _AUTH_RESPONSES[503]},
)
def reading_today(
    on_date: Optional[date] = Query(
        default=None,
        description="ISO date (YYYY-MM-DD). Defaults to today UTC.",
        examples=["2026-02-20"],
    ),
    shuffle: bool = Query(
        default=False,
        description="Reorder the day's verses randomly for this response only.",
    ),
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: Session = Depends(get_db),
):
    """
    Return up to 3 verses for the date. Every caller gets the same ordered
    verses for the same date unless `shuffle=true`. An empty pool yields an
    empty `verses` list. `is_completed` is only ever true for a signed-in caller.
    """
    daily = get_daily_reading(db=db, user_id=user_id, on_date=on_date, shuffle=shuffle)
    sel = daily.selection
    return DailyReadingResponse(
        date=str(sel.on_date),
        day_of_year=sel.day_of_year,
        index=sel.index,
        is_completed=daily.is_completed,
        verses=[_verse_to_response(v) for v in sel.verses],
    )


# ---------------------------------------------------------------------------
# POST /reading/complete
# ---------------------------------------------------------------------------

@router.post(
    "/complete",
    response_model=CompleteReadingResponse,
    summary="Mark a reading day as completed",
    responses={
        200: {"description": "Reading recorded (re-completing a day overwrites it)."},
        **_AUTH_RESPONSES,
    },
)
def reading_complete(
    payload: CompleteReadingRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Record the reading day for the caller, then evaluate milestone
    achievements. Submitting the same day twice is harmless: the row is
    overwritten and no achievement is awarded twice.
    """
    outcome = mark_reading_completed(
        db=db,
        user_id=user_id,
        reading_day=payload.reading_day,
        notes=payload.notes,
    )
    return CompleteReadingResponse(
        reading=_reading_to_response(outcome.reading),
        achievements_awarded=[achievement_to_response(a) for a in outcome.awards.created],
    )


# ---------------------------------------------------------------------------
# GET /reading/progress
# ---------------------------------------------------------------------------

@router.get(
    "/progress",
    response_model=ProgressListResponse,
    summary="Completed reading days, ascending",
    responses=_AUTH_RESPONSES,
)
def reading_progress(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    items = progress_store.fetch_completed_readings(db, user_id)
    return ProgressListResponse(
        total=len(items),
        items=[_reading_to_response(r) for r in items],
    )


# ---------------------------------------------------------------------------
# GET /reading/summary
# ---------------------------------------------------------------------------

@router.get(
    "/summary",
    response_model=ReadingSummaryResponse,
    summary="Yearly reading dashboard",
    responses=_AUTH_RESPONSES,
)
def reading_summary(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Totals, streaks and pace for the caller's yearly plan.

    | Field | Meaning |
    |---|---|
    | `current_streak` | live run ending today or yesterday (UTC), else 0 |
    | `longest_streak` | longest run ever |
    | `weekly_average` | completed days per week so far this year |
    """
    s = get_reading_summary(db=db, user_id=user_id)
    return ReadingSummaryResponse(
        today=str(s.today),
        day_of_year=s.day_of_year,
        completed_days=s.completed_days,
        days_remaining=s.days_remaining,
        progress_percentage=s.progress_percentage,
        current_streak=s.current_streak,
        longest_streak=s.longest_streak,
        weekly_average=s.weekly_average,
        started_at=_iso(s.started_at),
        last_read_at=_iso(s.last_read_at),
        yearly_goal_reached=s.yearly_goal_reached,
        completed_reading_days=s.completed_reading_days,
    )
