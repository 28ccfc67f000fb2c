"""
Achievements router.

GET /achievements   — the caller's milestone awards (newest first)
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from reading_tracker.core.security import get_current_user_id
from reading_tracker.db.base import get_db
from reading_tracker.models.achievement import Achievement
from reading_tracker.schemas.achievement import AchievementListResponse, AchievementResponse
from reading_tracker.schemas.common import ErrorResponse
from reading_tracker.services import progress_store

router = APIRouter(prefix="/achievements", tags=["achievements"])


def achievement_to_response(a: Achievement) -> AchievementResponse:
    return AchievementResponse(
        id=a.id,
        achievement_type=a.achievement_type,
        period_year=a.period_year,
        data=progress_store.parse_achievement_data(a.achievement_data),
        earned_at=a.earned_at.isoformat() if a.earned_at else "",
    )


@router.get(
    "",
    response_model=AchievementListResponse,
    summary="List the caller's achievements (newest first)",
    responses={
        401: {"model": ErrorResponse, "description": "Missing X-User-Id header."},
        503: {"model": ErrorResponse, "description": "Progress store unavailable."},
    },
)
def list_achievements(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    ### Achievement types
    | Type | Trigger |
    |---|---|
    | `yearly_bible_reading` | 365 completed reading days |
    | `monthly_completion` | 30 completed reading days |
    | `weekly_streak` | a live 7-day streak |

    Each type is awarded at most once per calendar year.
    """
    items = progress_store.fetch_achievements(db, user_id)
    return AchievementListResponse(
        total=len(items),
        items=[achievement_to_response(a) for a in items],
    )
