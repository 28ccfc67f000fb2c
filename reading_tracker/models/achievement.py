"""
Achievement — a persisted, user-visible milestone.

Append-only. One row per (user_id, achievement_type, period_year); the
unique constraint enforces idempotency at the DB level behind the engine's
own existence check.

achievement_type values (see reading_tracker/services/achievements.py):
  "yearly_bible_reading" — 365 completed reading days
  "monthly_completion"   — 30 completed reading days
  "weekly_streak"        — a live streak of 7 consecutive days

achievement_data: JSON-encoded dict stored as Text.
"""
from datetime import datetime
from sqlalchemy import Integer, String, Text, DateTime, func, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from reading_tracker.db.base import Base


class Achievement(Base):
    __tablename__ = "user_achievements"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "achievement_type", "period_year",
            name="uq_achievement_user_type_period",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    achievement_type: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    period_year: Mapped[int] = mapped_column(Integer, nullable=False)
    achievement_data: Mapped[str | None] = mapped_column(
        "achievement_data", Text, nullable=True,
        comment="JSON-encoded dict, e.g. {year, completed_days}",
    )
    earned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
