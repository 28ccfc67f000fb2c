"""
CompletedReading — one row per user per completed reading day.

The (user_id, reading_day) unique constraint makes re-completing a day an
overwrite: the store upserts on it and never inserts a second row.
"""
from datetime import datetime
from sqlalchemy import Integer, String, Text, DateTime, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from reading_tracker.db.base import Base


class CompletedReading(Base):
    __tablename__ = "user_bible_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "reading_day", name="uq_progress_user_day"),
        CheckConstraint("reading_day BETWEEN 1 AND 366", name="ck_progress_reading_day"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    reading_day: Mapped[int] = mapped_column(Integer, nullable=False)
    completed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
