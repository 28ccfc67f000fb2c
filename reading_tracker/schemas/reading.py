"""
Reading plan request / response schemas.

POST /reading/complete   → CompleteReadingRequest → CompleteReadingResponse
GET  /reading/progress   → ProgressListResponse
GET  /reading/today      → DailyReadingResponse
GET  /reading/summary    → ReadingSummaryResponse
"""
from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from reading_tracker.schemas.achievement import AchievementResponse


class CompleteReadingRequest(BaseModel):
    reading_day: Optional[Annotated[int, Field(ge=1, le=366)]] = Field(
        default=None,
        description="Day-of-year slot (1–366). Defaults to today's UTC day-of-year.",
        examples=[42],
    )
    notes: Optional[Annotated[str, Field(max_length=2_000)]] = None

    @field_validator("notes", mode="before")
    @classmethod
    def blank_notes_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class CompletedReadingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    reading_day: int
    completed_at: str
    notes: Optional[str] = None


class CompleteReadingResponse(BaseModel):
    reading: CompletedReadingResponse
    achievements_awarded: list[AchievementResponse]


class ProgressListResponse(BaseModel):
    total: int
    items: list[CompletedReadingResponse]


class VerseResponse(BaseModel):
    id: int
    reference: str
    book: str
    chapter: int
    verse_start: int
    verse_end: Optional[int] = None
    content: str
    content_localized: Optional[str] = None
    display_content: str = Field(description="Localized text when available, else the primary text.")
    explanation: Optional[str] = None
    reading_day: int


class DailyReadingResponse(BaseModel):
    date: str
    day_of_year: int
    index: int = Field(description="Cursor into `verses` for next/previous navigation.")
    is_completed: bool
    verses: list[VerseResponse]


class ReadingSummaryResponse(BaseModel):
    today: str
    day_of_year: int
    completed_days: int
    days_remaining: int
    progress_percentage: float
    current_streak: int
    longest_streak: int
    weekly_average: float
    started_at: Optional[str]
    last_read_at: Optional[str]
    yearly_goal_reached: bool
    completed_reading_days: list[int]
