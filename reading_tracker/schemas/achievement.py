"""
Achievement response schemas.

GET /achievements → AchievementListResponse
"""
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class AchievementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    achievement_type: str = Field(
        description='"yearly_bible_reading" | "monthly_completion" | "weekly_streak"'
    )
    period_year: int
    data: Optional[dict[str, Any]] = Field(
        default=None,
        description="Context specific to each achievement_type.",
    )
    earned_at: str


class AchievementListResponse(BaseModel):
    total: int
    items: list[AchievementResponse]
