"""
Request/response schemas for the ML endpoints that are not plain engine results.
"""
from typing import List, Optional

from pydantic import BaseModel, Field

from learnsense.core.engine.schemas import Difficulty


class PerformancePredictionRequest(BaseModel):
    """Schema for performance prediction request."""

    subject: Optional[str] = None
    upcoming_topics: List[str] = Field(default_factory=list)


class AdaptiveDifficultyRequest(BaseModel):
    """Scores must be ordered most recent first."""

    recent_scores: List[float] = Field(default_factory=list)
    current_difficulty: Difficulty = Difficulty.MEDIUM


class AdaptiveDifficultyResponse(BaseModel):
    """Schema for adaptive difficulty response."""

    difficulty: Difficulty
