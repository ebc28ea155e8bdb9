"""
Pydantic schemas for activity logging.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from learnsense.core.engine.schemas import Modality


class ActivityLogCreate(BaseModel):
    """
    One study session. Scores and focus replace the stored values,
    reading time and playback count are added to them.
    """

    subject: str = Field(min_length=1, max_length=100)
    modality: Modality
    quiz_score: Optional[float] = Field(default=None, ge=0, le=100)
    focus_level: Optional[int] = Field(default=None, ge=0, le=100)
    reading_time_seconds: int = Field(default=0, ge=0)
    playback_count: int = Field(default=0, ge=0)


class ActivityLogResponse(BaseModel):
    """Stored activity record."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    subject: str
    modality: Modality
    quiz_score: Optional[float] = None
    focus_level: Optional[int] = None
    reading_time_seconds: int
    playback_count: int
    session_timestamp: Optional[datetime] = None
