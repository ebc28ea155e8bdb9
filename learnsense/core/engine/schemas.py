"""
Pydantic schemas for the learning-mode recommendation engine.
"""
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Modality(str, Enum):
    """Instructional presentation mode."""
    VISUAL = "visual"
    AUDIO = "audio"
    TEXT = "text"


# Iteration order doubles as the tie-break order when ranking
MODALITIES = (Modality.VISUAL, Modality.AUDIO, Modality.TEXT)


class Difficulty(str, Enum):
    """Quiz difficulty tier."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class ActivityRecord(BaseModel):
    """Engagement record as seen by the engine. Every field is optional on purpose."""
    model_config = ConfigDict(from_attributes=True)

    user_id: Optional[str] = None
    subject: Optional[str] = None
    modality: Optional[str] = None
    quiz_score: Optional[float] = None
    focus_level: Optional[float] = None
    reading_time_seconds: Optional[float] = None
    playback_count: Optional[float] = None
    session_timestamp: Optional[datetime] = None


class QuizResultRecord(BaseModel):
    """Completed quiz attempt as seen by the engine."""
    model_config = ConfigDict(from_attributes=True)

    user_id: Optional[str] = None
    subject: Optional[str] = None
    modality: Optional[str] = None
    score: Optional[float] = None
    completed_at: Optional[datetime] = None


class ModePerformance(BaseModel):
    """Running tally for one modality; rebuilt for every request."""
    total_score: float = 0.0
    session_count: int = 0
    focus_sum: float = 0.0
    engagement_sum: float = 0.0
    reading_time_sum: float = 0.0
    playback_sum: float = 0.0


class AggregatedHistory(BaseModel):
    """Per-modality tallies plus the raw counts they were built from."""
    buckets: Dict[Modality, ModePerformance]
    activity_count: int = 0
    quiz_result_count: int = 0
    store_error: Optional[str] = None
    quiz_results: List[QuizResultRecord] = Field(default_factory=list)  # newest first

    @property
    def total_records(self) -> int:
        return self.activity_count + self.quiz_result_count


class ModeStats(BaseModel):
    """Derived statistics for one modality."""
    total_score: float = 0.0
    session_count: int = 0
    avg_score: float = 0.0
    avg_focus: float = 0.0
    avg_engagement: float = 0.0
    weighted_score: float = 0.0
    reading_time_sum: float = 0.0
    playback_sum: float = 0.0


class RecommendationResult(BaseModel):
    """Recommended modality with confidence and explanation."""
    recommended_mode: Modality
    best_performing_mode: Modality
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str
    per_mode_stats: Dict[str, ModeStats]
    is_default: bool = False  # True for the no-history fallback


class PerformancePrediction(BaseModel):
    """Forecast of the next quiz score."""
    predicted_score: int
    confidence: float
    factors: List[str] = Field(default_factory=list)
    recent_avg: Optional[float] = None
    older_avg: Optional[float] = None
    trend: Optional[float] = None


class EngagementReport(BaseModel):
    """Rolling-window engagement summary with alerts."""
    engagement_score: int
    status: str  # "high", "medium", "low", "no_activity", "error"
    alerts: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    avg_focus: int = 0
    total_time: int = 0
    avg_score: int = 0
    focus_drop: float = 0.0
    trend: str = "stable"  # "declining", "improving", "stable"
    window_days: int = 7
    activity_count: int = 0


class LearningPath(BaseModel):
    """Suggested level, difficulty and next topics for a subject."""
    level: str  # "beginner", "intermediate", "advanced"
    difficulty: Difficulty
    next_topics: List[str] = Field(default_factory=list)
    avg_score: Optional[float] = None
    trend: Optional[float] = None


class ContentRecommendation(BaseModel):
    """Inputs for the content-generation collaborator."""
    recommended_mode: Modality
    best_performing_mode: Modality
    difficulty: Difficulty
    topics: List[str] = Field(default_factory=list)
    confidence: float
    reasoning: str


class QuizDifficultyRecommendation(BaseModel):
    """Difficulty seeded from the learner's best-performing modality."""
    modality: Modality
    difficulty: Difficulty
    scores_considered: int


class LearningTypesStatus(BaseModel):
    """Which modalities a learner has tried for a subject."""
    subject: str
    completed: bool
    completed_types: List[Modality]
    total_completed: int
    total_required: int = len(MODALITIES)
    all_scores_zero: bool
    type_scores: Dict[str, float]
