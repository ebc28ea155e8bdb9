"""
Pydantic schemas for quiz results.
"""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from learnsense.core.engine.schemas import Difficulty, Modality


class QuizResponseItem(BaseModel):
    """Answer to a single question."""

    question_id: int = 0
    question_text: str = ""
    question_type: str = "multiple_choice"
    user_answer: Optional[Any] = None
    correct_answer: Any = ""
    is_correct: bool = False
    explanation: Optional[str] = None


class QuizResultCreate(BaseModel):
    """Schema for saving a completed quiz."""

    subject: str = Field(min_length=1, max_length=100)
    topic: Optional[str] = Field(default=None, max_length=200)
    modality: Modality = Modality.TEXT
    difficulty: Difficulty = Difficulty.MEDIUM
    total_questions: int = Field(gt=0)
    correct_answers: int = Field(default=0, ge=0)
    score: Optional[float] = Field(default=None, ge=0, le=100)  # computed when omitted
    time_taken: Optional[int] = Field(default=None, ge=0)
    responses: List[QuizResponseItem] = Field(default_factory=list)


class QuizResultResponse(BaseModel):
    """Stored quiz result."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    subject: str
    topic: Optional[str] = None
    modality: Modality
    difficulty: Optional[str] = None
    total_questions: int
    correct_answers: int
    score: float
    time_taken: Optional[int] = None
    responses: List[QuizResponseItem] = Field(default_factory=list)
    completed_at: Optional[datetime] = None
