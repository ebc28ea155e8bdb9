"""Pydantic schemas for request/response validation."""
from learnsense.schemas.activity import ActivityLogCreate, ActivityLogResponse
from learnsense.schemas.common import ErrorResponse
from learnsense.schemas.ml import (
    AdaptiveDifficultyRequest,
    AdaptiveDifficultyResponse,
    PerformancePredictionRequest,
)
from learnsense.schemas.quiz import QuizResponseItem, QuizResultCreate, QuizResultResponse

__all__ = [
    "ActivityLogCreate",
    "ActivityLogResponse",
    "AdaptiveDifficultyRequest",
    "AdaptiveDifficultyResponse",
    "ErrorResponse",
    "PerformancePredictionRequest",
    "QuizResponseItem",
    "QuizResultCreate",
    "QuizResultResponse",
]
