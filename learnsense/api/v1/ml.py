"""
API endpoints for the adaptive learning features: learning-mode
recommendation, difficulty adaptation, performance prediction and
engagement analysis.
"""
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from learnsense.core.config import settings
from learnsense.core.dependencies import get_current_user_id, get_learning_mode_service
from learnsense.core.engine import RecentFirst, calculate_adaptive_difficulty
from learnsense.core.engine.schemas import (
    ContentRecommendation,
    Difficulty,
    EngagementReport,
    LearningPath,
    PerformancePrediction,
    QuizDifficultyRecommendation,
    RecommendationResult,
)
from learnsense.core.engine.service import LearningModeService
from learnsense.schemas.ml import (
    AdaptiveDifficultyRequest,
    AdaptiveDifficultyResponse,
    PerformancePredictionRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ============= Recommendation Endpoints =============

@router.get("/recommend-mode", response_model=RecommendationResult)
async def recommend_mode(
    subject: Optional[str] = Query(default=None, max_length=100),
    user_id: str = Depends(get_current_user_id),
    service: LearningModeService = Depends(get_learning_mode_service),
) -> Any:
    """
    Recommend the learning modality (visual, audio or text) for the user.

    Without history, or when history cannot be read, the response is the
    visual default with confidence 0.3.
    """
    return await service.recommend_learning_mode(user_id, subject)


@router.get("/recommend-content", response_model=ContentRecommendation)
async def recommend_content(
    subject: Optional[str] = Query(default=None, max_length=100),
    user_id: str = Depends(get_current_user_id),
    service: LearningModeService = Depends(get_learning_mode_service),
) -> Any:
    """
    Modality, difficulty and next topics for content generation.
    """
    try:
        return await service.recommend_content(user_id, subject)
    except Exception as e:
        logger.error(f"Error getting content recommendations: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to get content recommendations: {str(e)}"
        )


@router.get("/learning-path", response_model=LearningPath)
async def learning_path(
    subject: Optional[str] = Query(default=None, max_length=100),
    user_id: str = Depends(get_current_user_id),
    service: LearningModeService = Depends(get_learning_mode_service),
) -> Any:
    """
    Level, difficulty and next topics from the most recent quiz scores.
    """
    return await service.optimize_learning_path(user_id, subject)


# ============= Difficulty Endpoints =============

@router.post("/adaptive-difficulty", response_model=AdaptiveDifficultyResponse)
def adaptive_difficulty(
    request: AdaptiveDifficultyRequest,
    user_id: str = Depends(get_current_user_id),
) -> Any:
    """
    Difficulty for the next quiz from client-supplied scores.

    ``recent_scores`` must be ordered most recent first.
    """
    difficulty = calculate_adaptive_difficulty(
        RecentFirst(request.recent_scores),
        request.current_difficulty,
    )
    logger.info(
        f"Adaptive difficulty for user {user_id}: {request.current_difficulty.value} -> {difficulty.value} "
        f"({len(request.recent_scores)} scores)"
    )
    return AdaptiveDifficultyResponse(difficulty=difficulty)


@router.get("/quiz-difficulty", response_model=QuizDifficultyRecommendation)
async def quiz_difficulty(
    subject: Optional[str] = Query(default=None, max_length=100),
    current_difficulty: Difficulty = Query(default=Difficulty.MEDIUM),
    user_id: str = Depends(get_current_user_id),
    service: LearningModeService = Depends(get_learning_mode_service),
) -> Any:
    """
    Difficulty for the next quiz, seeded from the quiz scores of the user's
    best-performing modality.
    """
    try:
        return await service.recommend_quiz_difficulty(user_id, subject, current_difficulty)
    except Exception as e:
        logger.error(f"Error recommending quiz difficulty: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to recommend quiz difficulty: {str(e)}"
        )


# ============= Analytics Endpoints =============

@router.post("/predict-performance", response_model=PerformancePrediction)
async def predict_performance(
    request: PerformancePredictionRequest,
    user_id: str = Depends(get_current_user_id),
    service: LearningModeService = Depends(get_learning_mode_service),
) -> Any:
    """
    Forecast the user's next quiz score.
    """
    prediction = await service.predict_performance(user_id, request.subject)
    if request.upcoming_topics:
        logger.info(f"Prediction for user {user_id} requested for topics: {', '.join(request.upcoming_topics)}")
    return prediction


@router.get("/engagement", response_model=EngagementReport)
async def engagement(
    days: int = Query(default=settings.ENGAGEMENT_WINDOW_DAYS, ge=1, le=365),
    user_id: str = Depends(get_current_user_id),
    service: LearningModeService = Depends(get_learning_mode_service),
) -> Any:
    """
    Engagement score, status and alerts over the trailing window.
    """
    return await service.analyze_engagement(user_id, days)
