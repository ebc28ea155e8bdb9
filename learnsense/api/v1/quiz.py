"""
API endpoints for saving and reading quiz results.
"""
import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from learnsense.core.dependencies import get_current_user_id, get_db, get_recommendation_cache
from learnsense.core.engine.recommendation_cache import RecommendationCache
from learnsense.models.quiz_result import QuizResult
from learnsense.schemas.common import ErrorResponse
from learnsense.schemas.quiz import QuizResultCreate, QuizResultResponse
from learnsense.services.activity_service import save_quiz_result
from learnsense.services.activity_store import normalize_subject

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/save", response_model=QuizResultResponse, status_code=status.HTTP_201_CREATED)
def save_quiz(
    quiz_in: QuizResultCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    cache: RecommendationCache = Depends(get_recommendation_cache),
) -> Any:
    """
    Save a completed quiz with per-question responses.
    """
    try:
        result = save_quiz_result(db, user_id, quiz_in)
        cache.invalidate(user_id, quiz_in.subject)
        return result

    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error saving quiz result: {e}")
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save quiz result: {str(e)}"
        )


@router.get("/history", response_model=List[QuizResultResponse])
def quiz_history(
    subject: Optional[str] = Query(default=None, max_length=100),
    limit: int = Query(default=20, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> Any:
    """
    Get the user's quiz results, most recent first.
    """
    query = db.query(QuizResult).filter(QuizResult.user_id == user_id)

    subject = normalize_subject(subject)
    if subject:
        query = query.filter(func.lower(QuizResult.subject) == subject)

    return query.order_by(QuizResult.completed_at.desc(), QuizResult.id.desc()).limit(limit).all()


@router.get("/latest", response_model=QuizResultResponse, responses={404: {"model": ErrorResponse}})
def latest_quiz(
    subject: str = Query(..., min_length=1, max_length=100),
    topic: Optional[str] = Query(default=None, max_length=200),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> Any:
    """
    Get the most recent quiz result for a subject, optionally narrowed to a topic.
    """
    query = db.query(QuizResult).filter(
        QuizResult.user_id == user_id,
        func.lower(QuizResult.subject) == normalize_subject(subject),
    )
    if topic and topic.strip():
        query = query.filter(QuizResult.topic == topic.strip().lower())

    result = query.order_by(QuizResult.completed_at.desc(), QuizResult.id.desc()).first()
    if not result:
        raise HTTPException(status_code=404, detail="No quiz result found")
    return result


@router.get("/result/{result_id}", response_model=QuizResultResponse, responses={404: {"model": ErrorResponse}})
def get_quiz_result(
    result_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> Any:
    """
    Get a single quiz result owned by the user.
    """
    result = db.query(QuizResult).filter(
        QuizResult.id == result_id,
        QuizResult.user_id == user_id,
    ).first()
    if not result:
        raise HTTPException(status_code=404, detail="Quiz result not found")
    return result
