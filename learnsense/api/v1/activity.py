"""
API endpoints for activity logging.
"""
import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from learnsense.core.dependencies import get_current_user_id, get_db, get_recommendation_cache
from learnsense.core.engine.recommendation_cache import RecommendationCache
from learnsense.models.activity import ActivityLog
from learnsense.schemas.activity import ActivityLogCreate, ActivityLogResponse
from learnsense.services.activity_service import record_activity
from learnsense.services.activity_store import normalize_subject

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ActivityLogResponse, status_code=status.HTTP_201_CREATED)
def log_activity(
    activity_in: ActivityLogCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    cache: RecommendationCache = Depends(get_recommendation_cache),
) -> Any:
    """
    Log a study session.

    Sessions for a subject and modality the user already has a record for
    are merged into it: quiz score and focus level are replaced, reading
    time and playback count are added.
    """
    try:
        activity = record_activity(db, user_id, activity_in)
        cache.invalidate(user_id, activity_in.subject)
        return activity

    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error logging activity: {e}")
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to log activity: {str(e)}"
        )


@router.get("", response_model=List[ActivityLogResponse])
def list_activities(
    subject: Optional[str] = Query(default=None, max_length=100),
    limit: int = Query(default=100, ge=1, le=1000),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> Any:
    """
    List the user's activity records, most recent first.
    """
    query = db.query(ActivityLog).filter(ActivityLog.user_id == user_id)

    subject = normalize_subject(subject)
    if subject:
        query = query.filter(func.lower(ActivityLog.subject) == subject)

    return query.order_by(
        ActivityLog.session_timestamp.desc(), ActivityLog.id.desc()
    ).limit(limit).all()
