"""
API endpoint reporting which learning modalities a user has tried.
"""
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status

from learnsense.core.dependencies import get_current_user_id, get_learning_mode_service
from learnsense.core.engine.schemas import LearningTypesStatus
from learnsense.core.engine.service import LearningModeService
from learnsense.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/check",
    response_model=LearningTypesStatus,
    responses={503: {"model": ErrorResponse}},
)
async def check_learning_types(
    subject: str = Query(..., min_length=1, max_length=100),
    user_id: str = Depends(get_current_user_id),
    service: LearningModeService = Depends(get_learning_mode_service),
) -> Any:
    """
    Check whether the user has studied the subject in all three modalities.

    ``completed`` stays false while any modality is missing or every
    modality scored zero. A modality whose read fails counts as missing;
    503 only when no modality could be read.
    """
    if not subject.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Subject is required")

    try:
        return await service.check_learning_types(user_id, subject)
    except Exception as e:
        logger.error(f"Error checking learning types: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Activity history is temporarily unavailable"
        )
