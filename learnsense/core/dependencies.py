"""
Dependency injection for FastAPI endpoints.
"""
from typing import Generator, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError

from learnsense.core.config import settings
from learnsense.core.engine.recommendation_cache import RecommendationCache
from learnsense.core.engine.service import LearningModeService
from learnsense.db.base import SessionLocal
from learnsense.services.activity_store import ActivityStore, SqlActivityStore

# Tokens are issued by the auth service; this API only verifies them
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_PREFIX}/auth/login")

recommendation_cache = RecommendationCache(ttl_seconds=settings.RECOMMENDATION_CACHE_TTL_SECONDS)


def get_db() -> Generator:
    """
    Dependency for database session.

    Yields:
        Database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user_id(token: str = Depends(oauth2_scheme)) -> str:
    """
    Get the authenticated user's ID from the JWT ``sub`` claim.

    Raises:
        HTTPException: If token is invalid or has no subject
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        user_id: Optional[str] = payload.get("sub")
        if user_id is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    return str(user_id)


def get_activity_store() -> ActivityStore:
    """Activity store backed by the application database."""
    return SqlActivityStore(SessionLocal, timeout=settings.STORE_TIMEOUT_SECONDS)


def get_recommendation_cache() -> RecommendationCache:
    return recommendation_cache


def get_learning_mode_service(
    store: ActivityStore = Depends(get_activity_store),
    cache: RecommendationCache = Depends(get_recommendation_cache),
) -> LearningModeService:
    """Learning mode service wired to the store and the shared cache."""
    return LearningModeService(
        store,
        cache=cache,
        history_limit=settings.ACTIVITY_HISTORY_LIMIT,
        quiz_history_limit=settings.QUIZ_HISTORY_LIMIT,
        prediction_limit=settings.PREDICTION_HISTORY_LIMIT,
        learning_path_window=settings.LEARNING_PATH_WINDOW,
    )
