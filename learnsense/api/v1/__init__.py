"""API v1 router."""
from fastapi import APIRouter

from learnsense.api.v1 import activity, learning_types, ml, quiz

api_router = APIRouter()

api_router.include_router(ml.router, prefix="/ml", tags=["Adaptive Learning"])
api_router.include_router(activity.router, prefix="/activity", tags=["Activity"])
api_router.include_router(quiz.router, prefix="/quiz", tags=["Quiz Results"])
api_router.include_router(learning_types.router, prefix="/learning-types", tags=["Learning Types"])
