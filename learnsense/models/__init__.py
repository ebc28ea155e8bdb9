"""Models module - Import all models here so create_all sees them."""
from learnsense.db.base import Base
from learnsense.models.activity import ActivityLog
from learnsense.models.quiz_result import QuizResult

__all__ = ["Base", "ActivityLog", "QuizResult"]
