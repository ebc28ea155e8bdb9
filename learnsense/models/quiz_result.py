"""
Quiz result model - append-only record of completed quizzes.
"""
from sqlalchemy import Column, Integer, String, DateTime, Float, JSON
from sqlalchemy.sql import func

from learnsense.db.base import Base


class QuizResult(Base):
    """Completed quiz with all question responses stored inline."""

    __tablename__ = "quiz_results"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    subject = Column(String(100), nullable=False, index=True)
    topic = Column(String(200), nullable=True)
    modality = Column(String(20), nullable=False, index=True)  # visual, audio, text
    difficulty = Column(String(20), default="medium")  # easy, medium, hard

    total_questions = Column(Integer, nullable=False)
    correct_answers = Column(Integer, nullable=False, default=0)
    score = Column(Float, nullable=False)  # 0-100
    time_taken = Column(Integer, nullable=True)  # Time in seconds

    # [{"question_id": 1, "question_text": "...", "is_correct": false, ...}, ...]
    responses = Column(JSON, nullable=False, default=list)

    completed_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
