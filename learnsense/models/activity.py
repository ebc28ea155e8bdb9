"""
Activity log model - one row per (user, subject, modality) study triple.
"""
from sqlalchemy import Column, Integer, String, DateTime, Float, UniqueConstraint
from sqlalchemy.sql import func

from learnsense.db.base import Base


class ActivityLog(Base):
    """
    Engagement record for a learner studying a subject in one modality.
    Repeat sessions update the same row: scores and focus are overwritten,
    reading time and playback count accumulate.
    """

    __tablename__ = "activity_logs"
    __table_args__ = (
        UniqueConstraint("user_id", "subject", "modality", name="uq_activity_user_subject_modality"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    subject = Column(String(100), nullable=False, index=True)  # stored lower-cased
    modality = Column(String(20), nullable=False)  # visual, audio, text

    quiz_score = Column(Float, nullable=True)  # 0-100, latest wins
    focus_level = Column(Integer, nullable=True)  # 0-100, latest wins
    reading_time_seconds = Column(Integer, default=0, nullable=False)  # cumulative
    playback_count = Column(Integer, default=0, nullable=False)  # cumulative

    session_timestamp = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
