"""
Write side of the activity store: activity logging and quiz result saving.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from learnsense.models.activity import ActivityLog
from learnsense.models.quiz_result import QuizResult
from learnsense.schemas.activity import ActivityLogCreate
from learnsense.schemas.quiz import QuizResultCreate
from learnsense.services.activity_store import normalize_subject

logger = logging.getLogger(__name__)


def _upsert_insert(db: Session):
    """Dialect-specific INSERT that supports ON CONFLICT DO UPDATE."""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql_insert(ActivityLog)
    if dialect == "sqlite":
        return sqlite_insert(ActivityLog)
    raise NotImplementedError(f"Activity upsert is not supported on {dialect}")


def record_activity(db: Session, user_id: str, data: ActivityLogCreate) -> ActivityLog:
    """
    Log a study session, merging it into the existing record for the same
    (user, subject, modality) triple.

    The merge runs as a single INSERT ... ON CONFLICT DO UPDATE, so
    concurrent sessions for the same triple neither lose increments nor
    collide on the unique constraint.

    Args:
        db: Database session
        user_id: Learner ID
        data: Session data

    Returns:
        The created or updated ActivityLog
    """
    subject = normalize_subject(data.subject)
    if not subject:
        raise ValueError("Subject is required")
    modality = data.modality.value

    stmt = _upsert_insert(db).values(
        user_id=str(user_id),
        subject=subject,
        modality=modality,
        quiz_score=data.quiz_score,
        focus_level=data.focus_level,
        reading_time_seconds=max(0, data.reading_time_seconds),
        playback_count=max(0, data.playback_count),
        session_timestamp=datetime.now(timezone.utc),
    )
    # Latest value wins for scores, additive counters only grow
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id", "subject", "modality"],
        set_={
            "quiz_score": func.coalesce(stmt.excluded.quiz_score, ActivityLog.quiz_score),
            "focus_level": func.coalesce(stmt.excluded.focus_level, ActivityLog.focus_level),
            "reading_time_seconds": ActivityLog.reading_time_seconds + stmt.excluded.reading_time_seconds,
            "playback_count": ActivityLog.playback_count + stmt.excluded.playback_count,
            "session_timestamp": stmt.excluded.session_timestamp,
        },
    )
    db.execute(stmt)
    db.commit()

    activity = db.query(ActivityLog).populate_existing().filter(
        ActivityLog.user_id == str(user_id),
        ActivityLog.subject == subject,
        ActivityLog.modality == modality,
    ).one()

    logger.info(
        f"Recorded activity {activity.id} for user {user_id} ({subject}/{modality}): "
        f"{activity.reading_time_seconds}s reading, {activity.playback_count} plays"
    )
    return activity


def save_quiz_result(db: Session, user_id: str, data: QuizResultCreate) -> QuizResult:
    """
    Append a completed quiz. The score is derived from the answer counts
    when the client does not send one.
    """
    subject = normalize_subject(data.subject)
    if not subject:
        raise ValueError("Subject is required")
    if data.correct_answers > data.total_questions:
        raise ValueError("correct_answers cannot exceed total_questions")

    if data.score is not None:
        score = float(data.score)
    else:
        score = data.correct_answers / data.total_questions * 100

    result = QuizResult(
        user_id=str(user_id),
        subject=subject,
        topic=data.topic.strip().lower() if data.topic else None,
        modality=data.modality.value,
        difficulty=data.difficulty.value,
        total_questions=data.total_questions,
        correct_answers=data.correct_answers,
        score=score,
        time_taken=data.time_taken,
        responses=[response.model_dump() for response in data.responses],
        completed_at=datetime.now(timezone.utc),
    )
    db.add(result)
    db.commit()
    db.refresh(result)

    logger.info(f"Quiz saved: result {result.id} with {len(data.responses)} responses for user {user_id}")
    return result
