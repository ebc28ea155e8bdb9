"""
Activity store: read access to activity logs and quiz results.
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Protocol

from sqlalchemy import func
from sqlalchemy.orm import Session

from learnsense.core.engine.schemas import ActivityRecord, QuizResultRecord
from learnsense.models.activity import ActivityLog
from learnsense.models.quiz_result import QuizResult

logger = logging.getLogger(__name__)


class ActivityStore(Protocol):
    """Read interface the recommendation engine depends on."""

    async def fetch_activities(
        self,
        user_id: str,
        subject: Optional[str] = None,
        limit: Optional[int] = 100,
        since: Optional[datetime] = None,
        modality: Optional[str] = None,
    ) -> List[ActivityRecord]:
        """Activity records for the user, newest first."""
        ...

    async def fetch_quiz_results(
        self,
        user_id: str,
        subject: Optional[str] = None,
        limit: Optional[int] = 100,
    ) -> List[QuizResultRecord]:
        """Quiz results for the user, newest first."""
        ...


def normalize_subject(subject: Optional[str]) -> Optional[str]:
    """Subjects are stored and compared trimmed and lower-cased."""
    if subject is None:
        return None
    subject = subject.strip().lower()
    return subject or None


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlActivityStore:
    """
    SQLAlchemy-backed activity store.

    Each read opens its own session in a worker thread, so concurrent reads
    never share a session, and is bounded by ``timeout`` seconds.
    """

    def __init__(self, session_factory: Callable[[], Session], timeout: float = 10.0):
        self.session_factory = session_factory
        self.timeout = timeout

    async def _run(self, fn, *args):
        return await asyncio.wait_for(asyncio.to_thread(fn, *args), timeout=self.timeout)

    async def fetch_activities(
        self,
        user_id: str,
        subject: Optional[str] = None,
        limit: Optional[int] = 100,
        since: Optional[datetime] = None,
        modality: Optional[str] = None,
    ) -> List[ActivityRecord]:
        return await self._run(self._query_activities, user_id, subject, limit, since, modality)

    async def fetch_quiz_results(
        self,
        user_id: str,
        subject: Optional[str] = None,
        limit: Optional[int] = 100,
    ) -> List[QuizResultRecord]:
        return await self._run(self._query_quiz_results, user_id, subject, limit)

    def _query_activities(
        self,
        user_id: str,
        subject: Optional[str],
        limit: Optional[int],
        since: Optional[datetime],
        modality: Optional[str] = None,
    ) -> List[ActivityRecord]:
        db = self.session_factory()
        try:
            query = db.query(ActivityLog).filter(ActivityLog.user_id == str(user_id))
            subject = normalize_subject(subject)
            if subject:
                query = query.filter(func.lower(ActivityLog.subject) == subject)
            if since is not None:
                query = query.filter(ActivityLog.session_timestamp >= since)
            if modality:
                query = query.filter(ActivityLog.modality == modality)
            query = query.order_by(ActivityLog.session_timestamp.desc(), ActivityLog.id.desc())
            if limit is not None:
                query = query.limit(limit)

            records = []
            for row in query.all():
                record = ActivityRecord.model_validate(row)
                record.session_timestamp = _as_utc(record.session_timestamp)
                records.append(record)
            return records
        finally:
            db.close()

    def _query_quiz_results(
        self,
        user_id: str,
        subject: Optional[str],
        limit: Optional[int],
    ) -> List[QuizResultRecord]:
        db = self.session_factory()
        try:
            query = db.query(QuizResult).filter(QuizResult.user_id == str(user_id))
            subject = normalize_subject(subject)
            if subject:
                query = query.filter(func.lower(QuizResult.subject) == subject)
            query = query.order_by(QuizResult.completed_at.desc(), QuizResult.id.desc())
            if limit is not None:
                query = query.limit(limit)

            records = []
            for row in query.all():
                record = QuizResultRecord.model_validate(row)
                record.completed_at = _as_utc(record.completed_at)
                records.append(record)
            return records
        finally:
            db.close()
