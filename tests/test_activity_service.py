import asyncio
import time

import pytest

from learnsense.core.engine.recommendation_ranker import STORE_ERROR_REASONING
from learnsense.core.engine.schemas import Modality
from learnsense.core.engine.service import LearningModeService
from learnsense.db.base import SessionLocal
from learnsense.models.activity import ActivityLog
from learnsense.schemas.activity import ActivityLogCreate
from learnsense.schemas.quiz import QuizResultCreate
from learnsense.services.activity_service import record_activity, save_quiz_result
from learnsense.services.activity_store import SqlActivityStore
from factories import TEST_USER_ID


def test_first_session_creates_record(db_session):
    activity = record_activity(db_session, TEST_USER_ID, ActivityLogCreate(
        subject=" Math ", modality=Modality.TEXT, quiz_score=80, focus_level=70, reading_time_seconds=120,
    ))

    assert activity.id is not None
    assert activity.subject == "math"
    assert activity.modality == "text"
    assert activity.reading_time_seconds == 120
    assert activity.session_timestamp is not None


def test_repeat_sessions_accumulate_into_one_row(db_session):
    record_activity(db_session, TEST_USER_ID, ActivityLogCreate(
        subject="math", modality=Modality.AUDIO, quiz_score=60, focus_level=50, playback_count=2,
    ))
    record_activity(db_session, TEST_USER_ID, ActivityLogCreate(
        subject="MATH", modality=Modality.AUDIO, quiz_score=75, playback_count=3,
    ))

    rows = db_session.query(ActivityLog).filter(ActivityLog.user_id == TEST_USER_ID).all()
    assert len(rows) == 1
    assert rows[0].playback_count == 5
    assert rows[0].quiz_score == 75
    assert rows[0].focus_level == 50


def test_interleaved_sessions_keep_every_increment(db_tables):
    payload = ActivityLogCreate(subject="math", modality=Modality.TEXT, reading_time_seconds=100)
    first, second = SessionLocal(), SessionLocal()
    try:
        record_activity(first, TEST_USER_ID, payload)

        # first now holds the row at 100s while second writes past it
        stale = first.query(ActivityLog).one()
        assert stale.reading_time_seconds == 100
        record_activity(second, TEST_USER_ID, payload)
        merged = record_activity(first, TEST_USER_ID, payload)

        assert merged.reading_time_seconds == 300
        assert second.query(ActivityLog).count() == 1
    finally:
        first.close()
        second.close()


def test_first_write_from_two_sessions_merges(db_tables):
    first, second = SessionLocal(), SessionLocal()
    try:
        record_activity(first, TEST_USER_ID, ActivityLogCreate(
            subject="math", modality=Modality.AUDIO, playback_count=1, quiz_score=40,
        ))
        merged = record_activity(second, TEST_USER_ID, ActivityLogCreate(
            subject="math", modality=Modality.AUDIO, playback_count=2,
        ))

        assert merged.playback_count == 3
        assert merged.quiz_score == 40
        assert first.query(ActivityLog).count() == 1
    finally:
        first.close()
        second.close()


def test_different_modalities_get_separate_rows(db_session):
    for modality in (Modality.VISUAL, Modality.TEXT):
        record_activity(db_session, TEST_USER_ID, ActivityLogCreate(subject="math", modality=modality))

    assert db_session.query(ActivityLog).count() == 2


def test_blank_subject_is_rejected(db_session):
    with pytest.raises(ValueError):
        record_activity(db_session, TEST_USER_ID, ActivityLogCreate(subject="   ", modality=Modality.TEXT))


def test_quiz_score_is_derived_from_answers(db_session):
    result = save_quiz_result(db_session, TEST_USER_ID, QuizResultCreate(
        subject="Science", topic=" Cells ", modality=Modality.VISUAL, total_questions=8, correct_answers=6,
        responses=[{"question_id": 1, "question_text": "Q1", "correct_answer": "A", "is_correct": True}],
    ))

    assert result.score == 75
    assert result.subject == "science"
    assert result.topic == "cells"
    assert result.responses[0]["question_id"] == 1


def test_more_correct_than_total_is_rejected(db_session):
    with pytest.raises(ValueError):
        save_quiz_result(db_session, TEST_USER_ID, QuizResultCreate(
            subject="math", total_questions=2, correct_answers=3,
        ))


def test_sql_store_returns_newest_first(db_session):
    for modality in (Modality.VISUAL, Modality.AUDIO, Modality.TEXT):
        record_activity(db_session, TEST_USER_ID, ActivityLogCreate(subject="math", modality=modality, quiz_score=50))
    record_activity(db_session, "someone-else", ActivityLogCreate(subject="math", modality=Modality.TEXT))
    save_quiz_result(db_session, TEST_USER_ID, QuizResultCreate(subject="math", total_questions=4, correct_answers=4))

    store = SqlActivityStore(SessionLocal, timeout=5)
    activities = asyncio.run(store.fetch_activities(TEST_USER_ID, subject="Math"))
    quiz_results = asyncio.run(store.fetch_quiz_results(TEST_USER_ID, limit=None))

    assert [a.modality for a in activities] == ["text", "audio", "visual"]
    assert activities[0].session_timestamp.tzinfo is not None
    assert len(quiz_results) == 1
    assert quiz_results[0].score == 100
    assert asyncio.run(store.fetch_activities(TEST_USER_ID, subject="history")) == []
    audio = asyncio.run(store.fetch_activities(TEST_USER_ID, subject="math", modality="audio"))
    assert [a.modality for a in audio] == ["audio"]


class SlowSession:
    """Session whose queries block longer than the store timeout."""

    def __init__(self, delay):
        self.delay = delay

    def query(self, *entities):
        time.sleep(self.delay)
        raise RuntimeError("query should have been abandoned")

    def close(self):
        pass


def test_slow_reads_are_cut_off_by_the_store_timeout():
    store = SqlActivityStore(lambda: SlowSession(0.5), timeout=0.05)
    service = LearningModeService(store)

    async def recommend():
        started = time.monotonic()
        result = await service.recommend_learning_mode(TEST_USER_ID, "math")
        return result, time.monotonic() - started

    result, elapsed = asyncio.run(recommend())

    assert result.reasoning == STORE_ERROR_REASONING
    assert result.confidence == 0.3
    assert elapsed < 0.4


def test_sql_store_read_raises_timeout():
    store = SqlActivityStore(lambda: SlowSession(0.3), timeout=0.05)

    with pytest.raises(asyncio.TimeoutError):
        asyncio.run(store.fetch_quiz_results(TEST_USER_ID))
