"""
Mode performance aggregator.
Folds a learner's activity history and quiz results into per-modality tallies.
"""
import asyncio
import logging
from typing import Any, Dict, Iterable, Optional

from learnsense.core.engine.engagement_scorer import as_number, score_engagement
from learnsense.core.engine.schemas import (
    MODALITIES,
    ActivityRecord,
    AggregatedHistory,
    Modality,
    ModePerformance,
    QuizResultRecord,
)

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 100


def resolve_modality(value: Any) -> Modality:
    """Map a stored modality string onto a Modality; anything unrecognized is visual."""
    if isinstance(value, Modality):
        return value
    if isinstance(value, str):
        try:
            return Modality(value.strip().lower())
        except ValueError:
            pass
    return Modality.VISUAL


def quiz_focus_proxy(score: float) -> float:
    """Synthetic focus level for quiz results, which carry no focus reading."""
    if score >= 80:
        return 85.0
    if score >= 60:
        return 70.0
    return 50.0


def empty_buckets() -> Dict[Modality, ModePerformance]:
    return {mode: ModePerformance() for mode in MODALITIES}


def fold_history(
    activities: Iterable[ActivityRecord],
    quiz_results: Iterable[QuizResultRecord] = (),
) -> AggregatedHistory:
    """
    Accumulate activity records and quiz results into per-modality buckets.

    Quiz results are layered on top of the activity tallies, so a study
    session that produced both an activity record and a quiz result is
    counted twice. Downstream confidence scaling depends on that combined
    count.

    Args:
        activities: Activity records, newest first
        quiz_results: Quiz results, newest first

    Returns:
        AggregatedHistory with fresh buckets, the number of records consumed
        and the quiz results themselves
    """
    buckets = empty_buckets()
    quiz_results = list(quiz_results)
    activity_count = 0
    quiz_result_count = 0

    for activity in activities:
        mode = resolve_modality(activity.modality)
        perf = buckets[mode]

        focus_level = as_number(activity.focus_level)
        reading_time = as_number(activity.reading_time_seconds)
        playback_count = as_number(activity.playback_count)

        perf.total_score += as_number(activity.quiz_score)
        perf.session_count += 1
        perf.focus_sum += focus_level
        perf.reading_time_sum += reading_time
        perf.playback_sum += playback_count
        perf.engagement_sum += score_engagement(
            mode,
            reading_time_seconds=reading_time,
            playback_count=playback_count,
            focus_level=focus_level,
        )
        activity_count += 1

    for result in quiz_results:
        mode = resolve_modality(result.modality)
        perf = buckets[mode]
        score = as_number(result.score)

        perf.total_score += score
        perf.session_count += 1
        perf.focus_sum += quiz_focus_proxy(score)
        perf.engagement_sum += min(100.0, score)
        quiz_result_count += 1

    return AggregatedHistory(
        buckets=buckets,
        activity_count=activity_count,
        quiz_result_count=quiz_result_count,
        quiz_results=quiz_results,
    )


class ModePerformanceAggregator:
    """
    Pulls a learner's history from the activity store and folds it into
    per-modality performance tallies.
    """

    def __init__(
        self,
        store,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        quiz_history_limit: Optional[int] = None,
    ):
        self.store = store
        self.history_limit = history_limit
        self.quiz_history_limit = quiz_history_limit if quiz_history_limit is not None else history_limit

    async def aggregate(self, user_id: str, subject: Optional[str] = None) -> AggregatedHistory:
        """
        Fetch activity and quiz history concurrently and aggregate it.

        A failed activity read yields empty buckets with ``store_error`` set;
        a failed quiz-result read degrades to activity-only aggregation.
        Neither propagates.
        """
        activities, quiz_results = await asyncio.gather(
            self.store.fetch_activities(user_id, subject=subject, limit=self.history_limit),
            self.store.fetch_quiz_results(user_id, subject=subject, limit=self.quiz_history_limit),
            return_exceptions=True,
        )

        if isinstance(activities, BaseException):
            logger.error(f"Activity history unavailable for user {user_id}: {activities!r}")
            return AggregatedHistory(buckets=empty_buckets(), store_error=str(activities) or type(activities).__name__)

        if isinstance(quiz_results, BaseException):
            logger.warning(
                f"Quiz results unavailable for user {user_id}, using activity history only: {quiz_results!r}"
            )
            quiz_results = []

        history = fold_history(activities, quiz_results)
        logger.info(
            f"Aggregated {history.activity_count} activities and "
            f"{history.quiz_result_count} quiz results for user {user_id}"
        )
        return history
