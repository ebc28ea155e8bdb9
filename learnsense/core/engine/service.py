"""
Learning mode service.
Runs the recommendation engine against an injected activity store.
"""
import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from learnsense.core.engine.difficulty_adapter import calculate_adaptive_difficulty
from learnsense.core.engine.engagement_analyzer import analyze_engagement, error_report
from learnsense.core.engine.engagement_scorer import as_number
from learnsense.core.engine.learning_path import optimize_learning_path
from learnsense.core.engine.mode_aggregator import (
    DEFAULT_HISTORY_LIMIT,
    ModePerformanceAggregator,
    resolve_modality,
)
from learnsense.core.engine.ordering import RecentFirst
from learnsense.core.engine.performance_predictor import fallback_prediction, predict_performance
from learnsense.core.engine.recommendation_cache import RecommendationCache
from learnsense.core.engine.recommendation_ranker import (
    STORE_ERROR_REASONING,
    no_history_result,
    rank_modes,
)
from learnsense.core.engine.schemas import (
    MODALITIES,
    AggregatedHistory,
    ContentRecommendation,
    Difficulty,
    EngagementReport,
    LearningPath,
    LearningTypesStatus,
    PerformancePrediction,
    QuizDifficultyRecommendation,
    RecommendationResult,
)

logger = logging.getLogger(__name__)


class LearningModeService:
    """
    Entry point for the adaptive learning features.

    The store is passed in, never looked up globally, so tests can hand in
    a fake and the HTTP layer can hand in the SQL store.
    """

    def __init__(
        self,
        store,
        cache: Optional[RecommendationCache] = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        quiz_history_limit: Optional[int] = None,
        prediction_limit: int = 30,
        learning_path_window: int = 10,
    ):
        self.store = store
        self.cache = cache
        self.aggregator = ModePerformanceAggregator(
            store, history_limit=history_limit, quiz_history_limit=quiz_history_limit
        )
        self.prediction_limit = prediction_limit
        self.learning_path_window = learning_path_window

    async def recommend_learning_mode(self, user_id: str, subject: Optional[str] = None) -> RecommendationResult:
        """
        Recommend the modality that suits the learner best.

        Never raises: store failures and empty history both produce the
        low-confidence visual default.
        """
        if self.cache is not None:
            cached = self.cache.get(user_id, subject)
            if cached is not None:
                logger.info(f"Recommendation cache hit for user {user_id}")
                return cached

        history = await self.aggregator.aggregate(user_id, subject)
        return self._recommend_from_history(user_id, subject, history)

    def _recommend_from_history(
        self, user_id: str, subject: Optional[str], history: AggregatedHistory
    ) -> RecommendationResult:
        if history.store_error is not None:
            return no_history_result(STORE_ERROR_REASONING)
        if history.total_records == 0:
            result = no_history_result()
        else:
            result = rank_modes(history.buckets, history.total_records, subject)

        logger.info(
            f"Recommended {result.recommended_mode.value} for user {user_id} "
            f"(confidence {result.confidence:.2f}, {history.total_records} records)"
        )
        if self.cache is not None and not result.is_default:
            self.cache.put(user_id, subject, result)
        return result

    async def recommend_quiz_difficulty(
        self,
        user_id: str,
        subject: Optional[str] = None,
        current_difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
    ) -> QuizDifficultyRecommendation:
        """
        Seed quiz difficulty from the scores of the best-performing modality.

        Bypasses the recommendation cache so the mode and the scores come
        from the same read.
        """
        history = await self.aggregator.aggregate(user_id, subject)
        mode = self._recommend_from_history(user_id, subject, history).best_performing_mode

        # Store returns newest first
        scores = RecentFirst(history.quiz_results).filter(
            lambda r: resolve_modality(r.modality) == mode and r.score is not None
        ).map(lambda r: as_number(r.score))

        return QuizDifficultyRecommendation(
            modality=mode,
            difficulty=calculate_adaptive_difficulty(scores, current_difficulty),
            scores_considered=len(scores),
        )

    async def predict_performance(self, user_id: str, subject: Optional[str] = None) -> PerformancePrediction:
        """Forecast the next quiz score from recent activity."""
        try:
            activities = await self.store.fetch_activities(user_id, subject=subject, limit=self.prediction_limit)
        except Exception as e:
            logger.error(f"Error in performance prediction for user {user_id}: {e!r}")
            return fallback_prediction("Error in prediction")

        scores = RecentFirst(activities).filter(lambda a: a.quiz_score is not None).map(
            lambda a: as_number(a.quiz_score)
        )
        return predict_performance(scores)

    async def analyze_engagement(self, user_id: str, days: int = 7) -> EngagementReport:
        """Engagement over the trailing ``days`` days."""
        since = datetime.now(timezone.utc) - timedelta(days=days)
        try:
            activities = await self.store.fetch_activities(user_id, limit=None, since=since)
        except Exception as e:
            logger.error(f"Error analyzing engagement for user {user_id}: {e!r}")
            return error_report(days)
        return analyze_engagement(activities, days=days)

    async def optimize_learning_path(self, user_id: str, subject: Optional[str] = None) -> LearningPath:
        try:
            activities = await self.store.fetch_activities(
                user_id, subject=subject, limit=self.learning_path_window
            )
        except Exception as e:
            logger.error(f"Error optimizing learning path for user {user_id}: {e!r}")
            return LearningPath(level="beginner", difficulty=Difficulty.MEDIUM, next_topics=[])

        scores = RecentFirst(activities).map(lambda a: as_number(a.quiz_score))
        return optimize_learning_path(scores, subject)

    async def recommend_content(self, user_id: str, subject: Optional[str] = None) -> ContentRecommendation:
        """Modality, difficulty and topics for the content-generation collaborator."""
        mode = await self.recommend_learning_mode(user_id, subject)
        path = await self.optimize_learning_path(user_id, subject)

        return ContentRecommendation(
            recommended_mode=mode.recommended_mode,
            best_performing_mode=mode.best_performing_mode,
            difficulty=path.difficulty,
            topics=path.next_topics,
            confidence=mode.confidence,
            reasoning=mode.reasoning,
        )

    async def check_learning_types(self, user_id: str, subject: str) -> LearningTypesStatus:
        """
        Report which modalities the learner has tried for a subject.

        Each modality is read separately. A failed read is logged and that
        modality counts as not tried; the error propagates only when every
        read fails.
        """
        reads = await asyncio.gather(
            *(
                self.store.fetch_activities(user_id, subject=subject, limit=1, modality=mode.value)
                for mode in MODALITIES
            ),
            return_exceptions=True,
        )

        latest = {}
        failures = []
        for mode, activities in zip(MODALITIES, reads):
            if isinstance(activities, BaseException):
                logger.warning(f"Error checking {mode.value} learning type for user {user_id}: {activities!r}")
                failures.append(activities)
            elif activities:
                latest[mode] = activities[0]  # newest first

        if len(failures) == len(MODALITIES):
            raise failures[0]

        completed_types = [mode for mode in MODALITIES if mode in latest]
        type_scores = {mode.value: as_number(latest[mode].quiz_score) for mode in completed_types}

        all_completed = len(completed_types) == len(MODALITIES)
        all_scores_zero = all_completed and all(score == 0 for score in type_scores.values())

        logger.info(
            f"Learning types check for user {user_id}, subject '{subject}': "
            f"{len(completed_types)}/{len(MODALITIES)} completed"
        )

        return LearningTypesStatus(
            subject=subject.strip().lower(),
            completed=all_completed and not all_scores_zero,
            completed_types=completed_types,
            total_completed=len(completed_types),
            all_scores_zero=all_scores_zero,
            type_scores=type_scores,
        )
