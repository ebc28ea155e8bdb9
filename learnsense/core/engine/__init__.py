"""
Adaptive learning-mode recommendation engine.
"""
from .difficulty_adapter import calculate_adaptive_difficulty
from .engagement_analyzer import analyze_engagement
from .engagement_scorer import score_engagement
from .learning_path import optimize_learning_path
from .mode_aggregator import ModePerformanceAggregator, fold_history
from .ordering import RecentFirst
from .performance_predictor import predict_performance
from .recommendation_cache import RecommendationCache
from .recommendation_ranker import no_history_result, rank_modes
from .service import LearningModeService

__all__ = [
    "calculate_adaptive_difficulty",
    "analyze_engagement",
    "score_engagement",
    "optimize_learning_path",
    "ModePerformanceAggregator",
    "fold_history",
    "RecentFirst",
    "predict_performance",
    "RecommendationCache",
    "no_history_result",
    "rank_modes",
    "LearningModeService",
]
