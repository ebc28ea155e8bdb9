"""
Trend-based forecast of a learner's next quiz score.
"""
import numpy as np

from learnsense.core.engine.ordering import RecentFirst, require_recent_first
from learnsense.core.engine.schemas import PerformancePrediction

MIN_DATA_POINTS = 5
WINDOW = 5
FALLBACK_SCORE = 65
FALLBACK_CONFIDENCE = 0.3


def fallback_prediction(reason: str = "Insufficient historical data") -> PerformancePrediction:
    return PerformancePrediction(
        predicted_score=FALLBACK_SCORE,
        confidence=FALLBACK_CONFIDENCE,
        factors=[reason],
    )


def predict_performance(scores: RecentFirst[float]) -> PerformancePrediction:
    """
    Predict the next score as the recent average pushed by half the trend.

    The recent window is the 5 newest scores, the older window the next 5.
    Confidence comes from how spread out the scores are, not from any
    statistical interval.

    Args:
        scores: Quiz scores, most recent first

    Returns:
        PerformancePrediction (fixed fallback with fewer than 5 scores)
    """
    require_recent_first(scores, "scores")
    if len(scores) < MIN_DATA_POINTS:
        return fallback_prediction()

    values = np.asarray(list(scores), dtype=float)
    recent_avg = float(np.mean(values[:WINDOW]))
    older = values[WINDOW:WINDOW * 2]
    older_avg = float(np.mean(older)) if older.size else recent_avg

    trend = recent_avg - older_avg
    predicted = max(0.0, min(100.0, recent_avg + trend * 0.5))

    variance = float(np.var(values))
    confidence = max(0.3, min(0.9, 1 - variance / 1000))

    return PerformancePrediction(
        predicted_score=int(round(predicted)),
        confidence=confidence,
        factors=[
            f"Recent average: {round(recent_avg)}%",
            f"Trend: {'improving' if trend > 0 else 'declining' if trend < 0 else 'stable'}",
            f"Data points: {len(values)}",
        ],
        recent_avg=recent_avg,
        older_avg=older_avg,
        trend=trend,
    )
