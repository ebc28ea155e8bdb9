"""
Adaptive quiz difficulty.
"""
from typing import Optional, Union

from learnsense.core.engine.ordering import RecentFirst, require_recent_first
from learnsense.core.engine.schemas import Difficulty


def normalize_difficulty(value: Union[Difficulty, str, None]) -> Difficulty:
    if isinstance(value, Difficulty):
        return value
    if isinstance(value, str):
        try:
            return Difficulty(value.strip().lower())
        except ValueError:
            pass
    return Difficulty.MEDIUM


def calculate_adaptive_difficulty(
    recent_scores: Optional[RecentFirst[float]],
    current_difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
) -> Difficulty:
    """
    Pick the next quiz difficulty from the learner's recent scores.

    Args:
        recent_scores: Quiz scores, most recent first (``recent_scores[0]`` is the last quiz)
        current_difficulty: Returned unchanged when there are no scores

    Returns:
        Difficulty tier
    """
    if recent_scores is None:
        return normalize_difficulty(current_difficulty)
    require_recent_first(recent_scores, "recent_scores")
    if len(recent_scores) == 0:
        return normalize_difficulty(current_difficulty)

    avg_score = sum(recent_scores) / len(recent_scores)
    last_score = recent_scores[0]

    if avg_score > 85 and last_score > 80:
        return Difficulty.HARD
    if avg_score < 60 or last_score < 50:
        return Difficulty.EASY
    return Difficulty.MEDIUM
