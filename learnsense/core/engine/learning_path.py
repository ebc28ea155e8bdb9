"""
Learning path optimization: level, difficulty and next topics for a subject.
"""
from typing import Dict, List, Optional

from learnsense.core.engine.ordering import RecentFirst, require_recent_first
from learnsense.core.engine.schemas import Difficulty, LearningPath

# Placeholder catalogue until topics come from the curriculum tables
TOPIC_CATALOGUE: Dict[str, Dict[Difficulty, List[str]]] = {
    "math": {
        Difficulty.EASY: ["Basic Arithmetic", "Number Patterns", "Simple Geometry"],
        Difficulty.MEDIUM: ["Algebra Basics", "Fractions", "Decimals"],
        Difficulty.HARD: ["Calculus", "Linear Algebra", "Statistics"],
    },
    "science": {
        Difficulty.EASY: ["Basic Biology", "Simple Physics", "Chemistry Basics"],
        Difficulty.MEDIUM: ["Cell Biology", "Mechanics", "Organic Chemistry"],
        Difficulty.HARD: ["Genetics", "Quantum Physics", "Biochemistry"],
    },
}


def suggest_topics(subject: Optional[str], difficulty: Difficulty) -> List[str]:
    if not subject:
        return []
    return list(TOPIC_CATALOGUE.get(subject.strip().lower(), {}).get(difficulty, []))


def optimize_learning_path(recent_scores: RecentFirst[float], subject: Optional[str] = None) -> LearningPath:
    """
    Derive a learning path from recent quiz scores.

    Args:
        recent_scores: Quiz scores, most recent first; zeros are treated as "no quiz"
        subject: Subject used to look up suggested topics

    Returns:
        LearningPath
    """
    require_recent_first(recent_scores, "recent_scores")
    scores = recent_scores.filter(lambda s: s > 0)

    if len(scores) == 0:
        return LearningPath(level="beginner", difficulty=Difficulty.EASY, next_topics=[])

    avg_score = sum(scores) / len(scores)
    trend = scores[0] - scores[-1]

    if avg_score > 80 and trend > 0:
        difficulty = Difficulty.HARD
    elif avg_score < 60 or trend < -10:
        difficulty = Difficulty.EASY
    else:
        difficulty = Difficulty.MEDIUM

    if avg_score > 70:
        level = "advanced"
    elif avg_score > 50:
        level = "intermediate"
    else:
        level = "beginner"

    return LearningPath(
        level=level,
        difficulty=difficulty,
        next_topics=suggest_topics(subject, difficulty),
        avg_score=avg_score,
        trend=trend,
    )
