"""
Recommendation ranker.
Scores each modality, picks the best one and explains the choice.
"""
from typing import Dict, Mapping, Optional

from learnsense.core.engine.schemas import (
    MODALITIES,
    Modality,
    ModePerformance,
    ModeStats,
    RecommendationResult,
)

# Weighted composite: 40% quiz performance, 30% focus, 30% engagement
SCORE_WEIGHT = 0.4
FOCUS_WEIGHT = 0.3
ENGAGEMENT_WEIGHT = 0.3

MAX_CONFIDENCE = 0.95
DEFAULT_CONFIDENCE = 0.3

NO_HISTORY_REASONING = (
    "No learning history found. We recommend starting with Visual Learning "
    "as it's effective for most learners."
)
STORE_ERROR_REASONING = (
    "Unable to analyze learning history. Starting with Visual Learning is recommended."
)


def compute_mode_stats(perf: ModePerformance) -> ModeStats:
    """Averages and weighted composite for one modality bucket."""
    if perf.session_count <= 0:
        return ModeStats(
            total_score=perf.total_score,
            reading_time_sum=perf.reading_time_sum,
            playback_sum=perf.playback_sum,
        )

    sessions = perf.session_count
    avg_score = perf.total_score / sessions
    avg_focus = perf.focus_sum / sessions
    avg_engagement = perf.engagement_sum / sessions
    weighted = avg_score * SCORE_WEIGHT + avg_focus * FOCUS_WEIGHT + avg_engagement * ENGAGEMENT_WEIGHT

    return ModeStats(
        total_score=perf.total_score,
        session_count=sessions,
        avg_score=avg_score,
        avg_focus=avg_focus,
        avg_engagement=avg_engagement,
        weighted_score=weighted,
        reading_time_sum=perf.reading_time_sum,
        playback_sum=perf.playback_sum,
    )


def _pick_best(stats: Mapping[Modality, ModeStats], field: str) -> Modality:
    """First strict maximum in visual, audio, text order; visual when nothing beats 0."""
    best_mode = Modality.VISUAL
    best_value = 0.0
    for mode in MODALITIES:
        mode_stats = stats[mode]
        if mode_stats.session_count <= 0:
            continue
        value = getattr(mode_stats, field)
        if value > best_value:
            best_value = value
            best_mode = mode
    return best_mode


def compute_confidence(total_sessions: int, mode_sessions: int, weighted_score: float) -> float:
    """
    Heuristic confidence from data volume and score magnitude.
    Each term saturates early.
    """
    data_quality = min(0.3 + total_sessions * 0.01, 0.4)
    mode_confidence = min(0.3 + mode_sessions * 0.02, 0.4)
    score_confidence = min(0.2, weighted_score / 500)
    return max(0.0, min(data_quality + mode_confidence + score_confidence, MAX_CONFIDENCE))


def build_reasoning(
    mode: Modality,
    stats: ModeStats,
    total_sessions: int,
    subject: Optional[str] = None,
) -> str:
    """Human-readable explanation for the weighted pick."""
    reasoning = f"Based on {total_sessions} learning session{'s' if total_sessions != 1 else ''}"
    if subject:
        reasoning += f" in {subject}"
    reasoning += f", {mode.value} learning shows the best results"

    if stats.session_count > 0:
        avg_score = round(stats.avg_score)
        avg_focus = round(stats.avg_focus)
        reasoning += f" with an average score of {avg_score}%"
        if avg_focus > 0:
            reasoning += f" and focus level of {avg_focus}%"
    reasoning += "."

    if mode == Modality.TEXT and stats.reading_time_sum > 0:
        avg_reading = round(stats.reading_time_sum / stats.session_count)
        reasoning += f" You spent an average of {avg_reading} seconds reading, showing strong engagement."
    elif mode == Modality.AUDIO and stats.playback_sum > 0:
        plays = int(stats.playback_sum)
        reasoning += (
            f" You played audio content {plays} time{'s' if plays != 1 else ''}, "
            f"indicating good audio learning engagement."
        )

    return reasoning


def rank_modes(
    buckets: Mapping[Modality, ModePerformance],
    total_sessions: int,
    subject: Optional[str] = None,
) -> RecommendationResult:
    """
    Rank modalities by weighted composite score.

    Args:
        buckets: Per-modality tallies from the aggregator
        total_sessions: Number of records the tallies were built from
        subject: Subject filter, if any (only used in the reasoning text)

    Returns:
        RecommendationResult; ``recommended_mode`` and ``best_performing_mode``
        may differ because the latter ranks on average quiz score alone
    """
    stats: Dict[Modality, ModeStats] = {
        mode: compute_mode_stats(buckets.get(mode, ModePerformance())) for mode in MODALITIES
    }

    recommended = _pick_best(stats, "weighted_score")
    best_performing = _pick_best(stats, "avg_score")
    recommended_stats = stats[recommended]

    confidence = compute_confidence(
        total_sessions,
        recommended_stats.session_count,
        recommended_stats.weighted_score,
    )

    return RecommendationResult(
        recommended_mode=recommended,
        best_performing_mode=best_performing,
        confidence=confidence,
        reasoning=build_reasoning(recommended, recommended_stats, total_sessions, subject),
        per_mode_stats={mode.value: stats[mode] for mode in MODALITIES},
    )


def no_history_result(reasoning: str = NO_HISTORY_REASONING) -> RecommendationResult:
    """Fixed fallback for learners without usable history."""
    return RecommendationResult(
        recommended_mode=Modality.VISUAL,
        best_performing_mode=Modality.VISUAL,
        confidence=DEFAULT_CONFIDENCE,
        reasoning=reasoning,
        per_mode_stats={mode.value: ModeStats() for mode in MODALITIES},
        is_default=True,
    )
