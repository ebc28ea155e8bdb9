import pytest

from learnsense.core.engine.mode_aggregator import empty_buckets, fold_history
from learnsense.core.engine.recommendation_ranker import (
    NO_HISTORY_REASONING,
    compute_confidence,
    compute_mode_stats,
    no_history_result,
    rank_modes,
)
from learnsense.core.engine.schemas import MODALITIES, Modality, ModePerformance
from factories import activity, quiz_result


def _rank(activities, quiz_results=(), subject="math"):
    history = fold_history(activities, quiz_results)
    return rank_modes(history.buckets, history.total_records, subject)


def test_text_learner_end_to_end():
    result = _rank([
        activity("text", quiz_score=90, focus_level=80, reading_time_seconds=200),
        activity("text", quiz_score=85, focus_level=75, reading_time_seconds=200),
        activity("text", quiz_score=95, focus_level=85, reading_time_seconds=200),
    ])

    text = result.per_mode_stats["text"]
    assert result.recommended_mode == Modality.TEXT
    assert result.best_performing_mode == Modality.TEXT
    assert text.avg_score == pytest.approx(90)
    assert text.avg_focus == pytest.approx(80)
    assert text.avg_engagement == pytest.approx(min(100, 600 / 3 / 10))
    assert text.weighted_score == pytest.approx(66)
    assert result.confidence == pytest.approx(0.33 + 0.36 + 0.132)
    assert result.confidence > 0.3
    assert result.reasoning == (
        "Based on 3 learning sessions in math, text learning shows the best results "
        "with an average score of 90% and focus level of 80%. "
        "You spent an average of 200 seconds reading, showing strong engagement."
    )
    assert not result.is_default


def test_weighted_pick_can_differ_from_best_score():
    # Audio has the better score, visual wins on focus and engagement
    result = _rank([
        activity("audio", quiz_score=80, focus_level=20, playback_count=0),
        activity("visual", quiz_score=70, focus_level=95),
    ])

    assert result.recommended_mode == Modality.VISUAL
    assert result.best_performing_mode == Modality.AUDIO


def test_audio_reasoning_mentions_playbacks():
    result = _rank([activity("audio", quiz_score=88, focus_level=70, playback_count=4)], subject=None)

    assert result.recommended_mode == Modality.AUDIO
    assert result.reasoning.startswith("Based on 1 learning session, audio learning")
    assert "You played audio content 4 times" in result.reasoning


def test_ties_resolve_in_modality_order():
    result = _rank([
        activity("text", quiz_score=70, focus_level=70, reading_time_seconds=700),
        activity("audio", quiz_score=70, focus_level=70, playback_count=70 / 20),
    ])

    assert result.recommended_mode == Modality.AUDIO
    assert result.best_performing_mode == Modality.AUDIO


def test_all_zero_history_falls_back_to_visual():
    result = _rank([activity("text"), activity("audio")])

    assert result.recommended_mode == Modality.VISUAL
    assert result.best_performing_mode == Modality.VISUAL


def test_quiz_only_history_still_ranks():
    result = _rank([], [quiz_result("audio", 92), quiz_result("text", 55)])

    assert result.recommended_mode == Modality.AUDIO
    assert result.per_mode_stats["audio"].avg_focus == 85


def test_confidence_is_capped():
    assert compute_confidence(10_000, 10_000, 100) == 0.95
    assert compute_confidence(0, 0, 0) == pytest.approx(0.6)
    assert compute_confidence(0, 0, -500) == 0.0


@pytest.mark.parametrize("count", [1, 5, 40, 300])
def test_confidence_stays_in_range(count):
    result = _rank([activity("visual", quiz_score=100, focus_level=100) for _ in range(count)])
    assert 0.0 <= result.confidence <= 0.95


def test_ranking_is_pure():
    buckets = fold_history([
        activity("text", quiz_score=61, focus_level=44, reading_time_seconds=120),
        activity("visual", quiz_score=73, focus_level=58),
    ]).buckets

    assert rank_modes(buckets, 2, "math") == rank_modes(buckets, 2, "math")


def test_empty_bucket_stats_are_zero():
    stats = compute_mode_stats(ModePerformance())
    assert stats.session_count == 0
    assert stats.weighted_score == 0


def test_empty_buckets_rank_to_visual():
    result = rank_modes(empty_buckets(), 0)
    assert result.recommended_mode in MODALITIES
    assert result.recommended_mode == Modality.VISUAL


def test_no_history_result():
    result = no_history_result()

    assert result.recommended_mode == Modality.VISUAL
    assert result.best_performing_mode == Modality.VISUAL
    assert result.confidence == 0.3
    assert result.reasoning == NO_HISTORY_REASONING
    assert result.is_default
    assert set(result.per_mode_stats) == {"visual", "audio", "text"}
