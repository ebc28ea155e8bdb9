import pytest

from learnsense.core.engine.ordering import RecentFirst
from learnsense.core.engine.performance_predictor import fallback_prediction, predict_performance


def test_five_scores_have_no_older_window():
    prediction = predict_performance(RecentFirst([90, 85, 88, 82, 80]))

    assert prediction.recent_avg == pytest.approx(85)
    assert prediction.older_avg == pytest.approx(85)
    assert prediction.trend == pytest.approx(0)
    assert prediction.predicted_score == 85
    assert prediction.factors == ["Recent average: 85%", "Trend: stable", "Data points: 5"]


def test_improving_trend_pushes_prediction_up():
    # Newest five average 90, previous five average 70
    prediction = predict_performance(RecentFirst([90] * 5 + [70] * 5))

    assert prediction.trend == pytest.approx(20)
    assert prediction.predicted_score == 100
    assert "Trend: improving" in prediction.factors


def test_declining_trend():
    prediction = predict_performance(RecentFirst([60] * 5 + [80] * 5))

    assert prediction.predicted_score == 50
    assert "Trend: declining" in prediction.factors


def test_prediction_is_clamped_to_valid_range():
    prediction = predict_performance(RecentFirst([100] * 5 + [40] * 5))
    assert prediction.predicted_score == 100


def test_confidence_reflects_spread():
    steady = predict_performance(RecentFirst([80] * 6))
    erratic = predict_performance(RecentFirst([0, 100, 0, 100, 0, 100]))

    assert steady.confidence == pytest.approx(0.9)
    assert erratic.confidence == pytest.approx(0.3)


def test_too_few_scores_fall_back():
    prediction = predict_performance(RecentFirst([90, 80, 70, 60]))

    assert prediction == fallback_prediction()
    assert prediction.predicted_score == 65
    assert prediction.confidence == 0.3
    assert prediction.factors == ["Insufficient historical data"]


def test_bare_list_is_rejected():
    with pytest.raises(TypeError):
        predict_performance([90, 85, 88, 82, 80])
