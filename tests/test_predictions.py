"""Tests for demand prediction, accuracy scoring and recommendations."""

from datetime import date, timedelta

import pytest

from shiftplan.domain.models import DemandForecast
from shiftplan.forecasting.accuracy import DEFAULT_ACCURACY, AccuracyMetrics, calculate_accuracy
from shiftplan.forecasting.predictions import (
    PredictionData,
    calculate_linear_trend,
    calculate_prediction_confidence,
    generate_predictions,
    get_historical_pattern,
    get_seasonal_adjustment,
    get_trend_adjustment,
    horizon_days,
    is_near_holiday,
    round_half_up,
)
from shiftplan.forecasting.recommendations import get_recommendations

MONDAY = date(2025, 9, 1)


def _forecast(day, demand, actual=None, staffing=0, confidence=85, slot="morning"):
    return DemandForecast(
        date=day,
        time_slot=slot,
        predicted_demand=demand,
        actual_demand=actual,
        staffing_recommendation=staffing,
        confidence=confidence,
    )


def _prediction(day_label, demand, confidence):
    return PredictionData(
        date=MONDAY,
        day=day_label,
        label="Sep 1",
        predicted_demand=demand,
        confidence=confidence,
        recommended_staff=0,
    )


def test_round_half_up():
    assert round_half_up(70.5) == 71
    assert round_half_up(64.5) == 65
    assert round_half_up(42.4) == 42


def test_horizon_days():
    assert horizon_days("7days") == 7
    assert horizon_days("14days") == 14
    assert horizon_days("30days") == 30
    assert horizon_days("next-quarter") == 30


def test_generate_predictions_seven_days_from_today():
    predictions = generate_predictions([], "7days")

    assert len(predictions) == 7
    today = date.today()
    assert [p.date for p in predictions] == [today + timedelta(days=i) for i in range(7)]
    for p in predictions:
        assert 60 <= p.confidence <= 95


@pytest.mark.parametrize("horizon,expected", [("14days", 14), ("30days", 30)])
def test_generate_predictions_horizons(horizon, expected):
    assert len(generate_predictions([], horizon, today=MONDAY)) == expected


def test_generate_predictions_baseline_week():
    """With no history, demand comes from the weekday baseline × seasonal factors."""
    predictions = generate_predictions([], "7days", today=MONDAY)

    assert [p.day for p in predictions] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    assert predictions[0].label == "Sep 1"
    assert [p.predicted_demand for p in predictions] == [43, 47, 68, 89, 151, 139, 69]
    # 90 - 0.15×20 - 30×0.5 - 1.5×i
    assert [p.confidence for p in predictions] == [72, 71, 69, 68, 66, 65, 63]
    assert predictions[4].recommended_staff == 11  # ceil(151 / 15)


def test_generate_predictions_uses_history():
    history = [_forecast(MONDAY - timedelta(days=7 * k), 80) for k in range(1, 4)]
    predictions = generate_predictions(history, "7days", today=MONDAY)

    # Monday: 80 × 1.05 (September) × 0.9 (Monday), no trend with < 7 records
    assert predictions[0].predicted_demand == 76


def test_confidence_clamped():
    assert calculate_prediction_confidence(variance=50.0, data_points=0, days_ahead=29) == 60
    assert calculate_prediction_confidence(variance=0.0, data_points=100, days_ahead=0) == 90
    for i in range(30):
        assert 60 <= calculate_prediction_confidence(0.0, 1000, i) <= 95


def test_historical_pattern():
    history = [_forecast(MONDAY, 80), _forecast(MONDAY + timedelta(days=7), 120), _forecast(MONDAY + timedelta(days=1), 10)]
    average, variance = get_historical_pattern(history, 0)
    assert average == pytest.approx(100.0)
    assert variance == pytest.approx(400.0 / 100.0)


def test_historical_pattern_fallback():
    assert get_historical_pattern([], 6) == (60.0, 0.15)  # Sunday
    assert get_historical_pattern([], 5) == (110.0, 0.15)  # Saturday


def test_historical_pattern_zero_mean():
    assert get_historical_pattern([_forecast(MONDAY, 0)], 0) == (0.0, 0.0)


def test_seasonal_adjustment():
    assert get_seasonal_adjustment(date(2025, 9, 3)) == pytest.approx(1.05)  # Wednesday
    assert get_seasonal_adjustment(date(2025, 9, 5)) == pytest.approx(1.05 * 1.2)  # Friday
    assert get_seasonal_adjustment(date(2025, 9, 7)) == pytest.approx(1.05 * 1.1)  # Sunday
    assert get_seasonal_adjustment(date(2025, 9, 1)) == pytest.approx(1.05 * 0.9)  # Monday
    # Christmas Eve 2025 is a Wednesday in December
    assert get_seasonal_adjustment(date(2025, 12, 24)) == pytest.approx(0.90 * 1.3)


def test_is_near_holiday():
    assert is_near_holiday(date(2025, 12, 22))
    assert is_near_holiday(date(2025, 1, 4))
    assert is_near_holiday(date(2025, 7, 1))
    assert not is_near_holiday(date(2025, 12, 29))
    assert not is_near_holiday(date(2025, 9, 15))


def test_linear_trend():
    assert calculate_linear_trend([100, 100, 100]) == 0.0
    assert calculate_linear_trend([100, 110, 120]) == pytest.approx(10 / 110)
    assert calculate_linear_trend([0, 0, 0]) == 0.0
    assert calculate_linear_trend([5]) == 0.0


def test_trend_requires_seven_records():
    history = [_forecast(MONDAY + timedelta(days=i), 100 + 50 * i) for i in range(6)]
    assert get_trend_adjustment(history, 0) == 1.0


def test_trend_uses_most_recent_first():
    # Most recent first: 160, 150, ..., 100 -> slope -10 over mean 130
    history = [_forecast(MONDAY + timedelta(days=i), 100 + 10 * i) for i in range(7)]

    assert get_trend_adjustment(history, 0) == pytest.approx(1 - 10 / 130)
    assert get_trend_adjustment(history, 4) == pytest.approx(1 - (10 / 130) * 0.8)


def test_trend_clamped():
    history = [_forecast(MONDAY + timedelta(days=i), 1) for i in range(6)]
    history.append(_forecast(MONDAY + timedelta(days=6), 500))
    assert get_trend_adjustment(history, 0) == pytest.approx(0.7)


def test_trend_does_not_reorder_input():
    history = [_forecast(MONDAY + timedelta(days=i), 100 + i) for i in range(8)]
    before = [f.date for f in history]
    get_trend_adjustment(history, 0)
    assert [f.date for f in history] == before


def test_calculate_accuracy_defaults():
    """Without actual demand the fixed defaults are returned."""
    assert calculate_accuracy([]) == AccuracyMetrics(overall=85, demand=87, staffing=83, cost=89, confidence=82)
    assert calculate_accuracy([_forecast(MONDAY, 100)]) == DEFAULT_ACCURACY


def test_calculate_accuracy_defaults_are_not_shared():
    metrics = calculate_accuracy([])
    metrics.overall = 0
    assert calculate_accuracy([]).overall == 85


def test_calculate_accuracy():
    forecasts = [
        _forecast(MONDAY, 90, actual=100, staffing=6, confidence=80),
        _forecast(MONDAY, 50),  # no actual, ignored
    ]
    metrics = calculate_accuracy(forecasts)

    assert metrics.demand == 90
    assert metrics.staffing == 86  # 1 - |6 - 7| / 7
    assert metrics.cost == 90  # staffing × 1.05
    assert metrics.overall == 89
    assert metrics.confidence == 80


def test_calculate_accuracy_floors_at_zero():
    metrics = calculate_accuracy([_forecast(MONDAY, 300, actual=100, staffing=20, confidence=70)])
    assert metrics.demand == 0
    assert metrics.staffing == 0
    assert metrics.cost == 0


def test_calculate_accuracy_zero_actual():
    metrics = calculate_accuracy([_forecast(MONDAY, 0, actual=0, staffing=0, confidence=90)])
    assert metrics.demand == 100
    assert metrics.staffing == 100


def test_recommendations_from_baseline_week():
    predictions = generate_predictions([], "7days", today=MONDAY)
    titles = [r.title for r in get_recommendations(predictions)]
    assert titles == ["Peak Demand Alert", "Cost Optimization Opportunity", "Prediction Uncertainty"]


def test_recommendation_details():
    predictions = [
        _prediction("Fri", 120, 92),
        _prediction("Sat", 130, 93),
        _prediction("Sun", 90, 94),
        _prediction("Mon", 40, 95),
    ]
    recs = get_recommendations(predictions)
    by_title = {r.title: r for r in recs}

    peak = by_title["Peak Demand Alert"]
    assert peak.description.startswith("High demand expected on Fri, Sat.")
    assert (peak.priority, peak.impact, peak.category) == ("high", 15, "staffing")

    cost = by_title["Cost Optimization Opportunity"]
    assert "Mon" in cost.description
    assert (cost.priority, cost.impact, cost.category) == ("medium", 8, "cost")

    auto = by_title["Schedule Optimization"]
    assert (auto.priority, auto.impact, auto.category) == ("low", 12, "optimization")

    weekend = by_title["Weekend Staffing Strategy"]
    assert (weekend.priority, weekend.impact, weekend.category) == ("medium", 10, "staffing")

    assert "Prediction Uncertainty" not in by_title


def test_weekend_rule_needs_every_weekend_day_busy():
    predictions = [_prediction("Sat", 120, 80), _prediction("Sun", 70, 80)]
    titles = [r.title for r in get_recommendations(predictions)]
    assert "Weekend Staffing Strategy" not in titles


def test_all_rules_fire_at_most_five():
    predictions = [_prediction(d, 120, 92) for d in ("Sat", "Sun", "Mon", "Tue")]
    predictions += [_prediction(d, 40, 70) for d in ("Wed", "Thu", "Fri")]
    recs = get_recommendations(predictions)
    assert len(recs) == 5


def test_no_predictions_no_recommendations():
    assert get_recommendations([]) == []


def test_recommendation_to_model():
    rec = get_recommendations([_prediction("Fri", 150, 80)])[0]
    row = rec.to_model()
    assert row.type == "staffing"
    assert row.priority == "high"
    assert row.is_read is False
    assert row.data == {"impact": 15, "category": "staffing"}
