"""
Demand prediction from historical forecast records.

Each future day is predicted as

    round(weekday_average × seasonal_factor × trend_factor)

where the weekday average comes from past records on the same weekday
(or a fixed baseline when there are none), the seasonal factor combines
month, weekday and holiday multipliers, and the trend factor is a
least-squares slope over the seven most recent records that fades the
further ahead the day is.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from shiftplan.config import HORIZONS
from shiftplan.domain.models import DemandForecast
from shiftplan.services.requirements import CUSTOMERS_PER_STAFF, recommended_staff
from shiftplan.services.timeplan import to_date

# Baseline customers per weekday, Monday first (date.weekday() order)
BASELINE_DEMAND = {0: 45, 1: 50, 2: 65, 3: 85, 4: 120, 5: 110, 6: 60}
BASELINE_VARIANCE = 0.15

# January .. December
MONTH_FACTORS = [0.85, 0.90, 0.95, 1.00, 1.05, 1.10, 1.15, 1.10, 1.05, 1.00, 0.95, 0.90]
WEEKDAY_FACTORS = {0: 0.9, 1: 0.9, 4: 1.2, 5: 1.2, 6: 1.1}
HOLIDAY_FACTOR = 1.3
HOLIDAY_WINDOW_DAYS = 3

# (month, day); Mother's Day and Thanksgiving are approximate
HOLIDAYS = [(1, 1), (2, 14), (5, 9), (7, 4), (11, 24), (12, 25)]

TREND_WINDOW = 7
TREND_DECAY_PER_DAY = 0.05
TREND_BOUNDS = (0.7, 1.3)

CONFIDENCE_BASE = 90.0
CONFIDENCE_BOUNDS = (60, 95)
FULL_HISTORY = 30


@dataclass
class PredictionData:
    date: date
    day: str  # "Mon"
    label: str  # "Oct 18"
    predicted_demand: int
    confidence: int
    recommended_staff: int


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def horizon_days(horizon: str) -> int:
    """Number of days for a horizon label; unknown labels mean 30."""
    if horizon in ("7days", "14days"):
        return HORIZONS[horizon]
    return HORIZONS["30days"]


def get_historical_pattern(forecasts: Sequence[DemandForecast], weekday: int) -> Tuple[float, float]:
    """
    Average predicted demand and relative variance for one weekday.

    Args:
        forecasts: Historical records
        weekday: 0 = Monday .. 6 = Sunday

    Returns:
        (average, population variance / average); the baseline table and
        0.15 when no record falls on that weekday
    """
    demands = [f.predicted_demand for f in forecasts if to_date(f.date).weekday() == weekday]
    if not demands:
        return float(BASELINE_DEMAND[weekday]), BASELINE_VARIANCE

    average = sum(demands) / len(demands)
    if average == 0:
        return 0.0, 0.0
    variance = sum((d - average) ** 2 for d in demands) / len(demands)
    return average, variance / average


def is_near_holiday(day: date) -> bool:
    """Within 3 days of a fixed holiday in the same calendar year."""
    for month, dom in HOLIDAYS:
        holiday = date(day.year, month, dom)
        if abs((day - holiday).days) <= HOLIDAY_WINDOW_DAYS:
            return True
    return False


def get_seasonal_adjustment(day: date) -> float:
    factor = MONTH_FACTORS[day.month - 1]
    factor *= WEEKDAY_FACTORS.get(day.weekday(), 1.0)
    if is_near_holiday(day):
        factor *= HOLIDAY_FACTOR
    return factor


def calculate_linear_trend(values: Sequence[float]) -> float:
    """Least-squares slope over index 0..n-1, divided by the mean."""
    n = len(values)
    if n < 2:
        return 0.0
    sum_x = n * (n - 1) / 2
    sum_y = sum(values)
    sum_xy = sum(i * v for i, v in enumerate(values))
    sum_xx = n * (n - 1) * (2 * n - 1) / 6

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)
    mean = sum_y / n
    if mean == 0:
        return 0.0
    return slope / mean


def get_trend_adjustment(forecasts: Sequence[DemandForecast], days_ahead: int) -> float:
    """Trend multiplier in [0.7, 1.3]; 1.0 with fewer than 7 records."""
    if len(forecasts) < TREND_WINDOW:
        return 1.0

    # sorted() is stable, so same-date records keep their input order
    recent = sorted(forecasts, key=lambda f: to_date(f.date), reverse=True)[:TREND_WINDOW]
    trend = calculate_linear_trend([f.predicted_demand for f in recent])

    effect = trend * (1 - days_ahead * TREND_DECAY_PER_DAY)
    low, high = TREND_BOUNDS
    return max(low, min(high, 1 + effect))


def calculate_prediction_confidence(variance: float, data_points: int, days_ahead: int) -> int:
    confidence = CONFIDENCE_BASE
    confidence -= variance * 20
    if data_points < FULL_HISTORY:
        confidence -= (FULL_HISTORY - data_points) * 0.5
    confidence -= days_ahead * 1.5

    low, high = CONFIDENCE_BOUNDS
    return max(low, min(high, round_half_up(confidence)))


def generate_predictions(
    forecasts: Sequence[DemandForecast],
    horizon: str = "7days",
    today: Optional[date] = None,
    customers_per_staff: int = CUSTOMERS_PER_STAFF,
) -> List[PredictionData]:
    """
    Predict demand for each day of the horizon, starting today.

    Args:
        forecasts: Historical forecast records (predicted demand is used)
        horizon: "7days", "14days" or "30days"
        today: First predicted day (default: date.today())
        customers_per_staff: Customers one staff member can serve

    Returns:
        One PredictionData per consecutive day
    """
    start = today or date.today()
    predictions: List[PredictionData] = []

    for i in range(horizon_days(horizon)):
        day = start + timedelta(days=i)

        average, variance = get_historical_pattern(forecasts, day.weekday())
        seasonal = get_seasonal_adjustment(day)
        trend = get_trend_adjustment(forecasts, i)

        demand = round_half_up(average * seasonal * trend)
        stamp = pd.Timestamp(day)

        predictions.append(
            PredictionData(
                date=day,
                day=stamp.day_name()[:3],
                label=f"{stamp.month_name()[:3]} {day.day}",
                predicted_demand=demand,
                confidence=calculate_prediction_confidence(variance, len(forecasts), i),
                recommended_staff=recommended_staff(demand, customers_per_staff),
            )
        )

    return predictions
