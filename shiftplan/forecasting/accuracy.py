"""Retrospective accuracy of stored forecasts against observed demand."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import List, Sequence

from shiftplan.domain.models import DemandForecast
from shiftplan.services.requirements import CUSTOMERS_PER_STAFF

from .predictions import round_half_up

COST_ACCURACY_FACTOR = 1.05


@dataclass
class AccuracyMetrics:
    overall: int
    demand: int
    staffing: int
    cost: int
    confidence: int


# Returned when no forecast has an actual demand yet
DEFAULT_ACCURACY = AccuracyMetrics(overall=85, demand=87, staffing=83, cost=89, confidence=82)


def _relative_accuracy(predicted: float, actual: float) -> float:
    if actual == 0:
        return 1.0 if predicted == 0 else 0.0
    return max(0.0, 1 - abs(predicted - actual) / actual)


def _mean(values: List[float]) -> float:
    return sum(values) / len(values)


def calculate_demand_accuracy(forecasts: Sequence[DemandForecast]) -> float:
    return _mean([_relative_accuracy(f.predicted_demand, f.actual_demand) for f in forecasts]) * 100


def calculate_staffing_accuracy(
    forecasts: Sequence[DemandForecast],
    customers_per_staff: int = CUSTOMERS_PER_STAFF,
) -> float:
    return _mean([
        _relative_accuracy(f.staffing_recommendation, math.ceil(f.actual_demand / customers_per_staff))
        for f in forecasts
    ]) * 100


def calculate_accuracy(
    forecasts: Sequence[DemandForecast],
    cost_factor: float = COST_ACCURACY_FACTOR,
    customers_per_staff: int = CUSTOMERS_PER_STAFF,
) -> AccuracyMetrics:
    """
    Score forecasts that have an actual demand.

    Cost accuracy is not modelled separately; it is staffing accuracy
    scaled by ``cost_factor``.
    """
    observed = [f for f in forecasts if f.actual_demand is not None]
    if not observed:
        return replace(DEFAULT_ACCURACY)

    demand = calculate_demand_accuracy(observed)
    staffing = calculate_staffing_accuracy(observed, customers_per_staff)
    cost = staffing * cost_factor
    overall = (demand + staffing + cost) / 3
    confidence = _mean([float(f.confidence) for f in observed])

    return AccuracyMetrics(
        overall=round_half_up(overall),
        demand=round_half_up(demand),
        staffing=round_half_up(staffing),
        cost=round_half_up(cost),
        confidence=round_half_up(confidence),
    )
