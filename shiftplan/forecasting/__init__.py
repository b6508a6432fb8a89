"""Demand prediction, accuracy scoring and recommendations."""

from .accuracy import AccuracyMetrics, calculate_accuracy
from .predictions import PredictionData, generate_predictions
from .recommendations import Recommendation, get_recommendations

__all__ = [
    "AccuracyMetrics",
    "calculate_accuracy",
    "PredictionData",
    "generate_predictions",
    "Recommendation",
    "get_recommendations",
]
