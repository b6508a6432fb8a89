"""Rule-based recommendations from day-level predictions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from shiftplan.domain.models import AiRecommendation

from .predictions import PredictionData

MAX_RECOMMENDATIONS = 5
PEAK_DEMAND = 100
LOW_DEMAND = 50
HIGH_CONFIDENCE = 90
LOW_CONFIDENCE = 75
WEEKEND_DEMAND = 80


@dataclass
class Recommendation:
    title: str
    description: str
    priority: str  # low, medium, high
    impact: int
    category: str  # staffing, cost, optimization, training

    def to_model(self) -> AiRecommendation:
        """Persistable row for this recommendation."""
        return AiRecommendation(
            type=self.category,
            title=self.title,
            description=self.description,
            priority=self.priority,
            data={"impact": self.impact, "category": self.category},
        )


def _days(predictions: Sequence[PredictionData]) -> str:
    return ", ".join(p.day for p in predictions)


def get_recommendations(predictions: Sequence[PredictionData]) -> List[Recommendation]:
    """Apply threshold rules to predictions; at most five results."""
    recommendations: List[Recommendation] = []

    peak_days = [p for p in predictions if p.predicted_demand > PEAK_DEMAND]
    low_days = [p for p in predictions if p.predicted_demand < LOW_DEMAND]
    high_confidence = [p for p in predictions if p.confidence > HIGH_CONFIDENCE]
    low_confidence = [p for p in predictions if p.confidence < LOW_CONFIDENCE]
    weekend = [p for p in predictions if p.day in ("Sat", "Sun")]

    if peak_days:
        recommendations.append(Recommendation(
            title="Peak Demand Alert",
            description=f"High demand expected on {_days(peak_days)}. Consider increasing staff by 20%.",
            priority="high",
            impact=15,
            category="staffing",
        ))

    if low_days:
        recommendations.append(Recommendation(
            title="Cost Optimization Opportunity",
            description=f"Low demand predicted for {_days(low_days)}. Reduce staff to minimize labor costs.",
            priority="medium",
            impact=8,
            category="cost",
        ))

    if len(high_confidence) > 3:
        recommendations.append(Recommendation(
            title="Schedule Optimization",
            description="High prediction confidence for multiple days. "
                        "Implement automated scheduling for maximum efficiency.",
            priority="low",
            impact=12,
            category="optimization",
        ))

    if len(low_confidence) > 2:
        recommendations.append(Recommendation(
            title="Prediction Uncertainty",
            description=f"Lower confidence predictions detected. Consider manual review for {_days(low_confidence)}.",
            priority="medium",
            impact=5,
            category="training",
        ))

    if weekend and all(p.predicted_demand > WEEKEND_DEMAND for p in weekend):
        recommendations.append(Recommendation(
            title="Weekend Staffing Strategy",
            description="Consistent high weekend demand. Consider dedicated weekend staff scheduling.",
            priority="medium",
            impact=10,
            category="staffing",
        ))

    return recommendations[:MAX_RECOMMENDATIONS]
