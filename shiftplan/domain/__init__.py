"""Domain models and data access layer."""

from .models import AiRecommendation, Base, DemandForecast, ScheduleTemplate, Shift, StaffMember
from .repositories import (
    ForecastRepository,
    RecommendationRepository,
    ShiftRepository,
    StaffRepository,
    TemplateRepository,
)

__all__ = [
    "StaffMember",
    "Shift",
    "DemandForecast",
    "ScheduleTemplate",
    "AiRecommendation",
    "Base",
    "StaffRepository",
    "ShiftRepository",
    "ForecastRepository",
    "TemplateRepository",
    "RecommendationRepository",
]
