"""Shift generation engine."""

from .coverage import MissingShift, find_coverage
from .generator import (
    DaySchedule,
    OptimizationResult,
    generate_day_schedule,
    generate_optimal_schedule,
    optimize_schedule,
)
from .orchestrator import build_schedule, refresh_recommendations

__all__ = [
    "MissingShift",
    "find_coverage",
    "DaySchedule",
    "OptimizationResult",
    "generate_day_schedule",
    "generate_optimal_schedule",
    "optimize_schedule",
    "build_schedule",
    "refresh_recommendations",
]
