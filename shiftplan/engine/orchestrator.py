"""Orchestrator - loads roster and forecasts, runs the generator and persists results."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from shiftplan.config import SchedulerConfig
from shiftplan.domain.repositories import (
    ForecastRepository,
    RecommendationRepository,
    ShiftRepository,
    StaffRepository,
)
from shiftplan.forecasting.predictions import generate_predictions
from shiftplan.forecasting.recommendations import Recommendation, get_recommendations
from shiftplan.validator import validate_shifts

from .generator import OptimizationResult, optimize_schedule


def build_schedule(
    session: Session,
    start: date,
    end: date,
    cfg: SchedulerConfig,
    persist: bool = True,
) -> OptimizationResult:
    """
    Build shifts for every forecast date in [start, end].

    The new schedule is compared with the shifts already stored for the
    range. With ``persist``, previously auto-generated shifts that are still
    only ``scheduled`` are replaced by the new ones; other shifts are kept
    and new shifts for a staff member, date and start time they already
    hold are dropped, so ``result.shifts`` is what was stored.

    Args:
        session: Database session
        start: First date (inclusive)
        end: Last date (inclusive)
        cfg: SchedulerConfig
        persist: If True, save shifts to database

    Returns:
        OptimizationResult for the range
    """
    print(f"[INFO] Orchestrator: Building schedule for {start} .. {end}")

    staff = StaffRepository.get_all(session)
    forecasts = ForecastRepository.get_range(session, start, end)
    existing = ShiftRepository.get_range(session, start, end)

    if not staff:
        print("[WARN] No active staff; every slot will be reported as understaffed")
    if not forecasts:
        print(f"[WARN] No forecasts between {start} and {end}; nothing to schedule")

    result = optimize_schedule(existing, staff, forecasts, cfg.constraints)
    validate_shifts(result.shifts, staff)

    for violation in result.violations:
        print(f"[WARN] {violation}")
    print(
        f"[OK] Orchestrator: Generated {len(result.shifts)} shifts, "
        f"efficiency {result.efficiency:.1f}, estimated savings {result.cost_savings:.2f}"
    )

    if persist:
        deleted = ShiftRepository.delete_generated_in_range(session, start, end)
        if deleted > 0:
            print(f"[INFO] Deleted {deleted} previously generated shifts")

        # Confirmed and manual shifts survive the delete; never double-book their slots
        taken = {(s.staff_id, s.date, s.start_time) for s in ShiftRepository.get_range(session, start, end)}
        fresh = [s for s in result.shifts if (s.staff_id, s.date, s.start_time) not in taken]
        if len(fresh) < len(result.shifts):
            print(f"[INFO] Kept {len(result.shifts) - len(fresh)} existing shifts in place of regenerated ones")
        result.shifts = fresh

        ShiftRepository.bulk_create(session, result.shifts)
        print(f"[INFO] Persisted {len(result.shifts)} shifts to database")

    return result


def refresh_recommendations(
    session: Session,
    cfg: SchedulerConfig,
    today: Optional[date] = None,
    persist: bool = True,
) -> List[Recommendation]:
    """Predict the configured horizon from all stored forecasts and store the resulting recommendations."""
    forecasts = ForecastRepository.get_all(session)
    predictions = generate_predictions(
        forecasts,
        cfg.forecasting.default_horizon,
        today=today,
        customers_per_staff=cfg.forecasting.customers_per_staff,
    )
    recommendations = get_recommendations(predictions)

    if persist and recommendations:
        RecommendationRepository.bulk_create(session, [rec.to_model() for rec in recommendations])
        print(f"[INFO] Stored {len(recommendations)} recommendations")

    return recommendations
