"""Demand-driven shift generation.

Each day is filled slot by slot (morning, afternoon, evening). For every
position the slot needs, the first matching staff members in roster order
are assigned; shortfalls are reported as advisory violation strings rather
than raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Sequence

from shiftplan.config import DEFAULT_CONSTRAINTS, ScheduleConstraints
from shiftplan.domain.models import DemandForecast, Shift, StaffMember
from shiftplan.domain.repositories import AUTO_GENERATED_PREFIX
from shiftplan.services.constraints import can_cover
from shiftplan.services.requirements import compute_staffing_needs
from shiftplan.services.scoring import calculate_schedule_efficiency
from shiftplan.services.timeplan import TIME_SLOTS, calculate_shift_hours

# Efficiency gap (points) above which optimize_schedule suggests a rebuild
IMPROVEMENT_THRESHOLD = 5.0


@dataclass
class DaySchedule:
    shifts: List[Shift] = field(default_factory=list)
    violations: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    total_cost: float = 0.0
    optimized_cost: float = 0.0


@dataclass
class OptimizationResult:
    shifts: List[Shift]
    efficiency: float
    cost_savings: float
    violations: List[str]
    recommendations: List[str]
    total_cost: float = 0.0
    optimized_cost: float = 0.0


def group_forecasts_by_date(forecasts: Sequence[DemandForecast]) -> Dict[date, Dict[str, DemandForecast]]:
    """date -> {time_slot: forecast}, dates in first-seen order. Later duplicates win."""
    by_date: Dict[date, Dict[str, DemandForecast]] = {}
    for forecast in forecasts:
        by_date.setdefault(forecast.date, {})[forecast.time_slot] = forecast
    return by_date


def generate_day_schedule(
    shift_date: date,
    forecasts: Dict[str, DemandForecast],
    staff: Sequence[StaffMember],
    constraints: ScheduleConstraints = DEFAULT_CONSTRAINTS,
) -> DaySchedule:
    """
    Build shifts for one date.

    Args:
        shift_date: Date being scheduled
        forecasts: time_slot -> forecast for this date (missing slots are skipped)
        staff: Full roster, in the order candidates should be picked
        constraints: Scheduling constraints

    Returns:
        DaySchedule with shifts (not persisted), violations and cost totals
    """
    day = DaySchedule()

    for slot in TIME_SLOTS:
        forecast = forecasts.get(slot.name)
        if forecast is None:
            continue

        needs = compute_staffing_needs(forecast.predicted_demand, slot.name)
        hours = calculate_shift_hours(slot.start, slot.end)

        for position, needed in needs.items():
            candidates = [
                member for member in staff
                if can_cover(member, position, shift_date, slot.start, slot.end)
            ]
            assigned = candidates[:needed]

            if len(assigned) < needed:
                day.violations.append(
                    f"Insufficient {position} staff for {slot.name} on {shift_date}: "
                    f"need {needed}, have {len(assigned)}"
                )

            for member in assigned:
                day.shifts.append(
                    Shift(
                        staff_id=member.id,
                        date=shift_date,
                        start_time=slot.start,
                        end_time=slot.end,
                        position=member.position,
                        status="scheduled",
                        notes=f"{AUTO_GENERATED_PREFIX} for {forecast.predicted_demand} predicted demand",
                    )
                )
                cost = hours * float(member.hourly_rate)
                day.total_cost += cost
                day.optimized_cost += cost * constraints.optimized_cost_factor

    return day


def generate_optimal_schedule(
    staff: Sequence[StaffMember],
    forecasts: Sequence[DemandForecast],
    constraints: ScheduleConstraints = DEFAULT_CONSTRAINTS,
) -> OptimizationResult:
    """
    Generate a schedule for every date that has forecasts.

    Returns:
        OptimizationResult with concatenated shifts and violations, the
        efficiency score and the raw minus optimized cost as savings
    """
    shifts: List[Shift] = []
    violations: List[str] = []
    recommendations: List[str] = []
    total_cost = 0.0
    optimized_cost = 0.0

    for shift_date, day_forecasts in group_forecasts_by_date(forecasts).items():
        day = generate_day_schedule(shift_date, day_forecasts, staff, constraints)
        shifts.extend(day.shifts)
        violations.extend(day.violations)
        recommendations.extend(day.recommendations)
        total_cost += day.total_cost
        optimized_cost += day.optimized_cost

    return OptimizationResult(
        shifts=shifts,
        efficiency=calculate_schedule_efficiency(shifts, staff, constraints),
        cost_savings=total_cost - optimized_cost,
        violations=violations,
        recommendations=recommendations,
        total_cost=total_cost,
        optimized_cost=optimized_cost,
    )


def optimize_schedule(
    existing_shifts: Sequence[Shift],
    staff: Sequence[StaffMember],
    forecasts: Sequence[DemandForecast],
    constraints: ScheduleConstraints = DEFAULT_CONSTRAINTS,
) -> OptimizationResult:
    """Regenerate and note how much more efficient the new schedule is."""
    optimal = generate_optimal_schedule(staff, forecasts, constraints)

    existing_efficiency = calculate_schedule_efficiency(existing_shifts, staff, constraints)
    improvement = optimal.efficiency - existing_efficiency

    if improvement > IMPROVEMENT_THRESHOLD:
        optimal.recommendations.append(f"Schedule can be improved by {improvement:.1f}% efficiency")

    return optimal
