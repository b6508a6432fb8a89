"""Schedule efficiency scoring."""

from __future__ import annotations

from typing import Sequence

from shiftplan.config import DEFAULT_CONSTRAINTS, ScheduleConstraints
from shiftplan.domain.models import Shift, StaffMember

from .constraints import count_overtime_violations, count_understaffed_shifts
from .timeplan import calculate_shift_hours

# Hours per staff member assumed available in a week
WEEKLY_CAPACITY_HOURS = 40.0
TARGET_UTILIZATION = 0.7
UTILIZATION_PENALTY = 50.0
OVERTIME_PENALTY = 5.0
UNDERSTAFFED_PENALTY = 10.0


def calculate_staff_utilization(shifts: Sequence[Shift], staff: Sequence[StaffMember]) -> float:
    """
    Scheduled hours as a fraction of roster capacity (staff × 40h).

    Returns 0.0 for an empty roster.
    """
    capacity = len(staff) * WEEKLY_CAPACITY_HOURS
    if capacity == 0:
        return 0.0
    scheduled = sum(calculate_shift_hours(s.start_time, s.end_time) for s in shifts)
    return scheduled / capacity


def calculate_schedule_efficiency(
    shifts: Sequence[Shift],
    staff: Sequence[StaffMember],
    constraints: ScheduleConstraints = DEFAULT_CONSTRAINTS,
) -> float:
    """
    Score a schedule from 0 to 100.

    Starts at 100 and subtracts:
    - (0.7 - utilization) × 50 when utilization is below 0.7
    - 5 per staff member over the overtime threshold
    - 10 per (date, start_time) group below the minimum headcount

    An empty schedule scores 0.
    """
    if not shifts:
        return 0.0

    score = 100.0

    utilization = calculate_staff_utilization(shifts, staff)
    if utilization < TARGET_UTILIZATION:
        score -= (TARGET_UTILIZATION - utilization) * UTILIZATION_PENALTY

    score -= count_overtime_violations(shifts, constraints.overtime_threshold) * OVERTIME_PENALTY
    score -= count_understaffed_shifts(shifts, constraints.min_staff_per_shift) * UNDERSTAFFED_PENALTY

    return max(0.0, min(100.0, score))
