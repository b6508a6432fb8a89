"""Dashboard summary figures for a roster and a day's shifts."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from shiftplan.config import DEFAULT_CONSTRAINTS, ScheduleConstraints
from shiftplan.domain.models import Shift, StaffMember

from .scoring import calculate_schedule_efficiency
from .timeplan import calculate_shift_hours

# Share of labour cost assumed saved by demand-driven scheduling
LABOR_SAVINGS_RATE = 0.12


@dataclass
class DashboardMetrics:
    active_staff: int
    avg_shift_length: float
    labor_cost_savings: int
    schedule_efficiency: float


def compute_dashboard_metrics(
    staff: Sequence[StaffMember],
    shifts: Sequence[Shift],
    constraints: ScheduleConstraints = DEFAULT_CONSTRAINTS,
) -> DashboardMetrics:
    """
    Summarize a roster and a set of shifts (typically today's).

    Mean hourly rate is taken over active staff and treated as 0 for an
    empty roster.
    """
    active = [member for member in staff if member.is_active]
    total_hours = sum(calculate_shift_hours(s.start_time, s.end_time) for s in shifts)
    avg_shift = total_hours / len(shifts) if shifts else 0.0
    avg_rate = sum(float(m.hourly_rate) for m in active) / len(active) if active else 0.0

    return DashboardMetrics(
        active_staff=len(active),
        avg_shift_length=round(avg_shift, 1),
        labor_cost_savings=math.floor(total_hours * avg_rate * LABOR_SAVINGS_RATE),
        schedule_efficiency=round(calculate_schedule_efficiency(shifts, active, constraints), 1),
    )
