"""Services for scheduling logic."""

from .constraints import can_cover, count_overtime_violations, count_understaffed_shifts, is_staff_available
from .requirements import compute_staffing_needs, recommended_staff
from .scoring import calculate_schedule_efficiency, calculate_staff_utilization
from .timeplan import TIME_SLOTS, calculate_shift_hours, parse_time_string

__all__ = [
    "can_cover",
    "count_overtime_violations",
    "count_understaffed_shifts",
    "is_staff_available",
    "compute_staffing_needs",
    "recommended_staff",
    "calculate_schedule_efficiency",
    "calculate_staff_utilization",
    "TIME_SLOTS",
    "calculate_shift_hours",
    "parse_time_string",
]
