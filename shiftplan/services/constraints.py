"""Availability and eligibility checks, plus constraint counters for scoring."""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Dict, List, Sequence, Tuple

from shiftplan.domain.models import Shift, StaffMember

from .timeplan import calculate_shift_hours, weekday_name


def is_staff_available(staff: StaffMember, shift_date: date | str, start_hm: str, end_hm: str) -> bool:
    """
    Check a staff member's weekly availability for a time window.

    Args:
        staff: Staff member to check
        shift_date: Date of the shift (weekday is what matters)
        start_hm: Window start "HH:MM"
        end_hm: Window end "HH:MM"

    Returns:
        True when no availability map is set (None), or when one available
        window for that weekday fully contains [start_hm, end_hm]. An empty
        map has no weekdays, so it is never available. Times compare as
        strings, which holds because they all share the zero-padded format.
    """
    if staff.availability is None:
        return True

    day_windows = staff.availability.get(weekday_name(shift_date))
    if not day_windows:
        return False

    return any(
        window.get("available", False)
        and window["start"] <= start_hm
        and window["end"] >= end_hm
        for window in day_windows
    )


def can_cover(staff: StaffMember, position: str, shift_date: date | str, start_hm: str, end_hm: str) -> bool:
    """Active, holds the position, and available for the window."""
    if not staff.is_active:
        return False
    if staff.position != position:
        return False
    return is_staff_available(staff, shift_date, start_hm, end_hm)


def hours_by_staff(shifts: Sequence[Shift]) -> Dict[int, float]:
    """Total scheduled hours per staff id."""
    totals: Dict[int, float] = defaultdict(float)
    for shift in shifts:
        totals[shift.staff_id] += calculate_shift_hours(shift.start_time, shift.end_time)
    return dict(totals)


def count_overtime_violations(shifts: Sequence[Shift], overtime_threshold: float) -> int:
    """Number of staff members whose summed hours exceed the threshold."""
    return sum(1 for hours in hours_by_staff(shifts).values() if hours > overtime_threshold)


def count_understaffed_shifts(shifts: Sequence[Shift], min_staff_per_shift: int) -> int:
    """Number of (date, start_time) groups with fewer heads than the minimum."""
    groups: Dict[Tuple[date, str], List[Shift]] = defaultdict(list)
    for shift in shifts:
        groups[(shift.date, shift.start_time)].append(shift)
    return sum(1 for group in groups.values() if len(group) < min_staff_per_shift)
