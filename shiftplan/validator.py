from __future__ import annotations

from typing import Sequence

import pandas as pd

from shiftplan.domain.models import Shift, StaffMember
from shiftplan.services.constraints import is_staff_available
from shiftplan.services.timeplan import calculate_shift_hours


def validate_shifts(shifts: Sequence[Shift], staff: Sequence[StaffMember]) -> None:
    """Raise ValueError on the first shift that no roster member can legitimately hold."""
    by_id = {member.id: member for member in staff}

    for shift in shifts:
        member = by_id.get(shift.staff_id)
        if member is None:
            raise ValueError(f"Shift on {shift.date} references unknown staff id {shift.staff_id}")
        if not member.is_active:
            raise ValueError(f"Shift on {shift.date} assigned to inactive staff member {member.name}")
        if member.position != shift.position:
            raise ValueError(
                f"Shift on {shift.date} is for {shift.position} but {member.name} is a {member.position}"
            )
        if not is_staff_available(member, shift.date, shift.start_time, shift.end_time):
            raise ValueError(
                f"{member.name} is not available on {shift.date} {shift.start_time}-{shift.end_time}"
            )


def shifts_frame(shifts: Sequence[Shift]) -> pd.DataFrame:
    rows = [
        {
            "staff_id": s.staff_id,
            "date": s.date,
            "start_time": s.start_time,
            "end_time": s.end_time,
            "position": s.position,
            "status": s.status,
            "hours": calculate_shift_hours(s.start_time, s.end_time),
        }
        for s in shifts
    ]
    return pd.DataFrame(rows, columns=["staff_id", "date", "start_time", "end_time", "position", "status", "hours"])


def summarize_shifts(shifts: Sequence[Shift]) -> str:
    if not shifts:
        return "No shifts."
    df = shifts_frame(shifts)

    coverage = df.groupby(["date", "start_time", "position"]).size().unstack(fill_value=0)
    hours = df.groupby("staff_id")["hours"].sum().sort_values(ascending=False)

    lines = ["Headcount per date/slot per position:"]
    lines.append(coverage.to_string())
    lines.append("")
    lines.append("Hours per staff member:")
    lines.append(hours.to_string())
    return "\n".join(lines)
