"""Find replacement staff for an uncovered shift."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Sequence

from shiftplan.domain.models import StaffMember
from shiftplan.services.constraints import can_cover


@dataclass(frozen=True)
class MissingShift:
    date: date
    start_time: str
    end_time: str
    position: str


def find_coverage(missing_shift: MissingShift, staff: Sequence[StaffMember]) -> List[StaffMember]:
    """
    Staff who could take the shift, cheapest first.

    Ties on hourly rate keep their roster order.
    """
    candidates = [
        member for member in staff
        if can_cover(
            member,
            missing_shift.position,
            missing_shift.date,
            missing_shift.start_time,
            missing_shift.end_time,
        )
    ]
    return sorted(candidates, key=lambda member: float(member.hourly_rate))
