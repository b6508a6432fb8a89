"""Time-of-day and calendar helpers shared by the generator and forecaster."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import List

import pandas as pd


# Fixed reference day used to turn "HH:MM" strings into comparable datetimes
REFERENCE_DATE = date(2000, 1, 1)


@dataclass(frozen=True)
class TimeSlot:
    name: str
    start: str
    end: str


# Processing order is significant: morning -> afternoon -> evening
TIME_SLOTS: List[TimeSlot] = [
    TimeSlot("morning", "09:00", "15:00"),
    TimeSlot("afternoon", "15:00", "21:00"),
    TimeSlot("evening", "21:00", "02:00"),
]


def parse_time_string(hm: str) -> time:
    """Parse an "HH:MM" string into a ``datetime.time``."""
    hour, minute = [int(x) for x in hm.strip().split(":")]
    return time(hour, minute)


def calculate_shift_hours(start_hm: str, end_hm: str) -> float:
    """
    Hours between two "HH:MM" strings.

    An end time earlier than the start is taken to fall on the next day,
    so ("22:00", "02:00") is a 4 hour overnight shift.
    """
    start_dt = datetime.combine(REFERENCE_DATE, parse_time_string(start_hm))
    end_dt = datetime.combine(REFERENCE_DATE, parse_time_string(end_hm))
    if end_dt < start_dt:
        end_dt += timedelta(days=1)
    return (end_dt - start_dt).total_seconds() / 3600.0


def to_date(value) -> date:
    """Coerce an ISO date string, ``date`` or timestamp into a ``date``."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return pd.Timestamp(value).date()


def weekday_name(value) -> str:
    """Lowercase English weekday name, e.g. "monday"."""
    return pd.Timestamp(to_date(value)).day_name().lower()
