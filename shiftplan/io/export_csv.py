"""CSV export utilities."""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd
from sqlalchemy.orm import Session

from shiftplan.domain.models import Shift
from shiftplan.domain.repositories import ShiftRepository, StaffRepository
from shiftplan.forecasting.predictions import PredictionData

SHIFT_COLUMNS = ["id", "staff_id", "date", "start_time", "end_time", "position", "status", "notes"]
STAFF_COLUMNS = ["id", "name", "position", "hourly_rate", "email", "phone", "availability", "skills", "is_active"]


def write_shifts_csv(shifts: Sequence[Shift], csv_path: str | Path) -> int:
    """Write shifts (stored or not yet persisted) to CSV. Returns number of rows."""
    df = pd.DataFrame(
        [{col: getattr(s, col) for col in SHIFT_COLUMNS} for s in shifts],
        columns=SHIFT_COLUMNS,
    )
    df.to_csv(csv_path, index=False)

    print(f"[INFO] Exported {len(df)} shifts to {csv_path}")
    return len(df)


def export_shifts_csv(
    session: Session,
    csv_path: str | Path,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> int:
    """
    Export stored shifts to CSV, optionally bounded by start and/or end (inclusive).

    Returns:
        Number of shifts exported
    """
    shifts = ShiftRepository.get_all(session)
    if start is not None:
        shifts = [s for s in shifts if s.date >= start]
    if end is not None:
        shifts = [s for s in shifts if s.date <= end]

    return write_shifts_csv(shifts, csv_path)


def export_staff_csv(session: Session, csv_path: str | Path, include_inactive: bool = True) -> int:
    """
    Export the staff directory in the same layout import_staff_csv reads.

    Returns:
        Number of staff members exported
    """
    staff = StaffRepository.get_all(session, include_inactive=include_inactive)

    rows = []
    for member in staff:
        rows.append({
            "id": member.id,
            "name": member.name,
            "position": member.position,
            "hourly_rate": float(member.hourly_rate),
            "email": member.email,
            "phone": member.phone,
            "availability": json.dumps(member.availability) if member.availability is not None else "",
            "skills": ";".join(member.skills or []),
            "is_active": bool(member.is_active),
        })
    df = pd.DataFrame(rows, columns=STAFF_COLUMNS)
    df.to_csv(csv_path, index=False)

    print(f"[INFO] Exported {len(df)} staff members to {csv_path}")
    return len(df)


def export_predictions_csv(predictions: Sequence[PredictionData], csv_path: str | Path) -> int:
    """Write predictions to CSV. Returns number of rows."""
    df = pd.DataFrame([asdict(p) for p in predictions], columns=list(PredictionData.__dataclass_fields__))
    df.to_csv(csv_path, index=False)

    print(f"[INFO] Exported {len(df)} predictions to {csv_path}")
    return len(df)
