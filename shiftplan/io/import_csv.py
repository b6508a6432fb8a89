"""CSV import utilities to load data into database."""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
from sqlalchemy.orm import Session

from shiftplan.domain.models import TIME_SLOTS, DemandForecast, StaffMember
from shiftplan.services.requirements import CUSTOMERS_PER_STAFF, recommended_staff

TRUE_VALUES = ["TRUE", "T", "1", "YES", "Y"]


def _parse_bool(value, default: bool = True) -> bool:
    if pd.isna(value):
        return default
    return str(value).strip().upper() in TRUE_VALUES


def _parse_availability(value):
    """JSON object string -> dict; blank means available at any time."""
    if pd.isna(value) or not str(value).strip():
        return None
    parsed = json.loads(str(value))
    if not isinstance(parsed, dict):
        raise ValueError(f"Availability must be a JSON object, got: {value}")
    return {str(day).lower(): windows for day, windows in parsed.items()}


def _parse_skills(value) -> list[str]:
    if pd.isna(value):
        return []
    return [s.strip() for s in str(value).split(";") if s.strip()]


def import_staff_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import staff members from CSV into database.

    Expected columns: name, position, hourly_rate, email and optionally
    phone, availability (JSON object string), skills (";"-separated),
    is_active.

    Args:
        session: Database session
        csv_path: Path to staff CSV

    Returns:
        Number of staff members imported
    """
    df = pd.read_csv(csv_path)

    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()

    staff = []
    for _, row in df.iterrows():
        member = StaffMember(
            name=str(row["name"]).strip(),
            position=str(row["position"]).strip(),
            hourly_rate=float(row["hourly_rate"]),
            email=str(row["email"]).strip(),
            phone=str(row["phone"]) if pd.notna(row.get("phone")) else None,
            availability=_parse_availability(row.get("availability")),
            skills=_parse_skills(row.get("skills")),
            is_active=_parse_bool(row.get("is_active")),
        )
        staff.append(member)

    session.add_all(staff)
    session.commit()

    print(f"[INFO] Imported {len(staff)} staff members from {csv_path}")
    return len(staff)


def import_forecasts_csv(
    session: Session,
    csv_path: str | Path,
    customers_per_staff: int = CUSTOMERS_PER_STAFF,
) -> int:
    """
    Import demand forecasts from CSV into database.

    Expected columns: date, time_slot, predicted_demand, confidence and
    optionally actual_demand, staffing_recommendation (derived from
    predicted demand when blank).

    Args:
        session: Database session
        csv_path: Path to forecasts CSV
        customers_per_staff: Used to derive missing staffing recommendations

    Returns:
        Number of forecasts imported
    """
    df = pd.read_csv(csv_path)

    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()
    df["date"] = pd.to_datetime(df["date"]).dt.date
    df["time_slot"] = df["time_slot"].str.lower().str.strip()

    unknown = set(df["time_slot"]) - set(TIME_SLOTS)
    if unknown:
        raise ValueError(f"Unknown time slots in {csv_path}: {sorted(unknown)}")

    forecasts = []
    for _, row in df.iterrows():
        predicted = int(row["predicted_demand"])
        staffing = row.get("staffing_recommendation")
        forecast = DemandForecast(
            date=row["date"],
            time_slot=row["time_slot"],
            predicted_demand=predicted,
            actual_demand=int(row["actual_demand"]) if pd.notna(row.get("actual_demand")) else None,
            staffing_recommendation=(
                int(staffing) if pd.notna(staffing) else recommended_staff(predicted, customers_per_staff)
            ),
            confidence=float(row["confidence"]),
        )
        forecasts.append(forecast)

    session.add_all(forecasts)
    session.commit()

    print(f"[INFO] Imported {len(forecasts)} forecasts from {csv_path}")
    return len(forecasts)
