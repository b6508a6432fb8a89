"""Tests for CSV import/export functionality."""

from datetime import date

import pandas as pd
import pytest

from shiftplan.domain.models import Shift, StaffMember
from shiftplan.domain.repositories import ForecastRepository, ShiftRepository, StaffRepository
from shiftplan.forecasting.predictions import generate_predictions
from shiftplan.io.export_csv import export_predictions_csv, export_shifts_csv, export_staff_csv, write_shifts_csv
from shiftplan.io.import_csv import import_forecasts_csv, import_staff_csv

MONDAY = date(2025, 9, 1)


def test_import_staff_csv(db_session, tmp_path):
    """Test importing staff from CSV."""
    csv_content = """name,position,hourly_rate,email,phone,availability,skills,is_active
Emma Chen,Server,15.50,emma@example.com,555-0101,"{""Monday"": [{""start"": ""09:00"", ""end"": ""17:00"", ""available"": true}]}",wine;pos,TRUE
Noah Patel,Line Cook,18.00,noah@example.com,,,grill,
Ava Brooks,Host,14.00,ava@example.com,,,,no
"""
    csv_file = tmp_path / "staff.csv"
    csv_file.write_text(csv_content)

    count = import_staff_csv(db_session, csv_file)
    assert count == 3

    # Inactive rows are imported but hidden by default
    assert len(StaffRepository.get_all(db_session)) == 2
    staff = StaffRepository.get_all(db_session, include_inactive=True)
    assert len(staff) == 3

    emma = staff[0]
    assert emma.position == "Server"
    assert float(emma.hourly_rate) == 15.5
    assert emma.skills == ["wine", "pos"]
    # Weekday keys are lower-cased
    assert emma.availability == {"monday": [{"start": "09:00", "end": "17:00", "available": True}]}
    assert emma.is_active is True

    noah = staff[1]
    assert noah.availability is None
    assert noah.phone is None
    assert noah.skills == ["grill"]
    assert noah.is_active is True

    assert staff[2].is_active is False


def test_import_staff_rejects_non_object_availability(db_session, tmp_path):
    csv_file = tmp_path / "staff.csv"
    csv_file.write_text('name,position,hourly_rate,email,availability\nEmma,Server,15,emma@example.com,"[1, 2]"\n')

    with pytest.raises(ValueError):
        import_staff_csv(db_session, csv_file)


def test_import_forecasts_csv(db_session, tmp_path):
    """Test importing forecasts from CSV."""
    csv_content = """date,time_slot,predicted_demand,actual_demand,staffing_recommendation,confidence
2025-09-01,Morning,45,50,3,85
2025-09-01,evening,65,,,80.5
"""
    csv_file = tmp_path / "forecasts.csv"
    csv_file.write_text(csv_content)

    count = import_forecasts_csv(db_session, csv_file)
    assert count == 2

    forecasts = ForecastRepository.get_all(db_session)
    morning, evening = forecasts
    assert morning.date == MONDAY
    assert morning.time_slot == "morning"
    assert morning.actual_demand == 50
    assert morning.staffing_recommendation == 3

    # Blank staffing recommendation is derived: ceil(65 / 15)
    assert evening.staffing_recommendation == 5
    assert evening.actual_demand is None
    assert float(evening.confidence) == 80.5


def test_import_forecasts_custom_ratio(db_session, tmp_path):
    csv_file = tmp_path / "forecasts.csv"
    csv_file.write_text("date,time_slot,predicted_demand,confidence\n2025-09-01,afternoon,40,70\n")

    import_forecasts_csv(db_session, csv_file, customers_per_staff=10)
    assert ForecastRepository.get_all(db_session)[0].staffing_recommendation == 4


def test_import_forecasts_unknown_slot(db_session, tmp_path):
    csv_file = tmp_path / "forecasts.csv"
    csv_file.write_text("date,time_slot,predicted_demand,confidence\n2025-09-01,brunch,40,70\n")

    with pytest.raises(ValueError, match="brunch"):
        import_forecasts_csv(db_session, csv_file)
    assert ForecastRepository.get_all(db_session) == []


def test_export_staff_csv_roundtrip(db_session, tmp_path):
    """Exported staff can be imported into a fresh database unchanged."""
    StaffRepository.bulk_create(db_session, [
        StaffMember(name="Emma Chen", position="Server", hourly_rate=15.5, email="emma@example.com",
                    availability={"friday": [{"start": "15:00", "end": "23:00", "available": True}]},
                    skills=["wine"]),
        StaffMember(name="Ava Brooks", position="Host", hourly_rate=14, email="ava@example.com", is_active=False),
    ])

    csv_file = tmp_path / "staff_export.csv"
    count = export_staff_csv(db_session, csv_file)
    assert count == 2

    df = pd.read_csv(csv_file)
    assert list(df["email"]) == ["emma@example.com", "ava@example.com"]
    assert list(df["is_active"]) == [True, False]

    # Re-import into a clean table
    for member in StaffRepository.get_all(db_session, include_inactive=True):
        db_session.delete(member)
    db_session.commit()

    assert import_staff_csv(db_session, csv_file) == 2
    emma, ava = StaffRepository.get_all(db_session, include_inactive=True)
    assert emma.availability == {"friday": [{"start": "15:00", "end": "23:00", "available": True}]}
    assert emma.skills == ["wine"]
    assert ava.is_active is False


def test_export_staff_keeps_empty_availability(db_session, tmp_path):
    """An empty map stays empty through export and import; it is not "always available"."""
    StaffRepository.create(
        db_session,
        StaffMember(name="Emma Chen", position="Server", hourly_rate=15, email="emma@example.com", availability={}),
    )
    csv_file = tmp_path / "staff_export.csv"
    export_staff_csv(db_session, csv_file)

    for member in StaffRepository.get_all(db_session, include_inactive=True):
        db_session.delete(member)
    db_session.commit()

    import_staff_csv(db_session, csv_file)
    assert StaffRepository.get_all(db_session)[0].availability == {}


def test_export_staff_active_only(db_session, tmp_path):
    StaffRepository.bulk_create(db_session, [
        StaffMember(name="Emma Chen", position="Server", hourly_rate=15, email="emma@example.com"),
        StaffMember(name="Ava Brooks", position="Host", hourly_rate=14, email="ava@example.com", is_active=False),
    ])

    assert export_staff_csv(db_session, tmp_path / "active.csv", include_inactive=False) == 1


def test_export_shifts_csv(db_session, tmp_path):
    """Test exporting shifts to CSV, with and without a date range."""
    emma = StaffRepository.create(
        db_session, StaffMember(name="Emma Chen", position="Server", hourly_rate=15, email="emma@example.com")
    )
    ShiftRepository.bulk_create(db_session, [
        Shift(staff_id=emma.id, date=MONDAY, start_time="09:00", end_time="15:00", position="Server"),
        Shift(staff_id=emma.id, date=date(2025, 9, 3), start_time="21:00", end_time="02:00", position="Server",
              status="confirmed"),
    ])

    csv_file = tmp_path / "shifts.csv"
    assert export_shifts_csv(db_session, csv_file) == 2

    df = pd.read_csv(csv_file, dtype={"start_time": str, "end_time": str})
    assert list(df.columns) == ["id", "staff_id", "date", "start_time", "end_time", "position", "status", "notes"]
    assert list(df["date"]) == ["2025-09-01", "2025-09-03"]
    assert list(df["end_time"]) == ["15:00", "02:00"]
    assert list(df["status"]) == ["scheduled", "confirmed"]

    assert export_shifts_csv(db_session, tmp_path / "monday.csv", MONDAY, MONDAY) == 1


def test_export_shifts_csv_single_bound(db_session, tmp_path):
    """A lone start or end still limits the export."""
    emma = StaffRepository.create(
        db_session, StaffMember(name="Emma Chen", position="Server", hourly_rate=15, email="emma@example.com")
    )
    ShiftRepository.bulk_create(db_session, [
        Shift(staff_id=emma.id, date=MONDAY, start_time="09:00", end_time="15:00", position="Server"),
        Shift(staff_id=emma.id, date=date(2025, 9, 3), start_time="09:00", end_time="15:00", position="Server"),
        Shift(staff_id=emma.id, date=date(2025, 9, 5), start_time="09:00", end_time="15:00", position="Server"),
    ])

    after = tmp_path / "after.csv"
    assert export_shifts_csv(db_session, after, start=date(2025, 9, 3)) == 2
    assert list(pd.read_csv(after)["date"]) == ["2025-09-03", "2025-09-05"]

    before = tmp_path / "before.csv"
    assert export_shifts_csv(db_session, before, end=date(2025, 9, 3)) == 2
    assert list(pd.read_csv(before)["date"]) == ["2025-09-01", "2025-09-03"]


def test_write_shifts_csv_unsaved(tmp_path):
    shifts = [Shift(staff_id=1, date=MONDAY, start_time="09:00", end_time="15:00", position="Server",
                    status="scheduled")]
    csv_file = tmp_path / "draft.csv"

    assert write_shifts_csv(shifts, csv_file) == 1
    df = pd.read_csv(csv_file)
    assert df["id"].isna().all()
    assert df.iloc[0]["staff_id"] == 1


def test_export_shifts_empty(db_session, tmp_path):
    csv_file = tmp_path / "shifts.csv"
    assert export_shifts_csv(db_session, csv_file) == 0
    assert list(pd.read_csv(csv_file).columns)[:2] == ["id", "staff_id"]


def test_export_predictions_csv(tmp_path):
    predictions = generate_predictions([], "7days", today=MONDAY)

    csv_file = tmp_path / "predictions.csv"
    assert export_predictions_csv(predictions, csv_file) == 7

    df = pd.read_csv(csv_file)
    assert list(df.columns) == ["date", "day", "label", "predicted_demand", "confidence", "recommended_staff"]
    assert df.iloc[0]["day"] == "Mon"
    assert df.iloc[4]["predicted_demand"] == 151
