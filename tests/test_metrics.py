"""Tests for dashboard metrics."""

from datetime import date

import pytest

from shiftplan.domain.models import Shift, StaffMember
from shiftplan.services.metrics import compute_dashboard_metrics

MONDAY = date(2025, 9, 1)


def _shift(staff_id, start, end):
    return Shift(staff_id=staff_id, date=MONDAY, start_time=start, end_time=end, position="Server")


def test_dashboard_metrics():
    staff = [
        StaffMember(id=1, name="Emma", position="Server", hourly_rate=15.0, email="e@example.com"),
        StaffMember(id=2, name="Liam", position="Server", hourly_rate=20.0, email="l@example.com"),
        StaffMember(id=3, name="Ava", position="Host", hourly_rate=50.0, email="a@example.com", is_active=False),
    ]
    shifts = [_shift(1, "09:00", "15:00"), _shift(2, "09:00", "15:00"), _shift(1, "22:00", "02:00")]

    metrics = compute_dashboard_metrics(staff, shifts)

    assert metrics.active_staff == 2
    # (6 + 6 + 4) / 3, overnight counted as 4h
    assert metrics.avg_shift_length == 5.3
    # floor(16h × 17.50 × 0.12)
    assert metrics.labor_cost_savings == 33
    # 100 - (0.7 - 16/80) × 50 - 2 understaffed groups × 10
    assert metrics.schedule_efficiency == pytest.approx(55.0)


def test_dashboard_metrics_empty():
    metrics = compute_dashboard_metrics([], [])
    assert metrics.active_staff == 0
    assert metrics.avg_shift_length == 0.0
    assert metrics.labor_cost_savings == 0
    assert metrics.schedule_efficiency == 0.0


def test_dashboard_metrics_no_shifts_today():
    staff = [StaffMember(id=1, name="Emma", position="Server", hourly_rate=15.0, email="e@example.com")]
    metrics = compute_dashboard_metrics(staff, [])
    assert metrics.active_staff == 1
    assert metrics.labor_cost_savings == 0
    assert metrics.schedule_efficiency == 0.0
