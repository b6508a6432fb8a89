"""Command-line interface for the restaurant shift planner."""

from __future__ import annotations

import argparse
from datetime import date
from typing import Callable

from sqlalchemy.orm import Session

from shiftplan.config import HORIZONS, SchedulerConfig, load_config
from shiftplan.domain.db import get_session, init_database
from shiftplan.domain.repositories import (
    ForecastRepository,
    RecommendationRepository,
    ShiftRepository,
    StaffRepository,
)
from shiftplan.engine.coverage import MissingShift, find_coverage
from shiftplan.engine.orchestrator import build_schedule, refresh_recommendations
from shiftplan.forecasting.accuracy import calculate_accuracy
from shiftplan.forecasting.predictions import generate_predictions
from shiftplan.io.export_csv import export_predictions_csv, export_shifts_csv, export_staff_csv, write_shifts_csv
from shiftplan.io.import_csv import import_forecasts_csv, import_staff_csv
from shiftplan.services.metrics import compute_dashboard_metrics
from shiftplan.validator import summarize_shifts


def _date_arg(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected YYYY-MM-DD, got {value!r}")


def _with_session(args: argparse.Namespace, action: Callable[[Session, SchedulerConfig], None]) -> None:
    """Run ``action`` with a session; roll back and re-raise on failure."""
    cfg = load_config(args.config)
    session = get_session(args.db or cfg.db_url)
    try:
        action(session, cfg)
    except Exception as e:
        session.rollback()
        print(f"[ERROR] {args.command} failed: {e}")
        raise
    finally:
        session.close()


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the database."""
    cfg = load_config(args.config)
    db_url = args.db or cfg.db_url
    init_database(db_url)
    print(f"[OK] Database initialized: {db_url}")


def _cmd_import_csv(args: argparse.Namespace) -> None:
    """Import CSV data into database."""
    def action(session: Session, cfg: SchedulerConfig) -> None:
        if args.staff:
            count = import_staff_csv(session, args.staff)
            print(f"[OK] Imported {count} staff members")
        if args.forecasts:
            count = import_forecasts_csv(session, args.forecasts, cfg.forecasting.customers_per_staff)
            print(f"[OK] Imported {count} forecasts")

    _with_session(args, action)


def _cmd_generate(args: argparse.Namespace) -> None:
    """Generate shifts for a date range."""
    if args.end < args.start:
        raise SystemExit(f"End date {args.end} is before start date {args.start}")

    def action(session: Session, cfg: SchedulerConfig) -> None:
        result = build_schedule(session, args.start, args.end, cfg, persist=not args.dry_run)
        print(summarize_shifts(result.shifts))
        for note in result.recommendations:
            print(f"[INFO] {note}")
        if args.out:
            write_shifts_csv(result.shifts, args.out)

    _with_session(args, action)


def _cmd_predict(args: argparse.Namespace) -> None:
    """Predict demand from stored forecasts."""
    def action(session: Session, cfg: SchedulerConfig) -> None:
        horizon = args.horizon or cfg.forecasting.default_horizon
        forecasts = ForecastRepository.get_all(session)
        if not forecasts:
            print("[WARN] No historical forecasts; using baseline weekday demand")
        predictions = generate_predictions(
            forecasts,
            horizon,
            today=args.today,
            customers_per_staff=cfg.forecasting.customers_per_staff,
        )
        for p in predictions:
            print(
                f"{p.day} {p.label:>6}  demand {p.predicted_demand:>4}  "
                f"confidence {p.confidence:>2}%  staff {p.recommended_staff}"
            )
        if args.out:
            export_predictions_csv(predictions, args.out)
        if args.store:
            recs = refresh_recommendations(session, cfg, today=args.today)
            print(f"[OK] Stored {len(recs)} recommendations")

    _with_session(args, action)


def _cmd_accuracy(args: argparse.Namespace) -> None:
    """Score stored forecasts against actual demand."""
    def action(session: Session, cfg: SchedulerConfig) -> None:
        metrics = calculate_accuracy(
            ForecastRepository.get_all(session),
            cost_factor=cfg.forecasting.cost_accuracy_factor,
            customers_per_staff=cfg.forecasting.customers_per_staff,
        )
        print(
            f"overall {metrics.overall}%  demand {metrics.demand}%  staffing {metrics.staffing}%  "
            f"cost {metrics.cost}%  confidence {metrics.confidence}%"
        )

    _with_session(args, action)


def _cmd_coverage(args: argparse.Namespace) -> None:
    """List staff who could cover a shift, cheapest first."""
    def action(session: Session, cfg: SchedulerConfig) -> None:
        missing = MissingShift(args.date, args.start_time, args.end_time, args.position)
        candidates = find_coverage(missing, StaffRepository.get_all(session))
        if not candidates:
            print(f"[WARN] Nobody available to cover {args.position} on {args.date}")
        for member in candidates:
            print(f"{member.id:>4}  {member.name:<30} {float(member.hourly_rate):>7.2f}")

    _with_session(args, action)


def _cmd_metrics(args: argparse.Namespace) -> None:
    """Show dashboard figures for one day."""
    def action(session: Session, cfg: SchedulerConfig) -> None:
        day = args.date or date.today()
        metrics = compute_dashboard_metrics(
            StaffRepository.get_all(session),
            ShiftRepository.get_all(session, shift_date=day),
            cfg.constraints,
        )
        print(f"Active staff:        {metrics.active_staff}")
        print(f"Avg shift length:    {metrics.avg_shift_length:.1f}h")
        print(f"Labor cost savings:  {metrics.labor_cost_savings}")
        print(f"Schedule efficiency: {metrics.schedule_efficiency:.1f}")

    _with_session(args, action)


def _cmd_deactivate(args: argparse.Namespace) -> None:
    """Soft-delete a staff member."""
    def action(session: Session, cfg: SchedulerConfig) -> None:
        if not StaffRepository.deactivate(session, args.id):
            raise SystemExit(f"Staff member {args.id} not found")
        print(f"[OK] Staff member {args.id} deactivated")

    _with_session(args, action)


def _cmd_recommendations(args: argparse.Namespace) -> None:
    """List stored recommendations, optionally marking one read."""
    def action(session: Session, cfg: SchedulerConfig) -> None:
        if args.mark_read is not None:
            if RecommendationRepository.mark_read(session, args.mark_read) is None:
                raise SystemExit(f"Recommendation {args.mark_read} not found")
            print(f"[OK] Recommendation {args.mark_read} marked read")
            return
        recs = RecommendationRepository.get_all(session, is_read=False if args.unread else None)
        for rec in recs:
            flag = " " if rec.is_read else "*"
            print(f"{flag}{rec.id:>4} [{rec.priority:<6}] {rec.title}: {rec.description}")

    _with_session(args, action)


def _cmd_export(args: argparse.Namespace) -> None:
    """Export data from database to CSV."""
    def action(session: Session, cfg: SchedulerConfig) -> None:
        if args.shifts:
            count = export_shifts_csv(session, args.shifts, args.start, args.end)
            print(f"[OK] Exported {count} shifts to {args.shifts}")
        if args.staff:
            count = export_staff_csv(session, args.staff)
            print(f"[OK] Exported {count} staff members to {args.staff}")

    _with_session(args, action)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="shiftplan",
        description="Demand-driven restaurant shift planning",
    )

    # Global options
    parser.add_argument("--db", help="Database URL (default: from config, else sqlite:///shiftplan.db)")
    parser.add_argument("--config", help="Path to config YAML/JSON (optional)")

    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init-db", help="Initialize database")
    init.set_defaults(func=_cmd_init_db)

    imp = sub.add_parser("import-csv", help="Import CSV data into database")
    imp.add_argument("--staff", help="Path to staff CSV")
    imp.add_argument("--forecasts", help="Path to forecasts CSV")
    imp.set_defaults(func=_cmd_import_csv)

    gen = sub.add_parser("generate", help="Generate shifts for a date range")
    gen.add_argument("--start", required=True, type=_date_arg, help="First date (YYYY-MM-DD)")
    gen.add_argument("--end", required=True, type=_date_arg, help="Last date (YYYY-MM-DD)")
    gen.add_argument("--out", help="Optional: export shifts to CSV")
    gen.add_argument("--dry-run", action="store_true", help="Do not persist generated shifts")
    gen.set_defaults(func=_cmd_generate)

    pred = sub.add_parser("predict", help="Predict demand for the coming days")
    pred.add_argument("--horizon", choices=sorted(HORIZONS), help="Prediction horizon")
    pred.add_argument("--today", type=_date_arg, help="First predicted day (default: today)")
    pred.add_argument("--out", help="Optional: export predictions to CSV")
    pred.add_argument("--store", action="store_true", help="Store generated recommendations")
    pred.set_defaults(func=_cmd_predict)

    acc = sub.add_parser("accuracy", help="Score forecasts against actual demand")
    acc.set_defaults(func=_cmd_accuracy)

    cov = sub.add_parser("coverage", help="Find staff to cover a shift")
    cov.add_argument("--date", required=True, type=_date_arg)
    cov.add_argument("--start-time", required=True, help="HH:MM")
    cov.add_argument("--end-time", required=True, help="HH:MM")
    cov.add_argument("--position", required=True)
    cov.set_defaults(func=_cmd_coverage)

    met = sub.add_parser("metrics", help="Dashboard figures for a day")
    met.add_argument("--date", type=_date_arg, help="Day to summarize (default: today)")
    met.set_defaults(func=_cmd_metrics)

    deact = sub.add_parser("deactivate-staff", help="Soft-delete a staff member")
    deact.add_argument("--id", required=True, type=int)
    deact.set_defaults(func=_cmd_deactivate)

    recs = sub.add_parser("recommendations", help="List stored recommendations")
    recs.add_argument("--unread", action="store_true", help="Only unread recommendations")
    recs.add_argument("--mark-read", type=int, metavar="ID", help="Mark a recommendation read")
    recs.set_defaults(func=_cmd_recommendations)

    exp = sub.add_parser("export", help="Export data from database to CSV")
    exp.add_argument("--shifts", help="Path to export shifts CSV")
    exp.add_argument("--staff", help="Path to export staff CSV")
    exp.add_argument("--start", type=_date_arg, help="First shift date (optional)")
    exp.add_argument("--end", type=_date_arg, help="Last shift date (optional)")
    exp.set_defaults(func=_cmd_export)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
