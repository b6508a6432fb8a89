"""Repository classes for data access."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from shiftplan.services.requirements import recommended_staff

from .models import PRIORITIES, SHIFT_STATUSES, AiRecommendation, DemandForecast, ScheduleTemplate, Shift, StaffMember

AUTO_GENERATED_PREFIX = "Auto-generated"


class StaffRepository:
    """Repository for staff directory access."""

    @staticmethod
    def get_all(session: Session, include_inactive: bool = False) -> List[StaffMember]:
        """Get staff in insertion order; deactivated members only on request."""
        query = session.query(StaffMember)
        if not include_inactive:
            query = query.filter(StaffMember.is_active.is_(True))
        return query.order_by(StaffMember.id).all()

    @staticmethod
    def get_by_id(session: Session, staff_id: int) -> Optional[StaffMember]:
        """Get staff member by ID (active or not)."""
        return session.query(StaffMember).filter(StaffMember.id == staff_id).first()

    @staticmethod
    def get_by_position(session: Session, position: str) -> List[StaffMember]:
        """Get active staff holding a position."""
        return (
            session.query(StaffMember)
            .filter(StaffMember.position == position, StaffMember.is_active.is_(True))
            .order_by(StaffMember.id)
            .all()
        )

    @staticmethod
    def create(session: Session, staff: StaffMember) -> StaffMember:
        """Create a new staff member."""
        session.add(staff)
        session.commit()
        session.refresh(staff)
        return staff

    @staticmethod
    def update(session: Session, staff_id: int, **changes) -> Optional[StaffMember]:
        """Apply field changes to a staff member. Returns None if not found."""
        staff = StaffRepository.get_by_id(session, staff_id)
        if staff is None:
            return None
        for key, value in changes.items():
            if key not in StaffMember.__table__.columns.keys() or key in ("id", "created_at"):
                raise ValueError(f"Unknown or read-only staff field: {key}")
            setattr(staff, key, value)
        session.commit()
        session.refresh(staff)
        return staff

    @staticmethod
    def deactivate(session: Session, staff_id: int) -> bool:
        """Soft-delete a staff member. Returns False if not found."""
        staff = StaffRepository.get_by_id(session, staff_id)
        if staff is None:
            return False
        staff.deactivate()
        session.commit()
        return True

    @staticmethod
    def bulk_create(session: Session, staff: List[StaffMember]) -> None:
        """Create multiple staff members."""
        session.add_all(staff)
        session.commit()


class ShiftRepository:
    """Repository for shift data access."""

    @staticmethod
    def get_all(
        session: Session,
        shift_date: Optional[date] = None,
        staff_id: Optional[int] = None,
    ) -> List[Shift]:
        """Get shifts, optionally filtered by date and/or staff member."""
        query = session.query(Shift)
        if shift_date is not None:
            query = query.filter(Shift.date == shift_date)
        if staff_id is not None:
            query = query.filter(Shift.staff_id == staff_id)
        return query.order_by(Shift.date, Shift.start_time, Shift.id).all()

    @staticmethod
    def get_range(session: Session, start: date, end: date) -> List[Shift]:
        """Get shifts with start <= date <= end."""
        return (
            session.query(Shift)
            .filter(Shift.date >= start, Shift.date <= end)
            .order_by(Shift.date, Shift.start_time, Shift.id)
            .all()
        )

    @staticmethod
    def get_by_id(session: Session, shift_id: int) -> Optional[Shift]:
        """Get shift by ID."""
        return session.query(Shift).filter(Shift.id == shift_id).first()

    @staticmethod
    def create(session: Session, shift: Shift) -> Shift:
        """Create a new shift."""
        session.add(shift)
        session.commit()
        session.refresh(shift)
        return shift

    @staticmethod
    def update(session: Session, shift_id: int, **changes) -> Optional[Shift]:
        """Apply field changes to a shift. Returns None if not found."""
        shift = ShiftRepository.get_by_id(session, shift_id)
        if shift is None:
            return None
        for key, value in changes.items():
            if key not in Shift.__table__.columns.keys() or key in ("id", "created_at"):
                raise ValueError(f"Unknown or read-only shift field: {key}")
            if key == "status" and value not in SHIFT_STATUSES:
                raise ValueError(f"Unknown shift status: {value}")
            setattr(shift, key, value)
        session.commit()
        session.refresh(shift)
        return shift

    @staticmethod
    def delete(session: Session, shift_id: int) -> bool:
        """Delete a shift. Returns False if not found."""
        shift = ShiftRepository.get_by_id(session, shift_id)
        if shift is None:
            return False
        session.delete(shift)
        session.commit()
        return True

    @staticmethod
    def bulk_create(session: Session, shifts: List[Shift]) -> None:
        """Create multiple shifts."""
        session.add_all(shifts)
        session.commit()

    @staticmethod
    def delete_generated_in_range(session: Session, start: date, end: date) -> int:
        """
        Delete auto-generated shifts that are still only ``scheduled``.

        Confirmed, completed, cancelled and manually entered shifts are kept.
        Returns number of deleted rows.
        """
        count = (
            session.query(Shift)
            .filter(
                Shift.date >= start,
                Shift.date <= end,
                Shift.status == "scheduled",
                Shift.notes.like(f"{AUTO_GENERATED_PREFIX}%"),
            )
            .delete(synchronize_session="fetch")
        )
        session.commit()
        return count


class ForecastRepository:
    """Repository for demand forecast access."""

    @staticmethod
    def get_all(session: Session) -> List[DemandForecast]:
        """Get all forecasts ordered by date."""
        return session.query(DemandForecast).order_by(DemandForecast.date, DemandForecast.id).all()

    @staticmethod
    def get_range(session: Session, start: date, end: date) -> List[DemandForecast]:
        """Get forecasts with start <= date <= end."""
        return (
            session.query(DemandForecast)
            .filter(DemandForecast.date >= start, DemandForecast.date <= end)
            .order_by(DemandForecast.date, DemandForecast.id)
            .all()
        )

    @staticmethod
    def get_by_id(session: Session, forecast_id: int) -> Optional[DemandForecast]:
        return session.query(DemandForecast).filter(DemandForecast.id == forecast_id).first()

    @staticmethod
    def create(session: Session, forecast: DemandForecast, customers_per_staff: int = 15) -> DemandForecast:
        """Create a forecast, deriving the staffing recommendation if missing."""
        if forecast.staffing_recommendation is None:
            forecast.staffing_recommendation = recommended_staff(forecast.predicted_demand, customers_per_staff)
        session.add(forecast)
        session.commit()
        session.refresh(forecast)
        return forecast

    @staticmethod
    def update_actual_demand(session: Session, forecast_id: int, actual_demand: int) -> Optional[DemandForecast]:
        """Record the observed demand. Returns None if not found."""
        forecast = ForecastRepository.get_by_id(session, forecast_id)
        if forecast is None:
            return None
        forecast.actual_demand = actual_demand
        session.commit()
        session.refresh(forecast)
        return forecast

    @staticmethod
    def bulk_create(session: Session, forecasts: List[DemandForecast], customers_per_staff: int = 15) -> None:
        """Create multiple forecasts."""
        for forecast in forecasts:
            if forecast.staffing_recommendation is None:
                forecast.staffing_recommendation = recommended_staff(forecast.predicted_demand, customers_per_staff)
        session.add_all(forecasts)
        session.commit()


class TemplateRepository:
    """Repository for schedule templates."""

    @staticmethod
    def get_all(session: Session) -> List[ScheduleTemplate]:
        return session.query(ScheduleTemplate).order_by(ScheduleTemplate.id).all()

    @staticmethod
    def get_default(session: Session) -> Optional[ScheduleTemplate]:
        """Get the template flagged as default, if any."""
        return (
            session.query(ScheduleTemplate)
            .filter(ScheduleTemplate.is_default.is_(True))
            .order_by(ScheduleTemplate.id)
            .first()
        )

    @staticmethod
    def create(session: Session, template: ScheduleTemplate) -> ScheduleTemplate:
        session.add(template)
        session.commit()
        session.refresh(template)
        return template


class RecommendationRepository:
    """Repository for generated recommendations."""

    @staticmethod
    def get_all(session: Session, is_read: Optional[bool] = None) -> List[AiRecommendation]:
        """Get recommendations, newest first, optionally filtered by read flag."""
        query = session.query(AiRecommendation)
        if is_read is not None:
            query = query.filter(AiRecommendation.is_read.is_(is_read))
        return query.order_by(AiRecommendation.created_at.desc(), AiRecommendation.id.desc()).all()

    @staticmethod
    def create(session: Session, recommendation: AiRecommendation) -> AiRecommendation:
        if recommendation.priority not in PRIORITIES:
            raise ValueError(f"Unknown priority: {recommendation.priority}")
        session.add(recommendation)
        session.commit()
        session.refresh(recommendation)
        return recommendation

    @staticmethod
    def bulk_create(session: Session, recommendations: List[AiRecommendation]) -> None:
        """Create multiple recommendations; nothing is stored if any priority is unknown."""
        for recommendation in recommendations:
            if recommendation.priority not in PRIORITIES:
                raise ValueError(f"Unknown priority: {recommendation.priority}")
        session.add_all(recommendations)
        session.commit()

    @staticmethod
    def mark_read(session: Session, recommendation_id: int) -> Optional[AiRecommendation]:
        """Flip the read flag. Returns None if not found."""
        rec = session.query(AiRecommendation).filter(AiRecommendation.id == recommendation_id).first()
        if rec is None:
            return None
        rec.mark_read()
        session.commit()
        session.refresh(rec)
        return rec
