"""SQLAlchemy models for restaurant workforce scheduling."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import DeclarativeBase, relationship


SHIFT_STATUSES = ("scheduled", "confirmed", "completed", "cancelled")
TIME_SLOTS = ("morning", "afternoon", "evening")
PRIORITIES = ("low", "medium", "high")


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class StaffMember(Base):
    """Staff member with position, pay rate and weekly availability."""

    __tablename__ = "staff"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    position = Column(String(50), nullable=False)  # Server, Line Cook, Host, Manager, ...
    hourly_rate = Column(Numeric(8, 2), nullable=False)
    email = Column(String(200), nullable=False, unique=True)
    phone = Column(String(50), nullable=True)

    # {"monday": [{"start": "09:00", "end": "17:00", "available": true}], ...}
    # None means available at any time
    availability = Column(JSON, nullable=True)
    skills = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    shifts = relationship("Shift", back_populates="staff")

    def __init__(self, **kwargs):
        kwargs.setdefault("is_active", True)
        kwargs.setdefault("skills", [])
        super().__init__(**kwargs)

    def deactivate(self) -> None:
        """Soft-delete: the row and any shifts pointing at it are kept."""
        self.is_active = False

    def __repr__(self) -> str:
        return f"<StaffMember(id={self.id}, name='{self.name}', position='{self.position}', active={self.is_active})>"


class Shift(Base):
    """A staff member assigned to a time window on a given date."""

    __tablename__ = "shifts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    staff_id = Column(Integer, ForeignKey("staff.id"), nullable=False)
    date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)  # HH:MM, may be "before" start for overnight slots
    position = Column(String(50), nullable=False)  # Copied from staff at assignment time
    status = Column(String(20), nullable=False, default="scheduled")
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    staff = relationship("StaffMember", back_populates="shifts")

    def __init__(self, **kwargs):
        kwargs.setdefault("status", "scheduled")
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return (
            f"<Shift(id={self.id}, staff={self.staff_id}, date={self.date}, "
            f"{self.start_time}-{self.end_time}, position='{self.position}', status={self.status})>"
        )


class DemandForecast(Base):
    """Predicted (and later actual) customer demand for one date and time slot."""

    __tablename__ = "demand_forecasts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False)
    time_slot = Column(String(20), nullable=False)  # morning, afternoon, evening
    predicted_demand = Column(Integer, nullable=False)
    actual_demand = Column(Integer, nullable=True)  # Filled in after the fact
    staffing_recommendation = Column(Integer, nullable=False)
    confidence = Column(Numeric(5, 2), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return (
            f"<DemandForecast(id={self.id}, date={self.date}, slot={self.time_slot}, "
            f"predicted={self.predicted_demand}, actual={self.actual_demand})>"
        )


class ScheduleTemplate(Base):
    """Named target-staffing pattern per weekday and time slot."""

    __tablename__ = "schedule_templates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    # {"monday": {"morning": [{"position": "Server", "count": 2}], "afternoon": [...], "evening": [...]}}
    template = Column(JSON, nullable=False)
    is_default = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<ScheduleTemplate(id={self.id}, name='{self.name}', default={self.is_default})>"


class AiRecommendation(Base):
    """Generated scheduling insight. Only the read flag changes after creation."""

    __tablename__ = "ai_recommendations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(30), nullable=False)  # staffing, cost, optimization, training
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    priority = Column(String(20), nullable=False, default="medium")
    is_read = Column(Boolean, nullable=False, default=False)
    data = Column(JSON, nullable=False, default=dict)  # {"impact": 15, "category": "staffing"}
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __init__(self, **kwargs):
        kwargs.setdefault("is_read", False)
        kwargs.setdefault("priority", "medium")
        kwargs.setdefault("data", {})
        super().__init__(**kwargs)

    def mark_read(self) -> None:
        self.is_read = True

    def __repr__(self) -> str:
        return f"<AiRecommendation(id={self.id}, type={self.type}, priority={self.priority}, read={self.is_read})>"
