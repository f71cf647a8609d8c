from sqlalchemy import Column, Integer, DateTime, ForeignKey, Time, Enum as SQLEnum, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from fleet_admin.database import Base
import enum


class Weekday(str, enum.Enum):
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"

    @property
    def iso_index(self) -> int:
        """1=Mon, ..., 7=Sun"""
        return list(Weekday).index(self) + 1

    @classmethod
    def from_date(cls, value) -> "Weekday":
        return list(cls)[value.weekday()]


class ShiftStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class Shift(Base):
    __tablename__ = "shifts"

    id = Column(Integer, primary_key=True, index=True)
    route_id = Column(Integer, ForeignKey("routes.id"), nullable=False)
    weekday = Column(SQLEnum(Weekday), nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    duration_hours = Column(Integer, nullable=False)
    week_number = Column(Integer, nullable=False)
    status = Column(SQLEnum(ShiftStatus), nullable=False, default=ShiftStatus.ACTIVE)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    route = relationship("Route", back_populates="shifts")
    assignments = relationship("ShiftAssignment", back_populates="shift", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_shifts_route_week", "route_id", "week_number"),
    )
