from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from fleet_admin.database import Base
import enum


class DriverStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class Driver(Base):
    __tablename__ = "drivers"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(200), nullable=False, index=True)
    national_id = Column(String(30), unique=True, nullable=False)
    license_number = Column(String(50), nullable=False)
    phone = Column(String(20), nullable=True)
    status = Column(SQLEnum(DriverStatus), nullable=False, default=DriverStatus.ACTIVE)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="driver")
    assignments = relationship("ShiftAssignment", back_populates="driver", cascade="all, delete-orphan")

    @property
    def email(self):
        return self.user.email if self.user else None
