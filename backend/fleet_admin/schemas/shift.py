from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import time
from fleet_admin.models.shift import Weekday, ShiftStatus

MIN_WEEK = 1
MAX_WEEK = 53


class ShiftCreate(BaseModel):
    route_id: int
    weekday: Weekday
    start_time: time
    end_time: time
    week_number: int = Field(..., ge=MIN_WEEK, le=MAX_WEEK)
    status: ShiftStatus = ShiftStatus.ACTIVE


class ShiftUpdate(ShiftCreate):
    status: Optional[ShiftStatus] = None


class ShiftResponse(BaseModel):
    id: int
    route_id: int
    route_name: Optional[str] = None
    weekday: Weekday
    start_time: time
    end_time: time
    duration_hours: int
    week_number: int
    status: ShiftStatus
    has_assignment: bool = False
    assigned_driver: Optional[str] = None

    class Config:
        from_attributes = True


class ShiftGenerationRequest(BaseModel):
    route_id: int
    start_time: time
    end_time: time
    week_number: int = Field(..., ge=MIN_WEEK, le=MAX_WEEK)
    weekdays: Optional[List[Weekday]] = None

    @field_validator('weekdays')
    @classmethod
    def weekdays_not_empty(cls, v):
        if v is not None and len(v) == 0:
            raise ValueError('At least one weekday must be selected')
        return v


class WeekCopyRequest(BaseModel):
    route_id: int
    source_week: int = Field(..., ge=MIN_WEEK, le=MAX_WEEK)
    target_week: int = Field(..., ge=MIN_WEEK, le=MAX_WEEK)
