from pydantic import BaseModel
from typing import Optional
from datetime import date, time
from fleet_admin.models.shift import Weekday
from fleet_admin.models.shift_assignment import AssignmentStatus


class AssignmentCreate(BaseModel):
    shift_id: int
    driver_id: int
    start_date: date
    end_date: Optional[date] = None
    notes: Optional[str] = None


class AssignByScheduleRequest(BaseModel):
    driver_id: int
    route_id: int
    start_date: date
    start_time: time
    notes: Optional[str] = None


class AssignmentUpdate(BaseModel):
    driver_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None


class AssignmentFinishRequest(BaseModel):
    end_date: Optional[date] = None


class AssignmentResponse(BaseModel):
    id: int
    shift_id: int
    driver_id: int
    driver_name: Optional[str] = None
    route_id: Optional[int] = None
    route_name: Optional[str] = None
    weekday: Optional[Weekday] = None
    week_number: Optional[int] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    start_date: date
    end_date: Optional[date] = None
    status: AssignmentStatus
    notes: Optional[str] = None
