from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from fleet_admin.database import get_db
from fleet_admin.models import User
from fleet_admin.routers.deps import get_admin_user, get_current_user, http_error
from fleet_admin.schemas.shift import (
    ShiftCreate, ShiftUpdate, ShiftResponse, ShiftGenerationRequest, WeekCopyRequest, MIN_WEEK, MAX_WEEK
)
from fleet_admin.services.shift_service import ShiftService

router = APIRouter(prefix="/api/shifts", tags=["Shifts"])


@router.get("", response_model=List[ShiftResponse])
def list_shifts(
    route_id: Optional[int] = None,
    week_number: Optional[int] = Query(None, ge=MIN_WEEK, le=MAX_WEEK),
    on_date: Optional[date] = Query(None, description="Reference date for the assigned driver (default today)"),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user)
):
    service = ShiftService(db)
    try:
        if route_id is not None and week_number is not None:
            shifts = service.list_shifts_by_route_and_week(route_id, week_number)
        elif route_id is not None:
            shifts = service.list_shifts_by_route(route_id)
        else:
            shifts = service.list_shifts()
            if week_number is not None:
                shifts = [s for s in shifts if s.week_number == week_number]
    except ValueError as e:
        raise http_error(e)
    return service.to_responses(shifts, on_date)


@router.post("/generate", response_model=List[ShiftResponse], status_code=201)
def generate_shifts(
    payload: ShiftGenerationRequest,
    db: Session = Depends(get_db),
    _: User = Depends(get_admin_user)
):
    """Split a daily operating window into shifts for each weekday of a week."""
    service = ShiftService(db)
    try:
        shifts = service.generate_week(
            payload.route_id,
            payload.start_time,
            payload.end_time,
            payload.week_number,
            payload.weekdays
        )
    except ValueError as e:
        raise http_error(e)
    return service.to_responses(shifts)


@router.post("/copy-week", response_model=List[ShiftResponse], status_code=201)
def copy_week(payload: WeekCopyRequest, db: Session = Depends(get_db), _: User = Depends(get_admin_user)):
    """Clone a route's shifts from one week into another."""
    service = ShiftService(db)
    try:
        shifts = service.copy_week(payload.route_id, payload.source_week, payload.target_week)
    except ValueError as e:
        raise http_error(e)
    return service.to_responses(shifts)


@router.get("/{shift_id}", response_model=ShiftResponse)
def get_shift(
    shift_id: int,
    on_date: Optional[date] = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user)
):
    service = ShiftService(db)
    try:
        shift = service.get_shift(shift_id)
    except ValueError as e:
        raise http_error(e)
    return service.to_responses([shift], on_date)[0]


@router.post("", response_model=ShiftResponse, status_code=201)
def create_shift(payload: ShiftCreate, db: Session = Depends(get_db), _: User = Depends(get_admin_user)):
    service = ShiftService(db)
    try:
        shift = service.create_shift(payload)
    except ValueError as e:
        raise http_error(e)
    return service.to_responses([shift])[0]


@router.put("/{shift_id}", response_model=ShiftResponse)
def update_shift(
    shift_id: int,
    payload: ShiftUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(get_admin_user)
):
    service = ShiftService(db)
    try:
        shift = service.update_shift(shift_id, payload)
    except ValueError as e:
        raise http_error(e)
    return service.to_responses([shift])[0]


@router.delete("/{shift_id}")
def delete_shift(shift_id: int, db: Session = Depends(get_db), _: User = Depends(get_admin_user)):
    try:
        ShiftService(db).delete_shift(shift_id)
    except ValueError as e:
        raise http_error(e)
    return {"message": "Shift deleted successfully", "success": True}
