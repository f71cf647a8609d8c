from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from fleet_admin.database import get_db
from fleet_admin.models import User, DriverStatus
from fleet_admin.routers.deps import get_admin_user, get_current_user, http_error
from fleet_admin.schemas.assignment import AssignmentResponse
from fleet_admin.schemas.driver import DriverCreate, DriverUpdate, DriverResponse
from fleet_admin.services.assignment_service import AssignmentService
from fleet_admin.services.driver_service import DriverService

router = APIRouter(prefix="/api/drivers", tags=["Drivers"])


@router.get("/me", response_model=DriverResponse)
def get_my_profile(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Driver profile of the logged-in user."""
    try:
        return DriverService.get_driver_for_user(db, current_user)
    except ValueError as e:
        raise http_error(e)


@router.get("/me/assignments", response_model=List[AssignmentResponse])
def get_my_assignments(
    on_date: Optional[date] = Query(None, description="Only assignments active on this date"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        driver = DriverService.get_driver_for_user(db, current_user)
    except ValueError as e:
        raise http_error(e)
    service = AssignmentService(db)
    assignments = service.list_assignments(driver_id=driver.id, on_date=on_date)
    return [AssignmentService.to_response(a) for a in assignments]


@router.get("", response_model=List[DriverResponse])
def list_drivers(
    status: Optional[DriverStatus] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    _: User = Depends(get_admin_user)
):
    return DriverService.list_drivers(db, status=status, skip=skip, limit=limit)


@router.get("/{driver_id}", response_model=DriverResponse)
def get_driver(driver_id: int, db: Session = Depends(get_db), _: User = Depends(get_admin_user)):
    try:
        return DriverService.get_driver(db, driver_id)
    except ValueError as e:
        raise http_error(e)


@router.post("", response_model=DriverResponse, status_code=201)
def create_driver(payload: DriverCreate, db: Session = Depends(get_db), _: User = Depends(get_admin_user)):
    """Create a driver together with its login account."""
    try:
        return DriverService.create_driver(db, payload)
    except ValueError as e:
        raise http_error(e)


@router.put("/{driver_id}", response_model=DriverResponse)
def update_driver(
    driver_id: int,
    payload: DriverUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(get_admin_user)
):
    try:
        return DriverService.update_driver(db, driver_id, payload)
    except ValueError as e:
        raise http_error(e)


@router.delete("/{driver_id}")
def delete_driver(driver_id: int, db: Session = Depends(get_db), _: User = Depends(get_admin_user)):
    try:
        DriverService.delete_driver(db, driver_id)
    except ValueError as e:
        raise http_error(e)
    return {"message": "Driver deleted successfully", "success": True}
