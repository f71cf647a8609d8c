from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from fleet_admin.database import get_db
from fleet_admin.models import User, AssignmentStatus
from fleet_admin.routers.deps import get_admin_user, http_error
from fleet_admin.schemas.assignment import (
    AssignmentCreate, AssignmentUpdate, AssignmentResponse, AssignByScheduleRequest, AssignmentFinishRequest
)
from fleet_admin.services.assignment_service import AssignmentService

router = APIRouter(prefix="/api/assignments", tags=["Assignments"])


@router.get("", response_model=List[AssignmentResponse])
def list_assignments(
    driver_id: Optional[int] = None,
    shift_id: Optional[int] = None,
    route_id: Optional[int] = None,
    status: Optional[AssignmentStatus] = None,
    on_date: Optional[date] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    _: User = Depends(get_admin_user)
):
    assignments = AssignmentService(db).list_assignments(
        driver_id=driver_id,
        shift_id=shift_id,
        route_id=route_id,
        status=status,
        on_date=on_date,
        skip=skip,
        limit=limit
    )
    return [AssignmentService.to_response(a) for a in assignments]


@router.post("", response_model=AssignmentResponse, status_code=201)
def create_assignment(
    payload: AssignmentCreate,
    db: Session = Depends(get_db),
    _: User = Depends(get_admin_user)
):
    try:
        assignment = AssignmentService(db).create_assignment(payload)
    except ValueError as e:
        raise http_error(e)
    return AssignmentService.to_response(assignment)


@router.post("/by-schedule", response_model=AssignmentResponse, status_code=201)
def assign_by_schedule(
    payload: AssignByScheduleRequest,
    db: Session = Depends(get_db),
    _: User = Depends(get_admin_user)
):
    """Assign a driver to the route's shift that starts at the given date and time."""
    try:
        assignment = AssignmentService(db).assign_by_schedule(
            payload.driver_id,
            payload.route_id,
            payload.start_date,
            payload.start_time,
            payload.notes
        )
    except ValueError as e:
        raise http_error(e)
    return AssignmentService.to_response(assignment)


@router.get("/{assignment_id}", response_model=AssignmentResponse)
def get_assignment(assignment_id: int, db: Session = Depends(get_db), _: User = Depends(get_admin_user)):
    try:
        assignment = AssignmentService(db).get_assignment(assignment_id)
    except ValueError as e:
        raise http_error(e)
    return AssignmentService.to_response(assignment)


@router.put("/{assignment_id}", response_model=AssignmentResponse)
def update_assignment(
    assignment_id: int,
    payload: AssignmentUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(get_admin_user)
):
    try:
        assignment = AssignmentService(db).update_assignment(assignment_id, payload)
    except ValueError as e:
        raise http_error(e)
    return AssignmentService.to_response(assignment)


@router.post("/{assignment_id}/finish", response_model=AssignmentResponse)
def finish_assignment(
    assignment_id: int,
    payload: Optional[AssignmentFinishRequest] = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_admin_user)
):
    end_date = payload.end_date if payload else None
    try:
        assignment = AssignmentService(db).finish_assignment(assignment_id, end_date)
    except ValueError as e:
        raise http_error(e)
    return AssignmentService.to_response(assignment)


@router.post("/{assignment_id}/cancel", response_model=AssignmentResponse)
def cancel_assignment(assignment_id: int, db: Session = Depends(get_db), _: User = Depends(get_admin_user)):
    try:
        assignment = AssignmentService(db).cancel_assignment(assignment_id)
    except ValueError as e:
        raise http_error(e)
    return AssignmentService.to_response(assignment)


@router.delete("/{assignment_id}")
def delete_assignment(assignment_id: int, db: Session = Depends(get_db), _: User = Depends(get_admin_user)):
    try:
        AssignmentService(db).delete_assignment(assignment_id)
    except ValueError as e:
        raise http_error(e)
    return {"message": "Assignment deleted successfully", "success": True}
