"""
Assignment Service - binds drivers to shifts for a date range

Rules:
- Only ACTIVE drivers can be assigned, and only to ACTIVE shifts
- A shift has at most one ACTIVE assignment for any given date
- A driver cannot hold two ACTIVE assignments whose shifts overlap in time
  (same week number and weekday) during overlapping date ranges
- Only ACTIVE assignments can be edited, finished or cancelled
"""

import logging
from datetime import date, time
from typing import List, Optional

from sqlalchemy.orm import Session

from fleet_admin.models import (
    ShiftAssignment, AssignmentStatus, Shift, ShiftStatus, Driver, DriverStatus, Weekday
)
from fleet_admin.repositories import AssignmentRepository, ShiftRepository, DriverRepository, RouteRepository
from fleet_admin.schemas.assignment import AssignmentCreate, AssignmentUpdate, AssignmentResponse
from fleet_admin.services.exceptions import NotFoundError, ConflictError, BusinessRuleError

logger = logging.getLogger(__name__)


def shifts_overlap(a: Shift, b: Shift) -> bool:
    if a.week_number != b.week_number or a.weekday != b.weekday:
        return False
    return a.start_time < b.end_time and b.start_time < a.end_time


class AssignmentService:

    def __init__(self, db: Session):
        self.db = db

    def _commit(self):
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _get_shift(self, shift_id: int) -> Shift:
        shift = ShiftRepository.get(self.db, shift_id)
        if not shift:
            raise NotFoundError("Shift not found")
        return shift

    def _get_driver(self, driver_id: int) -> Driver:
        driver = DriverRepository.get(self.db, driver_id)
        if not driver:
            raise NotFoundError("Driver not found")
        return driver

    def get_assignment(self, assignment_id: int) -> ShiftAssignment:
        assignment = AssignmentRepository.get(self.db, assignment_id)
        if not assignment:
            raise NotFoundError("Assignment not found")
        return assignment

    def list_assignments(
        self,
        driver_id: Optional[int] = None,
        shift_id: Optional[int] = None,
        route_id: Optional[int] = None,
        status: Optional[AssignmentStatus] = None,
        on_date: Optional[date] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[ShiftAssignment]:
        return AssignmentRepository.list(
            self.db,
            driver_id=driver_id,
            shift_id=shift_id,
            route_id=route_id,
            status=status,
            on_date=on_date,
            skip=skip,
            limit=limit
        )

    def _check_rules(
        self,
        shift: Shift,
        driver: Driver,
        start_date: date,
        end_date: Optional[date],
        exclude_id: Optional[int] = None
    ) -> None:
        if driver.status != DriverStatus.ACTIVE:
            raise BusinessRuleError("The selected driver is not active")
        if shift.status != ShiftStatus.ACTIVE:
            raise BusinessRuleError("The selected shift is not active")
        if end_date is not None and end_date < start_date:
            raise BusinessRuleError("end_date cannot be before start_date")

        taken = AssignmentRepository.overlapping_for_shift(
            self.db, shift.id, start_date, end_date, exclude_id=exclude_id
        )
        if taken:
            raise ConflictError("The shift already has an active assignment in this period")

        for other in AssignmentRepository.overlapping_for_driver(
            self.db, driver.id, start_date, end_date, exclude_id=exclude_id
        ):
            if shifts_overlap(shift, other.shift):
                raise ConflictError(
                    f"Driver already assigned to shift {other.shift_id} at an overlapping time"
                )

    def create_assignment(self, payload: AssignmentCreate) -> ShiftAssignment:
        shift = self._get_shift(payload.shift_id)
        driver = self._get_driver(payload.driver_id)
        self._check_rules(shift, driver, payload.start_date, payload.end_date)

        assignment = ShiftAssignment(
            shift_id=shift.id,
            driver_id=driver.id,
            start_date=payload.start_date,
            end_date=payload.end_date,
            status=AssignmentStatus.ACTIVE,
            notes=payload.notes
        )
        AssignmentRepository.add(self.db, assignment)
        self._commit()
        logger.info("Assigned driver %s to shift %s from %s", driver.id, shift.id, payload.start_date)
        return self.get_assignment(assignment.id)

    def assign_by_schedule(
        self,
        driver_id: int,
        route_id: int,
        start_date: date,
        start_time: time,
        notes: Optional[str] = None
    ) -> ShiftAssignment:
        """Find the route's shift for the date's ISO week and weekday starting at start_time, then assign it."""
        if not RouteRepository.get(self.db, route_id):
            raise NotFoundError("Route not found")
        week_number = start_date.isocalendar()[1]
        weekday = Weekday.from_date(start_date)
        shift = ShiftRepository.find_by_slot(self.db, route_id, week_number, weekday, start_time)
        if not shift:
            raise NotFoundError(
                f"No shift matches route {route_id} on {weekday.value} week {week_number} at {start_time.strftime('%H:%M')}"
            )
        return self.create_assignment(AssignmentCreate(
            shift_id=shift.id,
            driver_id=driver_id,
            start_date=start_date,
            notes=notes
        ))

    def _ensure_active(self, assignment: ShiftAssignment) -> None:
        if assignment.status != AssignmentStatus.ACTIVE:
            raise BusinessRuleError(f"Assignment is {assignment.status.value.lower()} and cannot be modified")

    def update_assignment(self, assignment_id: int, payload: AssignmentUpdate) -> ShiftAssignment:
        assignment = self.get_assignment(assignment_id)
        self._ensure_active(assignment)

        data = payload.model_dump(exclude_unset=True)
        driver = self._get_driver(data["driver_id"]) if data.get("driver_id") else assignment.driver
        start_date = data.get("start_date") or assignment.start_date
        end_date = data["end_date"] if "end_date" in data else assignment.end_date

        self._check_rules(assignment.shift, driver, start_date, end_date, exclude_id=assignment.id)

        assignment.driver_id = driver.id
        assignment.start_date = start_date
        assignment.end_date = end_date
        if "notes" in data:
            assignment.notes = data["notes"]
        self._commit()
        return self.get_assignment(assignment.id)

    def finish_assignment(self, assignment_id: int, end_date: Optional[date] = None) -> ShiftAssignment:
        assignment = self.get_assignment(assignment_id)
        self._ensure_active(assignment)
        end_date = end_date or date.today()
        if end_date < assignment.start_date:
            raise BusinessRuleError("end_date cannot be before start_date")

        assignment.end_date = end_date
        assignment.status = AssignmentStatus.FINISHED
        self._commit()
        logger.info("Finished assignment %s on %s", assignment_id, end_date)
        return self.get_assignment(assignment.id)

    def cancel_assignment(self, assignment_id: int) -> ShiftAssignment:
        assignment = self.get_assignment(assignment_id)
        self._ensure_active(assignment)
        assignment.status = AssignmentStatus.CANCELLED
        self._commit()
        logger.info("Cancelled assignment %s", assignment_id)
        return self.get_assignment(assignment.id)

    def delete_assignment(self, assignment_id: int) -> None:
        assignment = self.get_assignment(assignment_id)
        AssignmentRepository.delete(self.db, assignment)
        self._commit()

    @staticmethod
    def to_response(assignment: ShiftAssignment) -> AssignmentResponse:
        shift = assignment.shift
        return AssignmentResponse(
            id=assignment.id,
            shift_id=assignment.shift_id,
            driver_id=assignment.driver_id,
            driver_name=assignment.driver.full_name if assignment.driver else None,
            route_id=shift.route_id if shift else None,
            route_name=shift.route.name if shift and shift.route else None,
            weekday=shift.weekday if shift else None,
            week_number=shift.week_number if shift else None,
            start_time=shift.start_time if shift else None,
            end_time=shift.end_time if shift else None,
            start_date=assignment.start_date,
            end_date=assignment.end_date,
            status=assignment.status,
            notes=assignment.notes
        )
