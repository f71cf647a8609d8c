from datetime import date
from typing import Dict, Iterable, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from fleet_admin.models import ShiftAssignment, AssignmentStatus, Shift, Driver


def _active_on(query, on_date: date):
    return query.filter(
        ShiftAssignment.status == AssignmentStatus.ACTIVE,
        ShiftAssignment.start_date <= on_date,
        or_(ShiftAssignment.end_date.is_(None), ShiftAssignment.end_date >= on_date)
    )


def _overlapping(query, start_date: date, end_date: Optional[date]):
    """Date ranges [start, end] intersect, a null end meaning open-ended."""
    query = query.filter(
        or_(ShiftAssignment.end_date.is_(None), ShiftAssignment.end_date >= start_date)
    )
    if end_date is not None:
        query = query.filter(ShiftAssignment.start_date <= end_date)
    return query


class AssignmentRepository:

    @staticmethod
    def _base(db: Session):
        return db.query(ShiftAssignment).options(
            joinedload(ShiftAssignment.driver),
            joinedload(ShiftAssignment.shift).joinedload(Shift.route)
        )

    @staticmethod
    def get(db: Session, assignment_id: int) -> Optional[ShiftAssignment]:
        return AssignmentRepository._base(db).filter(ShiftAssignment.id == assignment_id).first()

    @staticmethod
    def list(
        db: Session,
        driver_id: Optional[int] = None,
        shift_id: Optional[int] = None,
        route_id: Optional[int] = None,
        status: Optional[AssignmentStatus] = None,
        on_date: Optional[date] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[ShiftAssignment]:
        query = AssignmentRepository._base(db)
        if driver_id is not None:
            query = query.filter(ShiftAssignment.driver_id == driver_id)
        if shift_id is not None:
            query = query.filter(ShiftAssignment.shift_id == shift_id)
        if route_id is not None:
            query = query.join(Shift, ShiftAssignment.shift_id == Shift.id).filter(Shift.route_id == route_id)
        if status is not None:
            query = query.filter(ShiftAssignment.status == status)
        if on_date is not None:
            query = _active_on(query, on_date)
        return query.order_by(ShiftAssignment.start_date, ShiftAssignment.id).offset(skip).limit(limit).all()

    @staticmethod
    def count_active_for_shift(db: Session, shift_id: int) -> int:
        return db.query(ShiftAssignment).filter(
            ShiftAssignment.shift_id == shift_id,
            ShiftAssignment.status == AssignmentStatus.ACTIVE
        ).count()

    @staticmethod
    def count_active_for_driver(db: Session, driver_id: int) -> int:
        return db.query(ShiftAssignment).filter(
            ShiftAssignment.driver_id == driver_id,
            ShiftAssignment.status == AssignmentStatus.ACTIVE
        ).count()

    @staticmethod
    def active_by_shift_on_date(
        db: Session,
        shift_ids: Iterable[int],
        on_date: date
    ) -> Dict[int, ShiftAssignment]:
        shift_ids = list(shift_ids)
        if not shift_ids:
            return {}
        query = db.query(ShiftAssignment).options(joinedload(ShiftAssignment.driver)).filter(
            ShiftAssignment.shift_id.in_(shift_ids)
        )
        result = {}
        for assignment in _active_on(query, on_date).order_by(ShiftAssignment.start_date).all():
            result[assignment.shift_id] = assignment
        return result

    @staticmethod
    def overlapping_for_shift(
        db: Session,
        shift_id: int,
        start_date: date,
        end_date: Optional[date],
        exclude_id: Optional[int] = None
    ) -> List[ShiftAssignment]:
        query = db.query(ShiftAssignment).filter(
            ShiftAssignment.shift_id == shift_id,
            ShiftAssignment.status == AssignmentStatus.ACTIVE
        )
        if exclude_id is not None:
            query = query.filter(ShiftAssignment.id != exclude_id)
        return _overlapping(query, start_date, end_date).all()

    @staticmethod
    def overlapping_for_driver(
        db: Session,
        driver_id: int,
        start_date: date,
        end_date: Optional[date],
        exclude_id: Optional[int] = None
    ) -> List[ShiftAssignment]:
        query = db.query(ShiftAssignment).options(joinedload(ShiftAssignment.shift)).filter(
            ShiftAssignment.driver_id == driver_id,
            ShiftAssignment.status == AssignmentStatus.ACTIVE
        )
        if exclude_id is not None:
            query = query.filter(ShiftAssignment.id != exclude_id)
        return _overlapping(query, start_date, end_date).all()

    @staticmethod
    def add(db: Session, assignment: ShiftAssignment) -> ShiftAssignment:
        db.add(assignment)
        db.flush()
        return assignment

    @staticmethod
    def delete(db: Session, assignment: ShiftAssignment) -> None:
        db.delete(assignment)
        db.flush()
