from typing import Iterable, List, Optional

from sqlalchemy import case
from sqlalchemy.orm import Session, joinedload

from fleet_admin.models import Shift, Weekday

# Enum columns sort alphabetically; order weekdays Monday..Sunday instead
_WEEKDAY_ORDER = case(
    {day: day.iso_index for day in Weekday},
    value=Shift.weekday
)


class ShiftRepository:

    @staticmethod
    def _ordered(query):
        return query.order_by(Shift.week_number, _WEEKDAY_ORDER, Shift.start_time, Shift.id)

    @staticmethod
    def get(db: Session, shift_id: int) -> Optional[Shift]:
        return db.query(Shift).options(joinedload(Shift.route)).filter(Shift.id == shift_id).first()

    @staticmethod
    def list(db: Session) -> List[Shift]:
        query = db.query(Shift).options(joinedload(Shift.route))
        return ShiftRepository._ordered(query).all()

    @staticmethod
    def list_by_route(db: Session, route_id: int) -> List[Shift]:
        query = db.query(Shift).options(joinedload(Shift.route)).filter(Shift.route_id == route_id)
        return ShiftRepository._ordered(query).all()

    @staticmethod
    def list_by_route_and_week(db: Session, route_id: int, week_number: int) -> List[Shift]:
        query = db.query(Shift).options(joinedload(Shift.route)).filter(
            Shift.route_id == route_id,
            Shift.week_number == week_number
        )
        return ShiftRepository._ordered(query).all()

    @staticmethod
    def find_by_slot(
        db: Session,
        route_id: int,
        week_number: int,
        weekday: Weekday,
        start_time
    ) -> Optional[Shift]:
        return db.query(Shift).filter(
            Shift.route_id == route_id,
            Shift.week_number == week_number,
            Shift.weekday == weekday,
            Shift.start_time == start_time
        ).first()

    @staticmethod
    def add(db: Session, shift: Shift) -> Shift:
        db.add(shift)
        db.flush()
        return shift

    @staticmethod
    def add_all(db: Session, shifts: Iterable[Shift]) -> List[Shift]:
        shifts = list(shifts)
        db.add_all(shifts)
        db.flush()
        return shifts

    @staticmethod
    def delete(db: Session, shift: Shift) -> None:
        db.delete(shift)
        db.flush()
