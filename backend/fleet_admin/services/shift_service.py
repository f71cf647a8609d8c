"""
Shift Service - weekly shift ("turno") management per route

Responsible for:
- Creating and editing single shifts, bounded by the maximum shift length
- Splitting an operating window into consecutive shifts for every weekday
- Copying one week's shifts of a route into another week
- Refusing to delete shifts that still have active driver assignments

Shift splitting:
- The window [start, end) is cut into chunks of max_shift_minutes
- The last chunk is truncated at the end of the window
- A trailing chunk shorter than min_shift_minutes is dropped
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Set, Tuple

from sqlalchemy.orm import Session

from fleet_admin.config import get_settings
from fleet_admin.models import Shift, ShiftStatus, Weekday
from fleet_admin.repositories import ShiftRepository, RouteRepository, AssignmentRepository
from fleet_admin.schemas.shift import ShiftCreate, ShiftUpdate, ShiftResponse
from fleet_admin.services.exceptions import NotFoundError, BusinessRuleError

logger = logging.getLogger(__name__)

ShiftKey = Tuple[Weekday, time, time]


def duration_minutes(start: time, end: time) -> int:
    anchor = date.today()
    delta = datetime.combine(anchor, end) - datetime.combine(anchor, start)
    return int(delta.total_seconds() // 60)


def split_window(start: time, end: time, max_minutes: int, min_minutes: int) -> List[Tuple[time, time]]:
    """Cut [start, end) into consecutive (start, end) pairs of at most max_minutes."""
    anchor = date.today()
    cursor = datetime.combine(anchor, start)
    limit = datetime.combine(anchor, end)
    step = timedelta(minutes=max_minutes)

    windows = []
    while cursor < limit:
        chunk_end = min(cursor + step, limit)
        if (chunk_end - cursor).total_seconds() // 60 < min_minutes:
            break
        windows.append((cursor.time(), chunk_end.time()))
        cursor = chunk_end
    return windows


def _format_hours(minutes: int) -> str:
    return f"{minutes / 60:g}"


class ShiftService:

    def __init__(self, db: Session):
        self.db = db
        settings = get_settings()
        self.max_shift_minutes = settings.max_shift_minutes
        self.min_shift_minutes = settings.min_shift_minutes

    def _get_route(self, route_id: int):
        route = RouteRepository.get(self.db, route_id)
        if not route:
            raise NotFoundError("Route not found")
        return route

    def _commit(self):
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def validate_window(self, start_time: time, end_time: time) -> int:
        """Returns the shift length in minutes."""
        if end_time <= start_time:
            raise BusinessRuleError("A shift must end after it starts")
        minutes = duration_minutes(start_time, end_time)
        if minutes > self.max_shift_minutes:
            raise BusinessRuleError(
                f"A shift cannot exceed {_format_hours(self.max_shift_minutes)} hours"
            )
        return minutes

    # Queries

    def list_shifts(self) -> List[Shift]:
        return ShiftRepository.list(self.db)

    def list_shifts_by_route(self, route_id: int) -> List[Shift]:
        self._get_route(route_id)
        return ShiftRepository.list_by_route(self.db, route_id)

    def list_shifts_by_route_and_week(self, route_id: int, week_number: int) -> List[Shift]:
        self._get_route(route_id)
        return ShiftRepository.list_by_route_and_week(self.db, route_id, week_number)

    def get_shift(self, shift_id: int) -> Shift:
        shift = ShiftRepository.get(self.db, shift_id)
        if not shift:
            raise NotFoundError("Shift not found")
        return shift

    def to_responses(self, shifts: Iterable[Shift], on_date: Optional[date] = None) -> List[ShiftResponse]:
        """Attach the route name and the driver holding each shift on on_date (today by default)."""
        shifts = list(shifts)
        on_date = on_date or date.today()
        active = AssignmentRepository.active_by_shift_on_date(self.db, [s.id for s in shifts], on_date)

        result = []
        for shift in shifts:
            assignment = active.get(shift.id)
            result.append(ShiftResponse(
                id=shift.id,
                route_id=shift.route_id,
                route_name=shift.route.name if shift.route else None,
                weekday=shift.weekday,
                start_time=shift.start_time,
                end_time=shift.end_time,
                duration_hours=shift.duration_hours,
                week_number=shift.week_number,
                status=shift.status,
                has_assignment=assignment is not None,
                assigned_driver=assignment.driver.full_name if assignment and assignment.driver else None
            ))
        return result

    # Commands

    def create_shift(self, payload: ShiftCreate) -> Shift:
        self._get_route(payload.route_id)
        minutes = self.validate_window(payload.start_time, payload.end_time)

        shift = Shift(
            route_id=payload.route_id,
            weekday=payload.weekday,
            start_time=payload.start_time,
            end_time=payload.end_time,
            duration_hours=minutes // 60,
            week_number=payload.week_number,
            status=payload.status
        )
        ShiftRepository.add(self.db, shift)
        self._commit()
        self.db.refresh(shift)
        return shift

    def update_shift(self, shift_id: int, payload: ShiftUpdate) -> Shift:
        shift = self.get_shift(shift_id)
        if payload.route_id != shift.route_id:
            self._get_route(payload.route_id)
        minutes = self.validate_window(payload.start_time, payload.end_time)

        shift.route_id = payload.route_id
        shift.weekday = payload.weekday
        shift.start_time = payload.start_time
        shift.end_time = payload.end_time
        shift.duration_hours = minutes // 60
        shift.week_number = payload.week_number
        if payload.status is not None:
            shift.status = payload.status

        self._commit()
        self.db.refresh(shift)
        return shift

    def delete_shift(self, shift_id: int) -> None:
        shift = self.get_shift(shift_id)
        if AssignmentRepository.count_active_for_shift(self.db, shift.id) > 0:
            raise BusinessRuleError("Cannot delete a shift with active assignments")
        ShiftRepository.delete(self.db, shift)
        self._commit()
        logger.info("Deleted shift %s", shift_id)

    def _existing_keys(self, route_id: int, week_number: int) -> Set[ShiftKey]:
        return {
            (s.weekday, s.start_time, s.end_time)
            for s in ShiftRepository.list_by_route_and_week(self.db, route_id, week_number)
        }

    def copy_week(self, route_id: int, source_week: int, target_week: int) -> List[Shift]:
        self._get_route(route_id)
        if source_week == target_week:
            raise BusinessRuleError("Source and target weeks must be different")

        source_shifts = ShiftRepository.list_by_route_and_week(self.db, route_id, source_week)
        if not source_shifts:
            raise BusinessRuleError("No shifts in the source week")

        existing = self._existing_keys(route_id, target_week)
        copies = []
        for shift in source_shifts:
            key = (shift.weekday, shift.start_time, shift.end_time)
            if key in existing:
                continue
            existing.add(key)
            copies.append(Shift(
                route_id=shift.route_id,
                weekday=shift.weekday,
                start_time=shift.start_time,
                end_time=shift.end_time,
                duration_hours=shift.duration_hours,
                week_number=target_week,
                status=shift.status
            ))

        ShiftRepository.add_all(self.db, copies)
        self._commit()
        logger.info(
            "Copied %d of %d shifts of route %s from week %s to week %s",
            len(copies), len(source_shifts), route_id, source_week, target_week
        )
        return self._reload(route_id, target_week, copies)

    def _reload(self, route_id: int, week_number: int, shifts: List[Shift]) -> List[Shift]:
        """Re-read freshly saved shifts of a week in display order."""
        ids = {shift.id for shift in shifts}
        if not ids:
            return []
        return [
            shift for shift in ShiftRepository.list_by_route_and_week(self.db, route_id, week_number)
            if shift.id in ids
        ]

    def generate_week(
        self,
        route_id: int,
        start_time: time,
        end_time: time,
        week_number: int,
        weekdays: Optional[List[Weekday]] = None
    ) -> List[Shift]:
        self._get_route(route_id)
        if start_time >= end_time:
            raise BusinessRuleError("Invalid schedule: start must be before end")

        windows = split_window(start_time, end_time, self.max_shift_minutes, self.min_shift_minutes)
        if not windows:
            raise BusinessRuleError("No shifts could be created for the given schedule")

        days = list(dict.fromkeys(weekdays)) if weekdays else list(Weekday)
        days.sort(key=lambda day: day.iso_index)

        existing = self._existing_keys(route_id, week_number)
        created = []
        for day in days:
            for shift_start, shift_end in windows:
                if (day, shift_start, shift_end) in existing:
                    continue
                created.append(Shift(
                    route_id=route_id,
                    weekday=day,
                    start_time=shift_start,
                    end_time=shift_end,
                    duration_hours=duration_minutes(shift_start, shift_end) // 60,
                    week_number=week_number,
                    status=ShiftStatus.ACTIVE
                ))

        ShiftRepository.add_all(self.db, created)
        self._commit()
        logger.info(
            "Generated %d shifts for route %s week %s (%s-%s, %d per day)",
            len(created), route_id, week_number, start_time, end_time, len(windows)
        )
        return self._reload(route_id, week_number, created)
