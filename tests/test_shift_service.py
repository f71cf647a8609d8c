"""Tests for shift splitting and the shift service rules."""

from datetime import date, time

import pytest

from fleet_admin.models import (
    Route, Driver, DriverStatus, ShiftAssignment, AssignmentStatus, ShiftStatus, Weekday, UserRole
)
from fleet_admin.schemas.shift import ShiftCreate, ShiftUpdate
from fleet_admin.services.exceptions import NotFoundError, BusinessRuleError
from fleet_admin.services.shift_service import ShiftService, split_window, duration_minutes
from fleet_admin.services.user_service import UserService


@pytest.fixture
def route(db):
    route = Route(name="R1", origin="A", destination="B", is_active=True)
    db.add(route)
    db.commit()
    db.refresh(route)
    return route


@pytest.fixture
def service(db):
    return ShiftService(db)


@pytest.fixture
def driver(db):
    user = UserService.build_user(db, "d1@fleet.test", "555", "secret1", UserRole.DRIVER)
    driver = Driver(
        full_name="Ana Driver",
        national_id="555",
        license_number="C2-1",
        status=DriverStatus.ACTIVE,
        user_id=user.id
    )
    db.add(driver)
    db.commit()
    db.refresh(driver)
    return driver


class TestSplitWindow:

    def test_exact_multiple_of_max(self):
        windows = split_window(time(6, 0), time(22, 0), 480, 60)
        assert windows == [(time(6, 0), time(14, 0)), (time(14, 0), time(22, 0))]

    def test_last_chunk_truncated_at_end(self):
        windows = split_window(time(6, 0), time(23, 30), 480, 60)
        assert windows[-1] == (time(22, 0), time(23, 30))
        assert len(windows) == 3

    def test_short_trailing_chunk_dropped(self):
        windows = split_window(time(6, 0), time(22, 30), 480, 60)
        assert windows == [(time(6, 0), time(14, 0)), (time(14, 0), time(22, 0))]

    def test_trailing_chunk_of_exactly_min_is_kept(self):
        windows = split_window(time(6, 0), time(15, 0), 480, 60)
        assert windows == [(time(6, 0), time(14, 0)), (time(14, 0), time(15, 0))]

    def test_window_shorter_than_minimum(self):
        assert split_window(time(6, 0), time(6, 45), 480, 60) == []

    def test_window_shorter_than_max_is_single_shift(self):
        assert split_window(time(9, 0), time(13, 0), 480, 60) == [(time(9, 0), time(13, 0))]

    def test_late_window_does_not_wrap_midnight(self):
        windows = split_window(time(18, 0), time(23, 0), 480, 60)
        assert windows == [(time(18, 0), time(23, 0))]

    def test_duration_minutes_truncates_seconds(self):
        assert duration_minutes(time(8, 0), time(9, 0, 59)) == 60


class TestCreateShift:

    def test_create_computes_whole_hours(self, service, route):
        shift = service.create_shift(ShiftCreate(
            route_id=route.id, weekday=Weekday.MONDAY,
            start_time=time(8, 0), end_time=time(15, 45), week_number=3
        ))
        assert shift.duration_hours == 7
        assert shift.status == ShiftStatus.ACTIVE

    def test_exactly_eight_hours_is_allowed(self, service, route):
        shift = service.create_shift(ShiftCreate(
            route_id=route.id, weekday=Weekday.MONDAY,
            start_time=time(8, 0), end_time=time(16, 0), week_number=3
        ))
        assert shift.duration_hours == 8

    def test_more_than_eight_hours_rejected(self, service, route):
        with pytest.raises(BusinessRuleError, match="cannot exceed 8 hours"):
            service.create_shift(ShiftCreate(
                route_id=route.id, weekday=Weekday.MONDAY,
                start_time=time(8, 0), end_time=time(16, 1), week_number=3
            ))

    def test_end_before_start_rejected(self, service, route):
        with pytest.raises(BusinessRuleError):
            service.create_shift(ShiftCreate(
                route_id=route.id, weekday=Weekday.MONDAY,
                start_time=time(16, 0), end_time=time(8, 0), week_number=3
            ))

    def test_unknown_route(self, service):
        with pytest.raises(NotFoundError, match="Route not found"):
            service.create_shift(ShiftCreate(
                route_id=999, weekday=Weekday.MONDAY,
                start_time=time(8, 0), end_time=time(9, 0), week_number=3
            ))

    def test_update_revalidates_duration(self, service, route):
        shift = service.create_shift(ShiftCreate(
            route_id=route.id, weekday=Weekday.MONDAY,
            start_time=time(8, 0), end_time=time(12, 0), week_number=3
        ))
        with pytest.raises(BusinessRuleError):
            service.update_shift(shift.id, ShiftUpdate(
                route_id=route.id, weekday=Weekday.TUESDAY,
                start_time=time(6, 0), end_time=time(18, 0), week_number=3
            ))
        updated = service.update_shift(shift.id, ShiftUpdate(
            route_id=route.id, weekday=Weekday.TUESDAY,
            start_time=time(6, 0), end_time=time(11, 0), week_number=4,
            status=ShiftStatus.INACTIVE
        ))
        assert updated.weekday == Weekday.TUESDAY
        assert updated.duration_hours == 5
        assert updated.week_number == 4
        assert updated.status == ShiftStatus.INACTIVE


class TestGenerateWeek:

    def test_generates_every_day(self, service, route):
        shifts = service.generate_week(route.id, time(6, 0), time(22, 0), 12)
        assert len(shifts) == 14
        assert [s.weekday for s in shifts[:2]] == [Weekday.MONDAY, Weekday.MONDAY]
        assert shifts[-1].weekday == Weekday.SUNDAY
        assert all(s.duration_hours == 8 for s in shifts)
        assert all(s.week_number == 12 for s in shifts)

    def test_selected_weekdays_only(self, service, route):
        shifts = service.generate_week(
            route.id, time(6, 0), time(23, 30), 12, [Weekday.FRIDAY, Weekday.MONDAY]
        )
        assert len(shifts) == 6
        assert shifts[0].weekday == Weekday.MONDAY
        assert shifts[2].duration_hours == 1
        assert shifts[2].end_time == time(23, 30)

    def test_invalid_window(self, service, route):
        with pytest.raises(BusinessRuleError, match="start must be before end"):
            service.generate_week(route.id, time(10, 0), time(10, 0), 12)

    def test_window_too_short(self, service, route):
        with pytest.raises(BusinessRuleError, match="No shifts could be created"):
            service.generate_week(route.id, time(10, 0), time(10, 30), 12)

    def test_regenerating_does_not_duplicate(self, service, route):
        service.generate_week(route.id, time(6, 0), time(14, 0), 12)
        again = service.generate_week(route.id, time(6, 0), time(14, 0), 12)
        assert again == []
        assert len(service.list_shifts_by_route_and_week(route.id, 12)) == 7


class TestCopyWeek:

    def test_copy_clones_shifts(self, service, route):
        service.generate_week(route.id, time(6, 0), time(14, 0), 1, [Weekday.MONDAY, Weekday.TUESDAY])
        copies = service.copy_week(route.id, 1, 2)
        assert len(copies) == 2
        assert {s.week_number for s in copies} == {2}
        assert [s.weekday for s in copies] == [Weekday.MONDAY, Weekday.TUESDAY]
        assert len(service.list_shifts_by_route_and_week(route.id, 1)) == 2

    def test_copy_keeps_status(self, service, route):
        service.create_shift(ShiftCreate(
            route_id=route.id, weekday=Weekday.SUNDAY, start_time=time(8, 0),
            end_time=time(12, 0), week_number=5, status=ShiftStatus.INACTIVE
        ))
        copies = service.copy_week(route.id, 5, 6)
        assert copies[0].status == ShiftStatus.INACTIVE

    def test_copy_skips_existing_shifts(self, service, route):
        service.generate_week(route.id, time(6, 0), time(14, 0), 1, [Weekday.MONDAY])
        service.copy_week(route.id, 1, 2)
        assert service.copy_week(route.id, 1, 2) == []
        assert len(service.list_shifts_by_route_and_week(route.id, 2)) == 1

    def test_empty_source_week(self, service, route):
        with pytest.raises(BusinessRuleError, match="No shifts in the source week"):
            service.copy_week(route.id, 7, 8)

    def test_same_week(self, service, route):
        with pytest.raises(BusinessRuleError):
            service.copy_week(route.id, 7, 7)


class TestDeleteShift:

    def test_delete_blocked_by_active_assignment(self, db, service, route, driver):
        shift = service.create_shift(ShiftCreate(
            route_id=route.id, weekday=Weekday.MONDAY,
            start_time=time(8, 0), end_time=time(12, 0), week_number=3
        ))
        db.add(ShiftAssignment(
            shift_id=shift.id, driver_id=driver.id,
            start_date=date(2026, 1, 5), status=AssignmentStatus.ACTIVE
        ))
        db.commit()

        with pytest.raises(BusinessRuleError, match="active assignments"):
            service.delete_shift(shift.id)

    def test_delete_removes_finished_history(self, db, service, route, driver):
        shift = service.create_shift(ShiftCreate(
            route_id=route.id, weekday=Weekday.MONDAY,
            start_time=time(8, 0), end_time=time(12, 0), week_number=3
        ))
        db.add(ShiftAssignment(
            shift_id=shift.id, driver_id=driver.id, start_date=date(2026, 1, 5),
            end_date=date(2026, 1, 12), status=AssignmentStatus.FINISHED
        ))
        db.commit()

        service.delete_shift(shift.id)
        assert db.query(ShiftAssignment).count() == 0

    def test_delete_missing(self, service):
        with pytest.raises(NotFoundError):
            service.delete_shift(42)
