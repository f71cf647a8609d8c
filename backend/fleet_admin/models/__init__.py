from .user import User, UserRole, AuthSession
from .driver import Driver, DriverStatus
from .route import Route
from .shift import Shift, ShiftStatus, Weekday
from .shift_assignment import ShiftAssignment, AssignmentStatus

__all__ = [
    "User",
    "UserRole",
    "AuthSession",
    "Driver",
    "DriverStatus",
    "Route",
    "Shift",
    "ShiftStatus",
    "Weekday",
    "ShiftAssignment",
    "AssignmentStatus"
]
