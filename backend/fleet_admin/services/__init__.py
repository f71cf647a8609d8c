from .exceptions import (
    NotFoundError, ConflictError, BusinessRuleError, AuthenticationError, PermissionDeniedError
)
from .auth_service import AuthService
from .user_service import UserService
from .driver_service import DriverService
from .route_service import RouteService
from .shift_service import ShiftService, split_window, duration_minutes
from .assignment_service import AssignmentService

__all__ = [
    "NotFoundError",
    "ConflictError",
    "BusinessRuleError",
    "AuthenticationError",
    "PermissionDeniedError",
    "AuthService",
    "UserService",
    "DriverService",
    "RouteService",
    "ShiftService",
    "split_window",
    "duration_minutes",
    "AssignmentService"
]
