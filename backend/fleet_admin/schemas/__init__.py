from .user import UserCreate, UserUpdate, UserResponse
from .auth import LoginRequest, TokenResponse
from .driver import DriverCreate, DriverUpdate, DriverResponse
from .route import RouteCreate, RouteUpdate, RouteResponse
from .shift import ShiftCreate, ShiftUpdate, ShiftResponse, ShiftGenerationRequest, WeekCopyRequest
from .assignment import (
    AssignmentCreate, AssignmentUpdate, AssignmentResponse,
    AssignByScheduleRequest, AssignmentFinishRequest
)

__all__ = [
    "UserCreate", "UserUpdate", "UserResponse",
    "LoginRequest", "TokenResponse",
    "DriverCreate", "DriverUpdate", "DriverResponse",
    "RouteCreate", "RouteUpdate", "RouteResponse",
    "ShiftCreate", "ShiftUpdate", "ShiftResponse", "ShiftGenerationRequest", "WeekCopyRequest",
    "AssignmentCreate", "AssignmentUpdate", "AssignmentResponse",
    "AssignByScheduleRequest", "AssignmentFinishRequest"
]
