from .user_repository import UserRepository
from .driver_repository import DriverRepository
from .route_repository import RouteRepository
from .shift_repository import ShiftRepository
from .assignment_repository import AssignmentRepository

__all__ = [
    "UserRepository",
    "DriverRepository",
    "RouteRepository",
    "ShiftRepository",
    "AssignmentRepository"
]
