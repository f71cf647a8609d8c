from .auth import router as auth_router
from .users import router as users_router
from .drivers import router as drivers_router
from .routes import router as routes_router
from .shifts import router as shifts_router
from .assignments import router as assignments_router

__all__ = [
    "auth_router",
    "users_router",
    "drivers_router",
    "routes_router",
    "shifts_router",
    "assignments_router"
]
