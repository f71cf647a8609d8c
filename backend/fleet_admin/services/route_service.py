from typing import List, Optional

from sqlalchemy.orm import Session

from fleet_admin.models import Route
from fleet_admin.repositories import RouteRepository
from fleet_admin.schemas.route import RouteCreate, RouteUpdate
from fleet_admin.services.exceptions import NotFoundError, ConflictError, BusinessRuleError

REQUIRED_FIELDS = ("name", "origin", "destination", "is_active")


class RouteService:

    @staticmethod
    def list_routes(db: Session, is_active: Optional[bool] = None, skip: int = 0, limit: int = 100) -> List[Route]:
        return RouteRepository.list(db, is_active=is_active, skip=skip, limit=limit)

    @staticmethod
    def get_route(db: Session, route_id: int) -> Route:
        route = RouteRepository.get(db, route_id)
        if not route:
            raise NotFoundError("Route not found")
        return route

    @staticmethod
    def create_route(db: Session, payload: RouteCreate) -> Route:
        if RouteRepository.get_by_name(db, payload.name):
            raise ConflictError(f"A route named '{payload.name}' already exists")
        route = RouteRepository.add(db, Route(**payload.model_dump()))
        db.commit()
        db.refresh(route)
        return route

    @staticmethod
    def update_route(db: Session, route_id: int, payload: RouteUpdate) -> Route:
        route = RouteService.get_route(db, route_id)
        if payload.name and payload.name != route.name:
            existing = RouteRepository.get_by_name(db, payload.name)
            if existing and existing.id != route.id:
                raise ConflictError(f"A route named '{payload.name}' already exists")

        for key, value in payload.model_dump(exclude_unset=True).items():
            if value is None and key in REQUIRED_FIELDS:
                continue
            setattr(route, key, value)
        db.commit()
        db.refresh(route)
        return route

    @staticmethod
    def delete_route(db: Session, route_id: int) -> None:
        route = RouteService.get_route(db, route_id)
        shift_count = RouteRepository.count_shifts(db, route.id)
        if shift_count > 0:
            raise BusinessRuleError(
                f"Cannot delete route: {shift_count} shift(s) still reference it. Delete the shifts or deactivate the route."
            )
        RouteRepository.delete(db, route)
        db.commit()
