from typing import List, Optional

from sqlalchemy.orm import Session

from fleet_admin.models import Route, Shift


class RouteRepository:

    @staticmethod
    def get(db: Session, route_id: int) -> Optional[Route]:
        return db.query(Route).filter(Route.id == route_id).first()

    @staticmethod
    def get_by_name(db: Session, name: str) -> Optional[Route]:
        return db.query(Route).filter(Route.name == name).first()

    @staticmethod
    def list(
        db: Session,
        is_active: Optional[bool] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Route]:
        query = db.query(Route)
        if is_active is not None:
            query = query.filter(Route.is_active == is_active)
        return query.order_by(Route.name).offset(skip).limit(limit).all()

    @staticmethod
    def count_shifts(db: Session, route_id: int) -> int:
        return db.query(Shift).filter(Shift.route_id == route_id).count()

    @staticmethod
    def add(db: Session, route: Route) -> Route:
        db.add(route)
        db.flush()
        return route

    @staticmethod
    def delete(db: Session, route: Route) -> None:
        db.delete(route)
        db.flush()
