from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from fleet_admin.database import get_db
from fleet_admin.models import User
from fleet_admin.routers.deps import get_admin_user, get_current_user, http_error
from fleet_admin.schemas.route import RouteCreate, RouteUpdate, RouteResponse
from fleet_admin.services.route_service import RouteService

router = APIRouter(prefix="/api/routes", tags=["Routes"])


@router.get("", response_model=List[RouteResponse])
def list_routes(
    is_active: Optional[bool] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user)
):
    return RouteService.list_routes(db, is_active=is_active, skip=skip, limit=limit)


@router.get("/{route_id}", response_model=RouteResponse)
def get_route(route_id: int, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    try:
        return RouteService.get_route(db, route_id)
    except ValueError as e:
        raise http_error(e)


@router.post("", response_model=RouteResponse, status_code=201)
def create_route(payload: RouteCreate, db: Session = Depends(get_db), _: User = Depends(get_admin_user)):
    try:
        return RouteService.create_route(db, payload)
    except ValueError as e:
        raise http_error(e)


@router.put("/{route_id}", response_model=RouteResponse)
def update_route(
    route_id: int,
    payload: RouteUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(get_admin_user)
):
    try:
        return RouteService.update_route(db, route_id, payload)
    except ValueError as e:
        raise http_error(e)


@router.delete("/{route_id}")
def delete_route(route_id: int, db: Session = Depends(get_db), _: User = Depends(get_admin_user)):
    try:
        RouteService.delete_route(db, route_id)
    except ValueError as e:
        raise http_error(e)
    return {"message": "Route deleted successfully", "success": True}
