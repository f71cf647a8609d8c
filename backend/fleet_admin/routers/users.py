from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from fleet_admin.database import get_db
from fleet_admin.models import User, UserRole
from fleet_admin.routers.deps import get_admin_user, http_error
from fleet_admin.schemas.user import UserCreate, UserUpdate, UserResponse
from fleet_admin.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=List[UserResponse])
def list_users(
    role: Optional[UserRole] = None,
    is_active: Optional[bool] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    _: User = Depends(get_admin_user)
):
    return UserService.list_users(db, role=role, is_active=is_active, skip=skip, limit=limit)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db), _: User = Depends(get_admin_user)):
    try:
        return UserService.get_user(db, user_id)
    except ValueError as e:
        raise http_error(e)


@router.post("", response_model=UserResponse, status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db), _: User = Depends(get_admin_user)):
    try:
        return UserService.create_user(db, payload)
    except ValueError as e:
        raise http_error(e)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(get_admin_user)
):
    try:
        return UserService.update_user(db, user_id, payload)
    except ValueError as e:
        raise http_error(e)


@router.delete("/{user_id}")
def delete_user(user_id: int, db: Session = Depends(get_db), _: User = Depends(get_admin_user)):
    try:
        UserService.delete_user(db, user_id)
    except ValueError as e:
        raise http_error(e)
    return {"message": "User deleted successfully", "success": True}
