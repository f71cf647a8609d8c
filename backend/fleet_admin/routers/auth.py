from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fleet_admin.database import get_db
from fleet_admin.models import User
from fleet_admin.routers.deps import get_bearer_token, get_current_user, http_error
from fleet_admin.schemas.auth import LoginRequest, TokenResponse
from fleet_admin.schemas.user import UserResponse
from fleet_admin.services.auth_service import AuthService
from fleet_admin.services.exceptions import AuthenticationError, PermissionDeniedError

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """Log in with email or national id."""
    try:
        token, session = AuthService.login(db, payload.identifier, payload.password)
    except (AuthenticationError, PermissionDeniedError) as e:
        raise http_error(e)
    return TokenResponse(
        access_token=token,
        expires_at=session.expires_at,
        user=UserResponse.model_validate(session.user)
    )


@router.post("/logout")
def logout(token: str = Depends(get_bearer_token), db: Session = Depends(get_db)):
    AuthService.logout(db, token)
    return {"message": "Logged out"}


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
