from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from fleet_admin.database import get_db
from fleet_admin.models import User
from fleet_admin.services.auth_service import AuthService
from fleet_admin.services.exceptions import (
    NotFoundError, ConflictError, AuthenticationError, PermissionDeniedError
)

bearer_scheme = HTTPBearer(auto_error=False)


def http_error(exc: Exception) -> HTTPException:
    """Translate a service-layer error into the matching HTTP response."""
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, AuthenticationError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"}
        )
    if isinstance(exc, PermissionDeniedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> str:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise http_error(AuthenticationError("Authentication required"))
    return credentials.credentials


def get_current_user(token: str = Depends(get_bearer_token), db: Session = Depends(get_db)) -> User:
    try:
        return AuthService.resolve_user(db, token)
    except AuthenticationError as e:
        raise http_error(e)


def get_admin_user(current_user: User = Depends(get_current_user)) -> User:
    try:
        return AuthService.ensure_admin(current_user)
    except PermissionDeniedError as e:
        raise http_error(e)
