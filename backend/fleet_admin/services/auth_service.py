import logging
from datetime import datetime, timedelta, timezone
from typing import Tuple

from sqlalchemy.orm import Session

from fleet_admin.config import get_settings
from fleet_admin.models import User, UserRole, AuthSession
from fleet_admin.repositories import UserRepository
from fleet_admin.security import generate_token, hash_token, verify_password
from fleet_admin.services.exceptions import AuthenticationError, PermissionDeniedError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    # Stored naive; SQLite drops tzinfo
    return datetime.now(timezone.utc).replace(tzinfo=None)


class AuthService:
    """Login with email or national id, bearer sessions kept in auth_sessions."""

    @staticmethod
    def login(db: Session, identifier: str, password: str) -> Tuple[str, AuthSession]:
        user = UserRepository.get_by_identifier(db, identifier)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt for %r", identifier)
            raise AuthenticationError("Invalid credentials")
        if not user.is_active:
            logger.warning("Login attempt on disabled account %s", user.id)
            raise PermissionDeniedError("User account is disabled")

        now = _utcnow()
        token = generate_token()
        session = AuthSession(
            user_id=user.id,
            token_hash=hash_token(token),
            created_at=now,
            expires_at=now + timedelta(hours=get_settings().token_ttl_hours)
        )
        UserRepository.purge_expired_sessions(db, now)
        UserRepository.add_session(db, session)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(session)
        logger.info("User %s logged in", user.id)
        return token, session

    @staticmethod
    def logout(db: Session, token: str) -> None:
        session = UserRepository.get_session_by_hash(db, hash_token(token))
        if session is None:
            return
        UserRepository.delete_session(db, session)
        db.commit()

    @staticmethod
    def resolve_user(db: Session, token: str) -> User:
        session = UserRepository.get_session_by_hash(db, hash_token(token))
        if session is None:
            raise AuthenticationError("Invalid or expired token")
        if session.expires_at <= _utcnow():
            UserRepository.delete_session(db, session)
            db.commit()
            raise AuthenticationError("Invalid or expired token")
        user = session.user
        if user is None or not user.is_active:
            raise AuthenticationError("Invalid or expired token")
        return user

    @staticmethod
    def ensure_admin(user: User) -> User:
        if user.role != UserRole.ADMIN:
            raise PermissionDeniedError("Admin access required")
        return user
