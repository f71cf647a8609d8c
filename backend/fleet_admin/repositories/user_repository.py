"""User and auth-session persistence."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from fleet_admin.models import User, UserRole, AuthSession


class UserRepository:
    """Queries over the users and auth_sessions tables."""

    @staticmethod
    def get(db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email.strip().lower()).first()

    @staticmethod
    def get_by_national_id(db: Session, national_id: str) -> Optional[User]:
        return db.query(User).filter(User.national_id == national_id).first()

    @staticmethod
    def get_by_identifier(db: Session, identifier: str) -> Optional[User]:
        value = identifier.strip()
        return db.query(User).filter(
            or_(User.email == value.lower(), User.national_id == value)
        ).first()

    @staticmethod
    def list(
        db: Session,
        role: Optional[UserRole] = None,
        is_active: Optional[bool] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[User]:
        query = db.query(User)
        if role is not None:
            query = query.filter(User.role == role)
        if is_active is not None:
            query = query.filter(User.is_active == is_active)
        return query.order_by(User.id).offset(skip).limit(limit).all()

    @staticmethod
    def count_active_admins(db: Session) -> int:
        return db.query(func.count(User.id)).filter(
            User.role == UserRole.ADMIN,
            User.is_active == True
        ).scalar() or 0

    @staticmethod
    def add(db: Session, user: User) -> User:
        db.add(user)
        db.flush()
        return user

    @staticmethod
    def delete(db: Session, user: User) -> None:
        db.delete(user)
        db.flush()

    @staticmethod
    def add_session(db: Session, session: AuthSession) -> AuthSession:
        db.add(session)
        db.flush()
        return session

    @staticmethod
    def get_session_by_hash(db: Session, token_hash: str) -> Optional[AuthSession]:
        return db.query(AuthSession).filter(AuthSession.token_hash == token_hash).first()

    @staticmethod
    def delete_session(db: Session, session: AuthSession) -> None:
        db.delete(session)
        db.flush()

    @staticmethod
    def purge_expired_sessions(db: Session, now: datetime) -> int:
        return db.query(AuthSession).filter(AuthSession.expires_at <= now).delete(
            synchronize_session=False
        )
