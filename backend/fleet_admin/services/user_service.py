import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from fleet_admin.models import User, UserRole
from fleet_admin.repositories import UserRepository, DriverRepository
from fleet_admin.schemas.user import UserCreate, UserUpdate
from fleet_admin.security import hash_password
from fleet_admin.services.exceptions import NotFoundError, ConflictError, BusinessRuleError

logger = logging.getLogger(__name__)


class UserService:

    @staticmethod
    def list_users(
        db: Session,
        role: Optional[UserRole] = None,
        is_active: Optional[bool] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[User]:
        return UserRepository.list(db, role=role, is_active=is_active, skip=skip, limit=limit)

    @staticmethod
    def get_user(db: Session, user_id: int) -> User:
        user = UserRepository.get(db, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def ensure_unique(db: Session, email: Optional[str], national_id: Optional[str], exclude_id: Optional[int] = None):
        if email:
            existing = UserRepository.get_by_email(db, email)
            if existing and existing.id != exclude_id:
                raise ConflictError("A user with this email already exists")
        if national_id:
            existing = UserRepository.get_by_national_id(db, national_id)
            if existing and existing.id != exclude_id:
                raise ConflictError("A user with this national id already exists")

    @staticmethod
    def build_user(db: Session, email: str, national_id: str, password: str, role: UserRole) -> User:
        """Validates uniqueness and adds the user to the session without committing."""
        UserService.ensure_unique(db, email, national_id)
        user = User(
            email=email,
            national_id=national_id,
            password_hash=hash_password(password),
            role=role,
            is_active=True
        )
        return UserRepository.add(db, user)

    @staticmethod
    def create_user(db: Session, payload: UserCreate) -> User:
        user = UserService.build_user(db, payload.email, payload.national_id, payload.password, payload.role)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(user)
        logger.info("Created %s user %s", user.role.value, user.id)
        return user

    @staticmethod
    def _ensure_admin_remains(db: Session, user: User, payload: UserUpdate) -> None:
        if user.role != UserRole.ADMIN or not user.is_active:
            return
        next_role = payload.role if payload.role is not None else user.role
        next_active = payload.is_active if payload.is_active is not None else user.is_active
        if next_role == UserRole.ADMIN and next_active:
            return
        if UserRepository.count_active_admins(db) <= 1:
            raise BusinessRuleError("At least one active admin must remain")

    @staticmethod
    def update_user(db: Session, user_id: int, payload: UserUpdate) -> User:
        user = UserService.get_user(db, user_id)
        UserService.ensure_unique(db, payload.email, None, exclude_id=user.id)
        UserService._ensure_admin_remains(db, user, payload)

        if payload.role is not None and payload.role != user.role and user.driver is not None:
            raise BusinessRuleError("Cannot change the role of a user linked to a driver profile")

        update_data = payload.model_dump(exclude_unset=True)
        password = update_data.pop("password", None)
        for key, value in update_data.items():
            if value is not None:
                setattr(user, key, value)
        if password:
            user.password_hash = hash_password(password)
            # Existing sessions stop working after a password reset
            user.sessions.clear()

        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(user)
        return user

    @staticmethod
    def delete_user(db: Session, user_id: int) -> None:
        user = UserService.get_user(db, user_id)
        if DriverRepository.get_by_user_id(db, user.id) is not None:
            raise BusinessRuleError("User is linked to a driver profile; delete the driver instead")
        if user.role == UserRole.ADMIN and user.is_active and UserRepository.count_active_admins(db) <= 1:
            raise BusinessRuleError("At least one active admin must remain")
        UserRepository.delete(db, user)
        db.commit()
        logger.info("Deleted user %s", user_id)
