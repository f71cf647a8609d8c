import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from fleet_admin.config import get_settings
from fleet_admin.models import Driver, DriverStatus, User, UserRole
from fleet_admin.repositories import DriverRepository, AssignmentRepository, UserRepository
from fleet_admin.schemas.driver import DriverCreate, DriverUpdate
from fleet_admin.services.exceptions import NotFoundError, ConflictError, BusinessRuleError
from fleet_admin.services.user_service import UserService

logger = logging.getLogger(__name__)


class DriverService:
    """
    Driver profiles. Every driver owns a DRIVER user account created
    together with the profile, so the driver can log in and see their
    own assignments.
    """

    @staticmethod
    def list_drivers(
        db: Session,
        status: Optional[DriverStatus] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Driver]:
        return DriverRepository.list(db, status=status, skip=skip, limit=limit)

    @staticmethod
    def get_driver(db: Session, driver_id: int) -> Driver:
        driver = DriverRepository.get(db, driver_id)
        if not driver:
            raise NotFoundError("Driver not found")
        return driver

    @staticmethod
    def get_driver_for_user(db: Session, user: User) -> Driver:
        driver = DriverRepository.get_by_user_id(db, user.id)
        if not driver:
            raise NotFoundError("No driver profile is linked to this account")
        return driver

    @staticmethod
    def create_driver(db: Session, payload: DriverCreate) -> Driver:
        if DriverRepository.get_by_national_id(db, payload.national_id):
            raise ConflictError("A driver with this national id already exists")

        password = payload.password or get_settings().default_driver_password
        try:
            user = UserService.build_user(db, payload.email, payload.national_id, password, UserRole.DRIVER)
            driver = Driver(
                full_name=payload.full_name,
                national_id=payload.national_id,
                license_number=payload.license_number,
                phone=payload.phone,
                status=payload.status,
                user_id=user.id
            )
            DriverRepository.add(db, driver)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(driver)
        logger.info("Created driver %s with user %s", driver.id, user.id)
        return driver

    @staticmethod
    def update_driver(db: Session, driver_id: int, payload: DriverUpdate) -> Driver:
        driver = DriverService.get_driver(db, driver_id)
        for key, value in payload.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(driver, key, value)
        db.commit()
        db.refresh(driver)
        return driver

    @staticmethod
    def delete_driver(db: Session, driver_id: int) -> None:
        driver = DriverService.get_driver(db, driver_id)
        active = AssignmentRepository.count_active_for_driver(db, driver.id)
        if active > 0:
            raise BusinessRuleError(
                f"Cannot delete driver: {active} active assignment(s). Finish or cancel them first."
            )
        user = driver.user
        try:
            DriverRepository.delete(db, driver)
            if user is not None:
                UserRepository.delete(db, user)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info("Deleted driver %s", driver_id)
