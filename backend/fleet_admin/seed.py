"""Initial accounts created on startup."""

import logging

from sqlalchemy.orm import Session

from fleet_admin.config import Settings
from fleet_admin.models import UserRole
from fleet_admin.repositories import UserRepository, DriverRepository
from fleet_admin.schemas.driver import DriverCreate
from fleet_admin.services.driver_service import DriverService
from fleet_admin.services.user_service import UserService

logger = logging.getLogger(__name__)

DEMO_DRIVER = {
    "full_name": "Juan Pérez González",
    "national_id": "1144199553",
    "email": "driver@fleet.local",
    "license_number": "C2-12345678",
    "phone": "3001234567",
}


def seed_admin(db: Session, settings: Settings) -> bool:
    if not settings.bootstrap_admin_password:
        return False
    email = settings.bootstrap_admin_email.strip().lower()
    if UserRepository.get_by_email(db, email) or UserRepository.get_by_national_id(db, settings.bootstrap_admin_national_id):
        return False
    UserService.build_user(
        db, email, settings.bootstrap_admin_national_id, settings.bootstrap_admin_password, UserRole.ADMIN
    )
    db.commit()
    logger.info("Bootstrap admin %s created", email)
    return True


def seed_demo_driver(db: Session, settings: Settings) -> bool:
    if not settings.seed_demo_driver:
        return False
    if DriverRepository.get_by_national_id(db, DEMO_DRIVER["national_id"]) or UserRepository.get_by_email(db, DEMO_DRIVER["email"]):
        return False
    DriverService.create_driver(db, DriverCreate(**DEMO_DRIVER))
    logger.info("Demo driver %s created", DEMO_DRIVER["national_id"])
    return True


def seed_initial_data(db: Session, settings: Settings) -> None:
    seed_admin(db, settings)
    seed_demo_driver(db, settings)
