from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from fleet_admin.models import Driver, DriverStatus


class DriverRepository:

    @staticmethod
    def get(db: Session, driver_id: int) -> Optional[Driver]:
        return db.query(Driver).options(joinedload(Driver.user)).filter(Driver.id == driver_id).first()

    @staticmethod
    def get_by_national_id(db: Session, national_id: str) -> Optional[Driver]:
        return db.query(Driver).filter(Driver.national_id == national_id).first()

    @staticmethod
    def get_by_user_id(db: Session, user_id: int) -> Optional[Driver]:
        return db.query(Driver).filter(Driver.user_id == user_id).first()

    @staticmethod
    def list(
        db: Session,
        status: Optional[DriverStatus] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Driver]:
        query = db.query(Driver).options(joinedload(Driver.user))
        if status is not None:
            query = query.filter(Driver.status == status)
        return query.order_by(Driver.full_name).offset(skip).limit(limit).all()

    @staticmethod
    def add(db: Session, driver: Driver) -> Driver:
        db.add(driver)
        db.flush()
        return driver

    @staticmethod
    def delete(db: Session, driver: Driver) -> None:
        db.delete(driver)
        db.flush()
