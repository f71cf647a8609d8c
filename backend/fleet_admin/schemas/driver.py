from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime
from fleet_admin.models.driver import DriverStatus
from fleet_admin.schemas.user import normalize_email, check_password


class DriverBase(BaseModel):
    full_name: str
    license_number: str
    phone: Optional[str] = None

    @field_validator('full_name', 'license_number')
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('Field is required')
        return v.strip()


class DriverCreate(DriverBase):
    national_id: str
    email: str
    password: Optional[str] = None
    status: DriverStatus = DriverStatus.ACTIVE

    @field_validator('national_id')
    @classmethod
    def national_id_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('National id is required')
        return v.strip()

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator('password')
    @classmethod
    def validate_password(cls, v: Optional[str]) -> Optional[str]:
        return check_password(v) if v is not None else v


class DriverUpdate(BaseModel):
    full_name: Optional[str] = None
    license_number: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[DriverStatus] = None

    @field_validator('full_name', 'license_number')
    @classmethod
    def not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError('Field cannot be empty')
        return v.strip() if v else v


class DriverResponse(DriverBase):
    id: int
    national_id: str
    status: DriverStatus
    user_id: int
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
