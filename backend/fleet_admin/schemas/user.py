from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime
from fleet_admin.models.user import UserRole

MIN_PASSWORD_LENGTH = 6


def normalize_email(value: str) -> str:
    normalized = value.strip().lower()
    local, _, domain = normalized.partition("@")
    if not local or not domain or "@" in domain:
        raise ValueError("A valid email is required")
    return normalized


def check_password(value: str) -> str:
    if len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    return value


class UserCreate(BaseModel):
    email: str
    national_id: str
    password: str
    role: UserRole = UserRole.DRIVER

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator('national_id')
    @classmethod
    def national_id_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('National id is required')
        return v.strip()

    @field_validator('password')
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password(v)


class UserUpdate(BaseModel):
    email: Optional[str] = None
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None
    password: Optional[str] = None

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        return normalize_email(v) if v is not None else v

    @field_validator('password')
    @classmethod
    def validate_password(cls, v: Optional[str]) -> Optional[str]:
        return check_password(v) if v is not None else v


class UserResponse(BaseModel):
    id: int
    email: str
    national_id: str
    role: UserRole
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
