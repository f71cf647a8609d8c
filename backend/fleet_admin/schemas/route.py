from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime


class RouteBase(BaseModel):
    name: str
    origin: str
    destination: str
    distance_km: Optional[float] = None
    description: Optional[str] = None
    is_active: bool = True

    @field_validator('name')
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('Route name is required')
        return v.strip()

    @field_validator('distance_km')
    @classmethod
    def distance_positive(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError('Distance must be positive')
        return v


class RouteCreate(RouteBase):
    pass


class RouteUpdate(BaseModel):
    name: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    distance_km: Optional[float] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator('name')
    @classmethod
    def name_not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError('Route name cannot be empty')
        return v.strip() if v else v


class RouteResponse(RouteBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
