from pydantic import BaseModel
from datetime import datetime
from fleet_admin.schemas.user import UserResponse


class LoginRequest(BaseModel):
    identifier: str  # email or national id
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserResponse
