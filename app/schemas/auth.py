"""
Authentication schemas
"""
from pydantic import BaseModel, Field

from app.schemas.user import UserDetailOut


class LoginRequest(BaseModel):
    """Login request schema"""
    email: str = Field(..., min_length=3, description="User email")
    password: str = Field(..., min_length=1, description="Password")


class TokenResponse(BaseModel):
    """Token response schema"""
    access_token: str
    token_type: str = "bearer"
    user: UserDetailOut
