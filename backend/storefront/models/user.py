from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class Role(str, Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UpdateProfileRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)


class AdminUpdateUserRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    role: Optional[Role] = None
    is_active: Optional[bool] = None


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: Role
    is_active: bool = True
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ActorSummary(BaseModel):
    """Audit projection of a user: never carries credentials."""
    id: str
    name: Optional[str] = None
    email: Optional[str] = None


class AuthResponse(BaseModel):
    success: bool = True
    message: str
    token: str
    token_type: str = "bearer"
    user: UserResponse


class UserEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    user: UserResponse


class UserListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[UserResponse]
