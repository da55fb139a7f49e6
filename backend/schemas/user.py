from pydantic import EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from schemas.base import CamelModel

# Shared properties for user models
class UserBase(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, value: str) -> str:
        return value.lower()

# Schema for direct user creation (POST /users)
class UserCreate(UserBase):
    role: Optional[str] = None
    avatar: Optional[str] = None
    password: Optional[str] = Field(None, min_length=1)

# Output schema for user profile details (the password hash is never exposed)
class UserResponse(CamelModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    role: str
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# Schema for user authentication credentials
class UserLogin(CamelModel):
    email: EmailStr
    password: Optional[str] = None

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, value: str) -> str:
        return value.lower()

# Login response: profile plus bearer token
class LoginResponse(CamelModel):
    success: bool = True
    user: UserResponse
    token: str
    token_type: str = "bearer"
