from pydantic import EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from schemas.base import CamelModel


# Public signup request (POST /pending-registrations)
class RegistrationCreate(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    requested_role: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, value: str) -> str:
        return value.lower()


class RegistrationResponse(CamelModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    requested_role: str
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Confirmation returned when a registration is rejected
class RegistrationDeleted(CamelModel):
    message: str
    id: str
