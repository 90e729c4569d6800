"""Pydantic schemas for User and Auth."""

from pydantic import BaseModel, EmailStr, Field, StringConstraints, field_validator, validate_email
from pydantic_core import PydanticCustomError
from datetime import datetime
from typing import Annotated, Optional

UserName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


class UserCreate(BaseModel):
    name: UserName
    email: EmailStr
    # Passwords are taken verbatim, never stripped
    password: str = Field(..., min_length=6, max_length=72)


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserUpdate(BaseModel):
    name: UserName


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        # Same normalization EmailStr applies at registration; malformed
        # addresses pass through and fail as bad credentials
        try:
            return validate_email(v)[1]
        except PydanticCustomError:
            return v


class UserResponse(BaseModel):
    message: Optional[str] = None
    user: UserRead
