from pydantic import field_validator
from datetime import datetime
from typing import Optional

from .base import CamelModel


class UserCreate(CamelModel):
    email: str
    password: str
    name: Optional[str] = None

    @field_validator("email", "password")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field cannot be empty")
        return v


class UserLogin(CamelModel):
    email: str
    password: str


class User(CamelModel):
    """Public view of a user; never carries the password hash."""

    id: int
    email: str
    name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class AuthResponse(CamelModel):
    user: User
    token: str
