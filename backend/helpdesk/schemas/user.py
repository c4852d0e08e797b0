from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field

from helpdesk.models.user import UserRole
from helpdesk.schemas.base import APIModel


class UserCreate(APIModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    role: UserRole = UserRole.OPERATOR


class UserLogin(APIModel):
    # Not an EmailStr: a malformed address is just another failed login.
    email: str
    password: str


class UserRead(APIModel):
    id: UUID
    name: str
    email: str
    role: UserRole
    created_at: datetime


class AuthResponse(APIModel):
    id: UUID
    name: str
    email: str
    role: UserRole
    token: str
