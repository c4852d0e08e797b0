from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import Column
from sqlmodel import Field, SQLModel

from helpdesk.core.time_utils import utcnow
from helpdesk.models.types import UTCDateTime


class UserRole(str, Enum):
    """Access levels a helpdesk user can hold."""

    ADMINISTRATOR = "Administrator"
    MANAGER = "Manager"
    OPERATOR = "Operator"


class User(SQLModel, table=True):
    """Helpdesk user record."""

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    name: str = Field(max_length=255)
    email: str = Field(index=True, unique=True, max_length=255)
    # Only ever holds a bcrypt hash; never part of a read schema.
    hashed_password: str = Field(max_length=255)
    role: str = Field(default=UserRole.OPERATOR.value, max_length=50)
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCDateTime, nullable=False))
