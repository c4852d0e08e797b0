from __future__ import annotations

from sqlmodel import Field, SQLModel


class Counter(SQLModel, table=True):
    """Named monotonic sequence, e.g. ``ticketId``."""

    __tablename__ = "counters"

    name: str = Field(primary_key=True, max_length=100)
    value: int = Field(default=0, nullable=False)
