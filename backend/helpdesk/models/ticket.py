from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, event
from sqlalchemy.orm import Session as OrmSession
from sqlmodel import Field, Relationship, SQLModel

from helpdesk.core.time_utils import utcnow
from helpdesk.models.ticket_history import TicketHistory, TicketHistoryAction
from helpdesk.models.types import UTCDateTime


class TicketPriority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class TicketModule(str, Enum):
    SYSTEM = "System"
    FINANCIAL = "Financial"
    SUPPORT = "Support"
    ADMINISTRATIVE = "Administrative"
    OTHER = "Other"


class TicketStatus(str, Enum):
    TO_START = "To Start"
    STARTED = "Started"
    WAITING_A = "Waiting-A"
    WAITING_B = "Waiting-B"
    COMPLETED = "Completed"
    ABANDONED = "Abandoned"


class Ticket(SQLModel, table=True):
    """Represents a support ticket together with its audit trail."""

    __tablename__ = "tickets"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    sequential_id: int = Field(unique=True, index=True, nullable=False)
    requester_id: UUID = Field(foreign_key="users.id", index=True)
    assignee_id: Optional[UUID] = Field(default=None, foreign_key="users.id", nullable=True, index=True)
    priority: str = Field(default=TicketPriority.MEDIUM.value, index=True)
    sla_due_date: Optional[datetime] = Field(default=None, sa_column=Column(UTCDateTime, nullable=True))
    module: str = Field(index=True)
    status: str = Field(default=TicketStatus.TO_START.value, index=True)
    active_system: bool = Field(default=True)
    description: str = Field(max_length=5000)
    attachments: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCDateTime, nullable=False, index=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCDateTime, nullable=False))

    history: List[TicketHistory] = Relationship(
        back_populates="ticket",
        sa_relationship_kwargs={
            "order_by": [TicketHistory.created_at, TicketHistory.position],
            "cascade": "all, delete-orphan",
            "lazy": "selectin",
        },
    )

    def record(
        self,
        *,
        user_id: Optional[UUID],
        action: str,
        details: Optional[Dict[str, Any]] = None,
        justification: Optional[str] = None,
    ) -> TicketHistory:
        """Append a history entry. The only way entries get onto a ticket."""
        entry = TicketHistory(
            position=len(self.history),
            user_id=user_id,
            action=action,
            details=details or None,
            justification=justification,
        )
        self.history.append(entry)
        return entry

    def touch(self):
        """Updates the updated_at timestamp."""
        self.updated_at = utcnow()


@event.listens_for(OrmSession, "before_flush")
def _ticket_save_hooks(session: OrmSession, flush_context, instances) -> None:
    for obj in list(session.new):
        if isinstance(obj, Ticket) and not obj.history:
            obj.record(
                user_id=obj.requester_id,
                action=TicketHistoryAction.CREATED,
                details={"status": obj.status, "priority": obj.priority, "module": obj.module},
            )
    for obj in list(session.dirty):
        if isinstance(obj, Ticket) and session.is_modified(obj):
            obj.touch()
