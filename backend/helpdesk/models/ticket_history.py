from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, event
from sqlmodel import Field, Relationship, SQLModel

from helpdesk.core.time_utils import utcnow
from helpdesk.models.types import UTCDateTime

if TYPE_CHECKING:
    from helpdesk.models.ticket import Ticket


class TicketHistoryAction:
    """Action texts written to a ticket's history."""

    CREATED = "Ticket created"
    UPDATED = "Ticket updated."
    ASSIGNEE_CHANGED = "Assignee changed."
    PRIORITY_CHANGED = "Priority changed."
    MODULE_CHANGED = "Module changed."
    STATUS_CHANGED = "Status changed to {status}."
    PUBLIC_COMMENT_ADDED = "Public comment added"
    INTERNAL_COMMENT_ADDED = "Internal comment added"
    ABANDONED = "Ticket marked as Abandoned"


class TicketHistory(SQLModel, table=True):
    """One append-only audit entry owned by a ticket."""

    __tablename__ = "ticket_history"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    ticket_id: UUID = Field(foreign_key="tickets.id", index=True)
    # Append order within the ticket; not unique, concurrent writers may share one.
    position: int = Field(nullable=False)
    user_id: Optional[UUID] = Field(default=None, foreign_key="users.id", nullable=True, index=True)
    action: str = Field(max_length=500)
    details: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    justification: Optional[str] = Field(default=None, max_length=2000)
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCDateTime, nullable=False, index=True))

    ticket: Optional["Ticket"] = Relationship(back_populates="history")


@event.listens_for(TicketHistory, "before_update")
def _reject_history_update(mapper, connection, target: TicketHistory) -> None:
    raise RuntimeError(f"History entry {target.id} is append-only and cannot be modified")
