from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import Field

from helpdesk.models.ticket import TicketModule, TicketPriority, TicketStatus
from helpdesk.models.user import UserRole
from helpdesk.schemas.base import APIModel


class UserRef(APIModel):
    """Presentation of a referenced user."""

    id: UUID
    name: str
    email: str


class UserRoleRef(UserRef):
    role: UserRole


class AttachmentRead(APIModel):
    file_name: Optional[str] = None
    file_path: Optional[str] = None
    file_type: Optional[str] = None
    uploaded_at: Optional[datetime] = None


class HistoryEntryRead(APIModel):
    user: Optional[UserRef] = None
    action: str
    details: Optional[dict[str, Any]] = None
    justification: Optional[str] = None
    created_at: datetime


class TicketCreate(APIModel):
    # Defaults to the authenticated caller when omitted.
    requester_id: Optional[UUID] = None
    assignee_id: Optional[UUID] = None
    priority: TicketPriority = TicketPriority.MEDIUM
    module: TicketModule
    description: str = Field(min_length=1, max_length=5000)
    tags: list[str] = Field(default_factory=list)


class TicketUpdate(APIModel):
    """Partial update.

    Only keys present in the request body are applied; an explicit
    ``"assigneeId": null`` clears the assignee.
    """

    assignee_id: Optional[UUID] = None
    priority: Optional[TicketPriority] = None
    module: Optional[TicketModule] = None
    status: Optional[TicketStatus] = None
    description: Optional[str] = Field(None, min_length=1, max_length=5000)
    tags: Optional[list[str]] = None
    active_system: Optional[bool] = None
    comment: Optional[str] = None
    justification: Optional[str] = None


class TicketCommentCreate(APIModel):
    comment: str = Field(min_length=1, max_length=2000)
    public: bool = False


class TicketAbandon(APIModel):
    justification: Optional[str] = None


class TicketRead(APIModel):
    id: UUID
    sequential_id: int
    requester: Optional[UserRef] = None
    assignee: Optional[UserRef] = None
    priority: TicketPriority
    sla_due_date: Optional[datetime] = None
    module: TicketModule
    status: TicketStatus
    active_system: bool
    description: str
    attachments: list[AttachmentRead] = []
    tags: list[str] = []
    history: list[HistoryEntryRead] = []
    created_at: datetime
    updated_at: datetime


class TicketDetailRead(TicketRead):
    """Single-ticket view: requester and assignee also carry their role."""

    requester: Optional[UserRoleRef] = None
    assignee: Optional[UserRoleRef] = None


class MessageResponse(APIModel):
    message: str
    changed: bool = True
