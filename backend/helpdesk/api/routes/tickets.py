from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, status

from helpdesk.api.deps import CurrentUser, TicketServiceDep, require_roles
from helpdesk.models import UserRole
from helpdesk.schemas import (
    MessageResponse,
    TicketAbandon,
    TicketCommentCreate,
    TicketCreate,
    TicketDetailRead,
    TicketRead,
    TicketUpdate,
)

# Roles allowed to abandon ("delete") a ticket.
ABANDON_ROLES = (UserRole.ADMINISTRATOR, UserRole.MANAGER)

router = APIRouter()


@router.post(
    "",
    response_model=TicketRead,
    status_code=status.HTTP_201_CREATED,
)
def create_ticket(
    payload: TicketCreate,
    service: TicketServiceDep,
    current_user: CurrentUser,
) -> TicketRead:
    """Create a new ticket."""
    ticket = service.create_ticket(
        requester_id=payload.requester_id or current_user.id,
        assignee_id=payload.assignee_id,
        priority=payload.priority,
        module=payload.module,
        description=payload.description,
        tags=payload.tags,
    )
    return service.present(ticket)


@router.get(
    "",
    response_model=List[TicketRead],
    status_code=status.HTTP_200_OK,
)
def list_tickets(service: TicketServiceDep, current_user: CurrentUser) -> List[TicketRead]:
    """Get all tickets, newest first."""
    return [service.present(ticket) for ticket in service.list_tickets()]


@router.get(
    "/{ticket_id}",
    response_model=TicketDetailRead,
    status_code=status.HTTP_200_OK,
)
def get_ticket(ticket_id: UUID, service: TicketServiceDep, current_user: CurrentUser) -> TicketDetailRead:
    """Get a specific ticket by ID, with requester and assignee roles."""
    return service.present(service.get_ticket(ticket_id), with_roles=True)


@router.put(
    "/{ticket_id}",
    response_model=TicketRead,
    status_code=status.HTTP_200_OK,
)
def update_ticket(
    ticket_id: UUID,
    ticket_update: TicketUpdate,
    service: TicketServiceDep,
    current_user: CurrentUser,
) -> TicketRead:
    """Update a ticket; only the fields present in the body are touched."""
    ticket = service.update_ticket(
        ticket_id,
        ticket_update.model_dump(exclude_unset=True),
        actor_id=current_user.id,
    )
    return service.present(ticket)


@router.delete(
    "/{ticket_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
)
def delete_ticket(
    ticket_id: UUID,
    service: TicketServiceDep,
    current_user: CurrentUser,
    payload: Optional[TicketAbandon] = Body(default=None),
    _: object = Depends(require_roles(*ABANDON_ROLES)),
) -> MessageResponse:
    """Mark a ticket as Abandoned. History is kept; nothing is deleted."""
    changed = service.abandon_ticket(
        ticket_id,
        actor_id=current_user.id,
        justification=payload.justification if payload else None,
    )
    if changed:
        return MessageResponse(message="Ticket marked as Abandoned", changed=True)
    return MessageResponse(message="Ticket is already Abandoned", changed=False)


@router.post(
    "/{ticket_id}/comment",
    response_model=TicketRead,
    status_code=status.HTTP_200_OK,
)
def add_comment(
    ticket_id: UUID,
    payload: TicketCommentCreate,
    service: TicketServiceDep,
    current_user: CurrentUser,
) -> TicketRead:
    """Add a public or internal comment to the ticket history."""
    ticket = service.add_comment(
        ticket_id,
        actor_id=current_user.id,
        comment=payload.comment,
        public=payload.public,
    )
    return service.present(ticket)
