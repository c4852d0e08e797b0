"""Ticket lifecycle: creation, reads, diff-logged updates, comments, abandonment."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from sqlmodel import Session, select

from helpdesk.core.errors import NotFoundError
from helpdesk.core.time_utils import utcnow
from helpdesk.models import (
    Ticket,
    TicketHistoryAction,
    TicketModule,
    TicketPriority,
    TicketStatus,
    User,
)
from helpdesk.schemas.ticket import (
    AttachmentRead,
    HistoryEntryRead,
    TicketDetailRead,
    TicketRead,
    UserRef,
    UserRoleRef,
)
from helpdesk.services.sequence import TICKET_SEQUENCE, next_value
from helpdesk.services.ticket_workflow import TicketStateMachine, compute_sla_due_date

logger = logging.getLogger(__name__)

DEFAULT_ABANDON_JUSTIFICATION = "Deletion requested"


def _id_or_none(value: UUID | None) -> str | None:
    return None if value is None else str(value)


@dataclass(slots=True)
class TicketService:
    """Orchestrates the sequence generator and ticket store for one request."""

    session: Session

    def create_ticket(
        self,
        *,
        requester_id: UUID,
        module: TicketModule | str,
        description: str,
        priority: TicketPriority | str = TicketPriority.MEDIUM,
        assignee_id: UUID | None = None,
        tags: Iterable[str] | None = None,
    ) -> Ticket:
        self._require_user(requester_id, "Requester not found")
        if assignee_id is not None:
            self._require_user(assignee_id, "Assignee not found")

        priority = TicketPriority(priority)
        sequential_id = next_value(self.session, TICKET_SEQUENCE)
        now = utcnow()
        ticket = Ticket(
            sequential_id=sequential_id,
            requester_id=requester_id,
            assignee_id=assignee_id,
            priority=priority.value,
            sla_due_date=compute_sla_due_date(priority, now),
            module=TicketModule(module).value,
            status=TicketStateMachine.initial_state().value,
            active_system=True,
            description=description,
            tags=list(tags or []),
            created_at=now,
            updated_at=now,
        )
        # The "ticket created" history entry is appended by the flush hook.
        self.session.add(ticket)
        self.session.commit()
        self.session.refresh(ticket)
        logger.info("Created ticket #%s (%s) for requester %s", ticket.sequential_id, ticket.id, requester_id)
        return ticket

    def list_tickets(self) -> list[Ticket]:
        statement = select(Ticket).order_by(Ticket.created_at.desc(), Ticket.sequential_id.desc())
        return list(self.session.exec(statement).all())

    def get_ticket(self, ticket_id: UUID) -> Ticket:
        ticket = self.session.get(Ticket, ticket_id)
        if ticket is None:
            raise NotFoundError("Ticket not found", detail=f"Ticket {ticket_id} not found")
        return ticket

    def update_ticket(self, ticket_id: UUID, changes: Mapping[str, Any], *, actor_id: UUID) -> Ticket:
        """Apply a partial update and log one history entry for it.

        ``changes`` holds only the fields the caller sent. Assignee, priority,
        module and status are compared with their current values and each
        real change is recorded as ``<field>_previous`` / ``<field>_new``.
        Description, tags and the active-system flag are applied without
        being logged. A history entry is appended when something was logged
        or a comment was supplied.
        """
        ticket = self.get_ticket(ticket_id)
        details: dict[str, Any] = {}
        action = TicketHistoryAction.UPDATED
        comment = changes.get("comment")
        justification = changes.get("justification")

        if "assignee_id" in changes:
            new_assignee = changes["assignee_id"]
            if new_assignee is not None:
                self._require_user(new_assignee, "Assignee not found")
            if ticket.assignee_id != new_assignee:
                details["assignee_previous"] = _id_or_none(ticket.assignee_id)
                details["assignee_new"] = _id_or_none(new_assignee)
                action += " " + TicketHistoryAction.ASSIGNEE_CHANGED
                ticket.assignee_id = new_assignee

        if changes.get("priority") is not None:
            new_priority = TicketPriority(changes["priority"]).value
            if ticket.priority != new_priority:
                details["priority_previous"] = ticket.priority
                details["priority_new"] = new_priority
                action += " " + TicketHistoryAction.PRIORITY_CHANGED
                ticket.priority = new_priority
                ticket.sla_due_date = compute_sla_due_date(new_priority, ticket.created_at)

        if changes.get("module") is not None:
            new_module = TicketModule(changes["module"]).value
            if ticket.module != new_module:
                details["module_previous"] = ticket.module
                details["module_new"] = new_module
                action += " " + TicketHistoryAction.MODULE_CHANGED
                ticket.module = new_module

        if changes.get("status") is not None:
            new_status = TicketStatus(changes["status"]).value
            if ticket.status != new_status:
                self._check_transition(ticket, new_status, justification)
                details["status_previous"] = ticket.status
                details["status_new"] = new_status
                action += " " + TicketHistoryAction.STATUS_CHANGED.format(status=new_status)
                ticket.status = new_status

        if changes.get("description") is not None:
            ticket.description = changes["description"]
        if changes.get("tags") is not None:
            ticket.tags = list(changes["tags"])
        if changes.get("active_system") is not None:
            ticket.active_system = changes["active_system"]

        if details or comment:
            ticket.record(
                user_id=actor_id,
                action=action,
                details=details,
                justification=comment or justification,
            )

        self.session.add(ticket)
        self.session.commit()
        self.session.refresh(ticket)
        return ticket

    def add_comment(self, ticket_id: UUID, *, actor_id: UUID, comment: str, public: bool) -> Ticket:
        ticket = self.get_ticket(ticket_id)
        action = (
            TicketHistoryAction.PUBLIC_COMMENT_ADDED
            if public
            else TicketHistoryAction.INTERNAL_COMMENT_ADDED
        )
        ticket.record(user_id=actor_id, action=action, details={"comment": comment})
        self.session.add(ticket)
        self.session.commit()
        self.session.refresh(ticket)
        return ticket

    def abandon_ticket(self, ticket_id: UUID, *, actor_id: UUID, justification: str | None = None) -> bool:
        """Mark a ticket Abandoned; tickets are never physically deleted.

        Returns ``False`` when the ticket was already Abandoned, in which
        case nothing is written.
        """
        ticket = self.get_ticket(ticket_id)
        if ticket.status == TicketStatus.ABANDONED.value:
            return False

        ticket.status = TicketStatus.ABANDONED.value
        ticket.record(
            user_id=actor_id,
            action=TicketHistoryAction.ABANDONED,
            justification=justification or DEFAULT_ABANDON_JUSTIFICATION,
        )
        self.session.add(ticket)
        self.session.commit()
        logger.info("Ticket #%s marked as Abandoned by %s", ticket.sequential_id, actor_id)
        return True

    def present(self, ticket: Ticket, *, with_roles: bool = False) -> TicketRead:
        """Build the API view of a ticket with user references resolved.

        With ``with_roles`` the result is a ``TicketDetailRead`` whose
        requester and assignee also carry their role.
        """
        view = TicketDetailRead if with_roles else TicketRead
        return view(
            id=ticket.id,
            sequential_id=ticket.sequential_id,
            requester=self._user_ref(ticket.requester_id, with_role=with_roles),
            assignee=self._user_ref(ticket.assignee_id, with_role=with_roles),
            priority=ticket.priority,
            sla_due_date=ticket.sla_due_date,
            module=ticket.module,
            status=ticket.status,
            active_system=ticket.active_system,
            description=ticket.description,
            attachments=[AttachmentRead.model_validate(item) for item in ticket.attachments or []],
            tags=list(ticket.tags or []),
            history=[
                HistoryEntryRead(
                    user=self._user_ref(entry.user_id),
                    action=entry.action,
                    details=entry.details,
                    justification=entry.justification,
                    created_at=entry.created_at,
                )
                for entry in ticket.history
            ],
            created_at=ticket.created_at,
            updated_at=ticket.updated_at,
        )

    def _require_user(self, user_id: UUID, message: str) -> User:
        user = self.session.get(User, user_id)
        if user is None:
            raise NotFoundError(message, detail=f"User {user_id} not found")
        return user

    def _user_ref(self, user_id: UUID | None, *, with_role: bool = False) -> UserRef | None:
        if user_id is None:
            return None
        user = self.session.get(User, user_id)
        if user is None:
            return None
        ref = {"id": user.id, "name": user.name, "email": user.email}
        if with_role:
            return UserRoleRef(role=user.role, **ref)
        return UserRef(**ref)

    @staticmethod
    def _check_transition(ticket: Ticket, new_status: str, justification: str | None) -> None:
        # Observed only: the workflow does not reject these yet.
        if not TicketStateMachine.can_transition(ticket.status, new_status):
            logger.warning(
                "Ticket #%s moved outside the workflow: %s -> %s",
                ticket.sequential_id,
                ticket.status,
                new_status,
            )
        if TicketStateMachine.is_terminal(new_status) and not justification:
            logger.warning(
                "Ticket #%s moved to %s without a justification",
                ticket.sequential_id,
                new_status,
            )
