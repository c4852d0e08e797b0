from __future__ import annotations

from datetime import datetime, timedelta

from helpdesk.models import TicketPriority, TicketStatus

SLA_OFFSETS: dict[TicketPriority, timedelta] = {
    TicketPriority.HIGH: timedelta(days=1),
    TicketPriority.MEDIUM: timedelta(days=3),
    TicketPriority.LOW: timedelta(days=7),
}


def compute_sla_due_date(priority: TicketPriority | str, created_at: datetime) -> datetime:
    """SLA deadline: always relative to the ticket's creation time."""
    return created_at + SLA_OFFSETS[TicketPriority(priority)]


class TicketStateMachine:
    """Describe the ticket lifecycle transitions.

    ``To Start -> Started -> Waiting-A -> Waiting-B -> Completed``, with
    ``Abandoned`` reachable from every non-terminal state.
    """

    _TRANSITIONS: dict[TicketStatus, set[TicketStatus]] = {
        TicketStatus.TO_START: {TicketStatus.STARTED, TicketStatus.ABANDONED},
        TicketStatus.STARTED: {TicketStatus.WAITING_A, TicketStatus.ABANDONED},
        TicketStatus.WAITING_A: {TicketStatus.WAITING_B, TicketStatus.ABANDONED},
        TicketStatus.WAITING_B: {TicketStatus.COMPLETED, TicketStatus.ABANDONED},
        TicketStatus.COMPLETED: set(),
        TicketStatus.ABANDONED: set(),
    }

    _TERMINAL = {TicketStatus.COMPLETED, TicketStatus.ABANDONED}

    @classmethod
    def initial_state(cls) -> TicketStatus:
        return TicketStatus.TO_START

    @classmethod
    def is_terminal(cls, status: TicketStatus | str) -> bool:
        return TicketStatus(status) in cls._TERMINAL

    @classmethod
    def can_transition(cls, current: TicketStatus | str, new: TicketStatus | str) -> bool:
        current, new = TicketStatus(current), TicketStatus(new)
        if current == new:
            return True
        return new in cls._TRANSITIONS.get(current, set())
