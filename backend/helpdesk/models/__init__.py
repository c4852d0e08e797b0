from .counter import Counter
from .ticket import Ticket, TicketModule, TicketPriority, TicketStatus
from .ticket_history import TicketHistory, TicketHistoryAction
from .user import User, UserRole

__all__ = [
    "Counter",
    "Ticket",
    "TicketHistory",
    "TicketHistoryAction",
    "TicketModule",
    "TicketPriority",
    "TicketStatus",
    "User",
    "UserRole",
]
