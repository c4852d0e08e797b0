from .ticket import (
    AttachmentRead,
    HistoryEntryRead,
    MessageResponse,
    TicketAbandon,
    TicketCommentCreate,
    TicketCreate,
    TicketDetailRead,
    TicketRead,
    TicketUpdate,
    UserRef,
    UserRoleRef,
)
from .user import AuthResponse, UserCreate, UserLogin, UserRead

__all__ = [
    "AttachmentRead",
    "AuthResponse",
    "HistoryEntryRead",
    "MessageResponse",
    "TicketAbandon",
    "TicketCommentCreate",
    "TicketCreate",
    "TicketDetailRead",
    "TicketRead",
    "TicketUpdate",
    "UserCreate",
    "UserLogin",
    "UserRead",
    "UserRef",
    "UserRoleRef",
]
