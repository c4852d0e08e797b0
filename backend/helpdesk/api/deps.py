from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from helpdesk.core.errors import ForbiddenError
from helpdesk.core.security import verify_token
from helpdesk.db import SessionDep
from helpdesk.models import User, UserRole
from helpdesk.services.tickets import TicketService
from helpdesk.services.users import get_user

logger = logging.getLogger(__name__)

# auto_error is off so a missing or non-Bearer header is answered with 401.
bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    session: SessionDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
) -> User:
    """Resolve the bearer token in the Authorization header to a user."""
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Not authorized, no token")

    try:
        payload = verify_token(credentials.credentials, token_type="access")
        user_id = UUID(str(payload.get("sub")))
    except ValueError as exc:
        logger.warning("Token verification failed: %s", exc)
        raise _unauthorized("Not authorized, token failed") from None

    user = get_user(session, user_id)
    if user is None:
        raise _unauthorized("Not authorized, user not found")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def require_roles(*roles: UserRole) -> Callable[[User], User]:
    """Dependency factory ensuring the current user holds one of ``roles``."""

    allowed = {role.value for role in roles}

    def dependency(user: CurrentUser) -> User:
        if user.role not in allowed:
            raise ForbiddenError(
                f"User with role '{user.role}' is not allowed to access this resource. "
                f"Allowed roles: {', '.join(role.value for role in roles)}"
            )
        return user

    return dependency


def get_ticket_service(session: SessionDep) -> TicketService:
    return TicketService(session)


TicketServiceDep = Annotated[TicketService, Depends(get_ticket_service)]
