"""Credential store: user creation, lookup and password verification."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from helpdesk.core.errors import DuplicateEmailError
from helpdesk.core.security import get_password_hash, verify_password
from helpdesk.models import User, UserRole

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user(session: Session, user_id: UUID) -> User | None:
    return session.get(User, user_id)


def get_user_by_email(session: Session, email: str) -> User | None:
    statement = select(User).where(User.email == normalize_email(email))
    return session.exec(statement).one_or_none()


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: UserRole | str = UserRole.OPERATOR,
) -> User:
    """Persist a new user, storing only a bcrypt hash of ``password``.

    Raises ``DuplicateEmailError`` when the email is taken, compared
    case-insensitively.
    """
    email = normalize_email(email)
    if get_user_by_email(session, email) is not None:
        raise DuplicateEmailError()

    user = User(
        name=name,
        email=email,
        hashed_password=get_password_hash(password),
        role=UserRole(role).value,
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError as exc:
        # Lost a race against a concurrent registration.
        session.rollback()
        raise DuplicateEmailError(detail=str(exc.orig)) from exc
    session.refresh(user)
    logger.info("Registered user %s with role %s", user.id, user.role)
    return user


def authenticate(session: Session, email: str, password: str) -> User | None:
    """Return the user when ``password`` matches, ``None`` otherwise."""
    user = get_user_by_email(session, email)
    if user is None or not verify_password(password, user.hashed_password):
        return None
    return user
