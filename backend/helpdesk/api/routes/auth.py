from __future__ import annotations

from fastapi import APIRouter, Request, status

from helpdesk.api.deps import CurrentUser
from helpdesk.core.config import settings
from helpdesk.core.errors import NotFoundError, UnauthorizedError
from helpdesk.core.limiter import limiter
from helpdesk.core.security import create_access_token
from helpdesk.db import SessionDep
from helpdesk.models import User
from helpdesk.schemas import AuthResponse, UserCreate, UserLogin, UserRead
from helpdesk.services import users as user_store

router = APIRouter()


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        token=create_access_token(user.id),
    )


# TODO: restrict to Administrators once the first admin is provisioned by
# helpdesk-create-user in every deployment.
@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
def register_user(payload: UserCreate, session: SessionDep) -> AuthResponse:
    user = user_store.create_user(
        session,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
    )
    return _auth_response(user)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login and obtain a token",
)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def login(request: Request, payload: UserLogin, session: SessionDep) -> AuthResponse:
    user = user_store.authenticate(session, payload.email, payload.password)
    if user is None:
        raise UnauthorizedError("Invalid email or password")
    return _auth_response(user)


@router.get(
    "/profile",
    response_model=UserRead,
    summary="Current user profile",
)
def read_profile(current_user: CurrentUser, session: SessionDep) -> User:
    user = user_store.get_user(session, current_user.id)
    if user is None:
        raise NotFoundError("User not found")
    return user
