import itertools
import os

# Must be set before the package reads its settings.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from helpdesk.core.security import create_access_token
from helpdesk.db import build_engine, get_session, init_db
from helpdesk.main import create_application
from helpdesk.models import UserRole
from helpdesk.services.users import create_user

DEFAULT_PASSWORD = "s3cret-pass"


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def app(session):
    app = create_application()
    app.dependency_overrides[get_session] = lambda: session
    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def make_user(session):
    counter = itertools.count(1)

    def factory(*, role=UserRole.OPERATOR, email=None, name=None, password=DEFAULT_PASSWORD):
        index = next(counter)
        return create_user(
            session,
            name=name or f"User {index}",
            email=email or f"user{index}@example.com",
            password=password,
            role=role,
        )

    return factory


@pytest.fixture
def auth_headers():
    def factory(user):
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return factory
