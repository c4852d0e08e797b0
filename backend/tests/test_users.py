from datetime import datetime, timezone

import pytest

from helpdesk.core.errors import DuplicateEmailError
from helpdesk.models import User, UserRole
from helpdesk.services.users import authenticate, create_user, get_user, get_user_by_email


def test_create_user_stores_lowercase_email_and_hash(session):
    user = create_user(session, name="Ana", email="Ana@Example.COM", password="s3cret-pass")

    assert user.email == "ana@example.com"
    assert user.role == UserRole.OPERATOR.value
    assert user.hashed_password != "s3cret-pass"
    assert user.hashed_password.startswith("$2")


def test_create_user_rejects_duplicate_email_case_insensitively(session):
    create_user(session, name="Ana", email="ana@example.com", password="s3cret-pass")

    with pytest.raises(DuplicateEmailError):
        create_user(session, name="Other", email="ANA@example.com", password="another-pass")


def test_authenticate_matches_password_and_ignores_email_case(session):
    user = create_user(session, name="Ana", email="ana@example.com", password="s3cret-pass")

    assert authenticate(session, "ANA@EXAMPLE.COM", "s3cret-pass").id == user.id
    assert authenticate(session, "ana@example.com", "wrong-pass") is None
    assert authenticate(session, "missing@example.com", "s3cret-pass") is None


def test_resaving_user_does_not_rehash_password(session):
    user = create_user(session, name="Ana", email="ana@example.com", password="s3cret-pass")
    stored_hash = user.hashed_password

    user.name = "Ana Maria"
    session.add(user)
    session.commit()
    session.refresh(user)

    assert user.hashed_password == stored_hash
    assert authenticate(session, "ana@example.com", "s3cret-pass") is not None


def test_lookups(session):
    user = create_user(session, name="Ana", email="ana@example.com", password="s3cret-pass", role="Manager")

    assert get_user(session, user.id).role == UserRole.MANAGER.value
    assert get_user_by_email(session, " Ana@example.com ").id == user.id
    assert session.get(User, user.id) is user


def test_timestamps_round_trip_as_utc(session):
    user = create_user(session, name="Ana", email="ana@example.com", password="s3cret-pass")
    user_id = user.id
    assert user.created_at.utcoffset().total_seconds() == 0

    # A naive value is taken to be UTC already.
    user.created_at = datetime(2024, 1, 1, 12, 0)
    session.add(user)
    session.commit()
    session.expire_all()

    assert get_user(session, user_id).created_at == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
