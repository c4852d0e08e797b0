from datetime import timedelta

import pytest
from jose import jwt

from helpdesk.core.config import settings
from helpdesk.core.security import (
    create_access_token,
    create_token,
    get_password_hash,
    verify_password,
    verify_token,
)


def test_password_hash_is_salted_and_verifiable():
    first = get_password_hash("correct horse")
    second = get_password_hash("correct horse")

    assert first != "correct horse"
    assert first != second
    assert verify_password("correct horse", first)
    assert not verify_password("wrong horse", first)


def test_verify_password_rejects_non_bcrypt_value():
    assert not verify_password("secret", "plain-text-not-a-hash")


def test_access_token_carries_subject_and_thirty_day_expiry():
    token = create_access_token("user-1")

    payload = verify_token(token)

    assert payload["sub"] == "user-1"
    assert payload["type"] == "access"
    assert payload["exp"] - payload["iat"] == int(timedelta(days=30).total_seconds())


def test_expired_token_is_rejected():
    token = create_token("user-1", timedelta(seconds=-5), "access")

    with pytest.raises(ValueError):
        verify_token(token)


def test_token_signed_with_other_key_is_rejected():
    token = jwt.encode({"sub": "user-1", "type": "access"}, "another-key", algorithm=settings.JWT_ALGORITHM)

    with pytest.raises(ValueError):
        verify_token(token)


def test_token_type_must_match():
    token = create_token("user-1", timedelta(days=1), "refresh")

    with pytest.raises(ValueError):
        verify_token(token, token_type="access")
