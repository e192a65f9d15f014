# tests/test_security.py
"""Tests for owner token helpers."""

import pytest
from jose import jwt

from showcase.core.security import InvalidTokenError, create_access_token, decode_owner_token
from showcase.core.settings import settings


def test_token_round_trip() -> None:
    assert decode_owner_token(create_access_token("owner-9")) == "owner-9"


def test_expired_token_is_rejected() -> None:
    with pytest.raises(InvalidTokenError):
        decode_owner_token(create_access_token("owner-9", expires_minutes=-5))


def test_token_without_subject_is_rejected() -> None:
    token = jwt.encode({"scope": "owner"}, settings.secret_key, algorithm=settings.jwt_algorithm)
    with pytest.raises(InvalidTokenError):
        decode_owner_token(token)


def test_token_signed_with_other_key_is_rejected() -> None:
    token = jwt.encode({"sub": "owner-9"}, "another-key", algorithm=settings.jwt_algorithm)
    with pytest.raises(InvalidTokenError):
        decode_owner_token(token)
