"""Owner token helpers built on python-jose."""
from __future__ import annotations

from datetime import timedelta

from jose import JWTError, jwt

from showcase.core.settings import settings
from showcase.db.time import utcnow


class InvalidTokenError(ValueError):
    """Raised when an owner token cannot be decoded or lacks a subject."""


def create_access_token(owner_id: str, *, expires_minutes: int | None = None) -> str:
    """Return a signed bearer token identifying a project owner.

    Tokens are normally issued by the external account service; this helper
    exists for operational tooling and tests.
    """
    ttl = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    payload = {
        "sub": owner_id,
        "exp": utcnow() + timedelta(minutes=ttl),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_owner_token(token: str) -> str:
    """Return the owner identity carried in ``token``.

    Raises:
        InvalidTokenError: If the signature, expiry or subject is invalid.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise InvalidTokenError("Could not validate credentials") from err

    subject = payload.get("sub")
    if not subject:
        raise InvalidTokenError("Could not validate credentials")
    return str(subject)
