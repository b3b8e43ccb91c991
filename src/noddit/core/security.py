"""Bearer token helpers built on python-jose."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from noddit.core.settings import settings


def create_access_token(user_id: int, expires_minutes: int | None = None) -> str:
    """Create a JWT whose subject is the given user id."""
    minutes = settings.access_token_expire_minutes if expires_minutes is None else expires_minutes
    to_encode: dict[str, object] = {
        "sub": str(user_id),
        "exp": datetime.now(UTC) + timedelta(minutes=minutes),
    }
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_user_id(token: str) -> int | None:
    """Return the user id carried by ``token``, or None if it is not valid.

    Args:
        token: Encoded JWT taken from the Authorization header.

    Returns:
        The integer subject, or None when the signature, expiry or subject
        does not check out.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    subject = payload.get("sub")
    if subject is None:
        return None
    try:
        return int(subject)
    except (TypeError, ValueError):
        return None
