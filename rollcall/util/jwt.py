"""JWT session token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from rollcall.config import SessionSettings


class TokenPayload(BaseModel):
    """JWT token payload."""

    uid: str
    email: str
    remember: bool = False
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    uid: str, email: str, settings: SessionSettings, remember: bool = False
) -> tuple[str, datetime]:
    """Create a signed session token for a directory user.

    Args:
        uid: Directory user uid
        email: Directory user email
        settings: Session settings
        remember: Whether this is a long-lived remembered session

    Returns:
        Encoded JWT token and its expiry time
    """
    lifetime = timedelta(days=settings.remember_days) if remember else timedelta(hours=12)
    expiry = datetime.now(timezone.utc) + lifetime

    payload = {
        "uid": uid,
        "email": email,
        "remember": remember,
        "exp": expiry,
    }

    token = jwt.encode(payload, settings.secret, algorithm=settings.algorithm)

    return token, expiry


def verify_token(token: str, settings: SessionSettings) -> TokenPayload:
    """Verify and decode a session token.

    Args:
        token: JWT token to verify
        settings: Session settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(token, settings.secret, algorithms=[settings.algorithm])
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
