"""
Password hashing and session token helpers.

Passwords are hashed with bcrypt through passlib's ``CryptContext``. Sessions
use two HS256 JWTs signed with separate secrets:

- access token: short-lived, carries the user's public identity claims
- refresh token: long-lived, carries only the subject; the latest one issued
  is stored on the user row so a used or revoked token can be detected
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any, Dict
from uuid import uuid4

import jwt
from passlib.context import CryptContext

from vidtube.core.logging_config import get_logger
from vidtube.server.core.config import settings

if TYPE_CHECKING:
    from vidtube.core.database.entities.users import User

logger = get_logger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds)


class TokenError(Exception):
    """Raised when a token cannot be decoded, has expired or has the wrong type."""


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not plain_password or not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def _encode(claims: Dict[str, Any], secret: str, expires_delta: timedelta) -> str:
    now = datetime.now(timezone.utc)
    payload = {**claims, "jti": uuid4().hex, "iat": now, "exp": now + expires_delta}
    return jwt.encode(payload, secret, algorithm=settings.jwt_algorithm)


def create_access_token(user: User) -> str:
    """Issue an access token carrying the user's identity claims."""
    return _encode(
        {
            "sub": user.id,
            "email": user.email,
            "username": user.username,
            "full_name": user.full_name,
            "type": ACCESS_TOKEN_TYPE,
        },
        settings.access_token_secret,
        timedelta(minutes=settings.access_token_expire_minutes),
    )


def create_refresh_token(user: User) -> str:
    """Issue a refresh token carrying only the subject."""
    return _encode(
        {"sub": user.id, "type": REFRESH_TOKEN_TYPE},
        settings.refresh_token_secret,
        timedelta(days=settings.refresh_token_expire_days),
    )


def decode_token(token: str, token_type: str = ACCESS_TOKEN_TYPE) -> Dict[str, Any]:
    """Verify a token's signature, expiry and type and return its claims.

    Args:
        token: Encoded JWT
        token_type: Expected ``type`` claim (access or refresh)

    Returns:
        Decoded claims

    Raises:
        TokenError: If the token is expired, malformed, signed with the wrong
            secret, or of a different type
    """
    secret = settings.access_token_secret if token_type == ACCESS_TOKEN_TYPE else settings.refresh_token_secret
    try:
        claims = jwt.decode(token, secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError as e:
        raise TokenError(f"{token_type.capitalize()} token has expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid {token_type} token") from e

    if claims.get("type") != token_type or not claims.get("sub"):
        logger.debug(f"Rejected token with type={claims.get('type')!r}, expected {token_type!r}")
        raise TokenError(f"Invalid {token_type} token")
    return claims
