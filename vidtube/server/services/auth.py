"""
Authentication Dependency.

Resolves the calling user from an access token, read from the
``access_token`` cookie or an ``Authorization: Bearer`` header, and manages
the session cookies set on login and cleared on logout.
"""

from typing import Optional

from fastapi import Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.database import get_session
from vidtube.core.database.entities.users import User
from vidtube.core.errors import ApiError
from vidtube.core.logging_config import get_logger
from vidtube.core.security import ACCESS_TOKEN_TYPE, TokenError, decode_token
from vidtube.server.core import constant
from vidtube.server.core.config import settings

logger = get_logger(__name__)


def extract_access_token(request: Request) -> Optional[str]:
    token = request.cookies.get(constant.ACCESS_TOKEN_COOKIE)
    if token:
        return token
    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


async def get_current_user(request: Request, session: AsyncSession = Depends(get_session)) -> User:
    """
    Resolve the authenticated user for a request.

    Raises:
        ApiError: 401 when the token is missing, invalid, expired, or its
            user no longer exists
    """
    token = extract_access_token(request)
    if not token:
        raise ApiError(401, "Unauthorized request")

    try:
        claims = decode_token(token, ACCESS_TOKEN_TYPE)
    except TokenError as e:
        raise ApiError(401, str(e)) from e

    user = await session.get(User, claims["sub"])
    if user is None:
        logger.debug(f"Access token subject {claims['sub']} no longer exists")
        raise ApiError(401, "Invalid access token")
    return user


def set_auth_cookies(response: Response, access_token: str, refresh_token: str) -> None:
    options = {"httponly": True, "secure": settings.cookie_secure, "samesite": "lax"}
    response.set_cookie(
        constant.ACCESS_TOKEN_COOKIE,
        access_token,
        max_age=settings.access_token_expire_minutes * 60,
        **options,
    )
    response.set_cookie(
        constant.REFRESH_TOKEN_COOKIE,
        refresh_token,
        max_age=settings.refresh_token_expire_days * 24 * 60 * 60,
        **options,
    )


def clear_auth_cookies(response: Response) -> None:
    for name in (constant.ACCESS_TOKEN_COOKIE, constant.REFRESH_TOKEN_COOKIE):
        response.delete_cookie(name, httponly=True, secure=settings.cookie_secure, samesite="lax")
