import logging
from typing import AsyncIterator

from fastapi import Cookie, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .config import get_settings
from .database import async_session
from .models import Member
from .utils.auth import AuthContext, decode_access_token

AUTH_COOKIE_NAME = "token"

logger = logging.getLogger(__name__)


async def get_session() -> AsyncIterator[AsyncSession]:
    async with async_session() as session:
        yield session


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


async def get_auth_context(
    token: str | None = Cookie(default=None, alias=AUTH_COOKIE_NAME),
    session: AsyncSession = Depends(get_session),
) -> AuthContext:
    if not token:
        raise _unauthorized("login required")
    settings = get_settings()
    try:
        auth = decode_access_token(token, secret=settings.auth_secret, algorithms=[settings.auth_algorithm])
    except ValueError as exc:
        raise _unauthorized("invalid or expired token") from exc

    # Closed here so the route can open its own transaction on the same session.
    try:
        async with session.begin():
            member_id = await session.scalar(select(Member.id).where(Member.id == auth.member_id))
    except SQLAlchemyError as exc:
        logger.exception("member lookup failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="member lookup failed") from exc
    if member_id is None:
        raise _unauthorized("member no longer exists")
    return auth


async def require_admin(auth: AuthContext = Depends(get_auth_context)) -> AuthContext:
    if not auth.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="admin role required")
    return auth
