"""
FastAPI dependencies for authentication.

Provides ``db_session``, ``get_account_service`` and the bearer-token
gates ``get_current_account_id`` / ``get_reset_account_id`` used across
protected routes.
"""

from __future__ import annotations

from typing import AsyncGenerator, Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import Unauthorized
from auth.jwt import ACCESS_SCOPE, RESET_SCOPE, verify_token
from auth.notifications import CodeDispatcher, LoggingCodeDispatcher
from auth.service import AccountService
from auth.store import AccountStore
from database.session import get_db_session

_BEARER_PREFIX = "bearer "


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def get_code_dispatcher() -> CodeDispatcher:
    return LoggingCodeDispatcher()


def get_account_service(
    session: AsyncSession = Depends(db_session),
    dispatcher: CodeDispatcher = Depends(get_code_dispatcher),
) -> AccountService:
    return AccountService(AccountStore(session), dispatcher)


def _extract_token(authorization: Optional[str]) -> str:
    """The header carries the token verbatim; a ``Bearer`` prefix is tolerated."""
    if not authorization or not authorization.strip():
        raise Unauthorized("Missing authorization token")
    token = authorization.strip()
    if token.lower().startswith(_BEARER_PREFIX):
        token = token[len(_BEARER_PREFIX):].strip()
    return token


async def get_current_account_id(
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> str:
    """
    Extract and verify the access token, returning the authenticated
    account id (UUID string).
    """
    return verify_token(_extract_token(authorization), scope=ACCESS_SCOPE)


async def get_reset_account_id(
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> str:
    """Same as ``get_current_account_id`` but for reset-scoped tokens."""
    return verify_token(_extract_token(authorization), scope=RESET_SCOPE)
