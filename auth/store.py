"""
Credential store — persistence of ``Account`` rows.

Email uniqueness is enforced by the ``accounts.email`` unique constraint;
a losing concurrent insert surfaces as ``DuplicateEmail``.  Every call is
bounded by ``config.store_timeout_seconds`` and database failures are
re-raised as ``StoreError`` (``retryable`` for connection/timeout causes).
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Awaitable, Optional, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import AccountNotFound, DuplicateEmail, StoreError
from config.settings import config
from database.models import Account
from utils.validators import normalize_email

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UPDATABLE_FIELDS = frozenset({
    "name",
    "password_hash",
    "avatar",
    "verified",
    "verification_code",
    "reset_password_code",
})


def _to_uuid(value: str | uuid.UUID) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


class AccountStore:
    def __init__(self, session: AsyncSession, timeout: Optional[float] = None) -> None:
        self.session = session
        self.timeout = config.store_timeout_seconds if timeout is None else timeout

    async def _run(self, op: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            await self._rollback()
            logger.error("Account store %s timed out after %.1fs", op, self.timeout)
            raise StoreError(f"{op} timed out", retryable=True) from exc
        except OperationalError as exc:
            await self._rollback()
            logger.error("Account store %s failed (transient): %s", op, exc)
            raise StoreError(f"{op} failed", retryable=True) from exc

    async def _rollback(self) -> None:
        try:
            await self.session.rollback()
        except SQLAlchemyError:
            logger.exception("Rollback failed")

    async def _first(self, op: str, stmt) -> Optional[Account]:
        try:
            result = await self._run(op, self.session.execute(stmt))
        except SQLAlchemyError as exc:
            logger.exception("Account store %s failed", op)
            raise StoreError(f"{op} failed") from exc
        return result.scalar_one_or_none()

    async def _commit(self, op: str) -> None:
        try:
            await self._run(op, self.session.commit())
        except IntegrityError:
            await self._rollback()
            raise
        except SQLAlchemyError as exc:
            await self._rollback()
            logger.exception("Account store %s failed", op)
            raise StoreError(f"{op} failed") from exc

    # ── Reads ──────────────────────────────────────────────────────────

    async def find_by_email(self, email: str) -> Optional[Account]:
        stmt = select(Account).where(Account.email == normalize_email(email))
        return await self._first("find_by_email", stmt)

    async def find_by_id(self, account_id: str | uuid.UUID) -> Optional[Account]:
        uid = _to_uuid(account_id)
        if uid is None:
            return None
        return await self._first("find_by_id", select(Account).where(Account.id == uid))

    async def find_by_verification_code(self, code: str) -> Optional[Account]:
        stmt = select(Account).where(Account.verification_code == code)
        return await self._first("find_by_verification_code", stmt)

    async def find_by_reset_code(self, code: str) -> Optional[Account]:
        stmt = select(Account).where(Account.reset_password_code == code)
        return await self._first("find_by_reset_code", stmt)

    # ── Writes ─────────────────────────────────────────────────────────

    async def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        verification_code: str,
    ) -> Account:
        """Insert an unverified account; ``DuplicateEmail`` if the email is taken."""
        account = Account(
            id=uuid.uuid4(),
            name=name,
            email=normalize_email(email),
            password_hash=password_hash,
            verified=False,
            verification_code=verification_code,
        )
        self.session.add(account)
        try:
            await self._commit("create")
        except IntegrityError as exc:
            logger.info("Duplicate email rejected by unique constraint")
            raise DuplicateEmail() from exc
        return account

    async def update(self, account_id: str | uuid.UUID, **fields: Any) -> Account:
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not updatable: {sorted(unknown)}")

        account = await self.find_by_id(account_id)
        if account is None:
            raise AccountNotFound()
        for key, value in fields.items():
            setattr(account, key, value)
        try:
            await self._commit("update")
        except IntegrityError as exc:
            # only the unique code columns can collide here
            logger.exception("Update of account %s violated a constraint", account_id)
            raise StoreError("update failed") from exc
        return account

    async def delete(self, account_id: str | uuid.UUID) -> None:
        account = await self.find_by_id(account_id)
        if account is None:
            raise AccountNotFound()
        try:
            await self._run("delete", self.session.delete(account))
        except SQLAlchemyError as exc:
            logger.exception("Account store delete failed")
            raise StoreError("delete failed") from exc
        await self._commit("delete")
        logger.info("Deleted account %s", account_id)
