"""
Account lifecycle — signup, verification, login, profile and password reset.

State per account: ``unverified -> verified``; a reset may be pending on
verified accounts only.  Inputs are validated before anything is written,
and nothing is retried here.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Optional

from auth.codes import generate_code, generate_distinct_code
from auth.errors import (
    AccountNotFound,
    Conflict,
    DuplicateEmail,
    InvalidCode,
    Unauthorized,
)
from auth.jwt import RESET_SCOPE, create_token
from auth.notifications import CodeDispatcher, LoggingCodeDispatcher
from auth.password import burn_password_check, hash_password, verify_password
from auth.store import AccountStore
from database.models import Account
from utils.validators import (
    check_required,
    ensure_valid,
    normalize_email,
    validate_login,
    validate_new_password,
    validate_profile_update,
    validate_signup,
)

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(
        self,
        store: AccountStore,
        dispatcher: Optional[CodeDispatcher] = None,
    ) -> None:
        self.store = store
        self.dispatcher = dispatcher or LoggingCodeDispatcher()

    # ── Signup / verification ──────────────────────────────────────────

    async def signup(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> str:
        """
        Register an unverified account and return its id.

        A pending (unverified) account with the same email is superseded:
        its name and password are replaced and a new verification code is
        issued.  A verified account with that email raises ``Conflict``.
        """
        ensure_valid(validate_signup(name, email, password))

        email = normalize_email(email)
        name = name.strip()
        existing = await self.store.find_by_email(email)
        if existing is not None and existing.verified:
            raise Conflict()

        password_hash = hash_password(password)
        code = generate_code()

        if existing is not None:
            account = await self.store.update(
                existing.id,
                name=name,
                password_hash=password_hash,
                verification_code=code,
            )
            logger.info("Re-issued signup for pending account %s", account.id)
        else:
            try:
                account = await self.store.create(name, email, password_hash, code)
            except DuplicateEmail as exc:
                raise Conflict() from exc
            logger.info("Registered account %s", account.id)

        await self.dispatcher.send_verification(account, code)
        return str(account.id)

    async def verify(self, code: str) -> None:
        account = await self.store.find_by_verification_code(code) if code else None
        if account is None or account.verified:
            raise InvalidCode("Invalid verification code")

        await self.store.update(account.id, verified=True, verification_code=None)
        logger.info("Verified account %s", account.id)

    # ── Login ──────────────────────────────────────────────────────────

    async def login(self, email: Optional[str], password: Optional[str]) -> str:
        """Return an access token; every credential failure looks the same."""
        ensure_valid(validate_login(email, password))

        account = await self.store.find_by_email(email)
        if account is None:
            burn_password_check(password)
            raise Unauthorized()
        if not verify_password(password, account.password_hash) or not account.verified:
            logger.info("Rejected login for account %s", account.id)
            raise Unauthorized()

        logger.info("Login: account %s", account.id)
        return create_token(str(account.id))

    # ── Profile ────────────────────────────────────────────────────────

    async def get_profile(self, account_id: str) -> Account:
        account = await self.store.find_by_id(account_id)
        if account is None:
            raise AccountNotFound()
        return account

    async def update_profile(
        self,
        account_id: str,
        name: Optional[str] = None,
        avatar: Optional[str] = None,
    ) -> Account:
        ensure_valid(validate_profile_update(name, avatar))

        changes: Dict[str, Any] = {}
        if name is not None:
            changes["name"] = name.strip()
        if avatar is not None:
            changes["avatar"] = avatar.strip() or None
        return await self.store.update(account_id, **changes)

    # ── Password reset ─────────────────────────────────────────────────

    async def request_reset(self, email: Optional[str]) -> str:
        """
        Start a password reset and return a reset-scoped token.

        The response does not depend on whether the email is registered:
        unknown or unverified emails get a token bound to a random id that
        can never complete a reset.
        """
        ensure_valid(check_required("email", email))

        account = await self.store.find_by_email(email)
        if account is None or not account.verified:
            logger.info("Reset requested for an unknown or unverified email")
            return create_token(str(uuid.uuid4()), scope=RESET_SCOPE)

        code = generate_distinct_code(account.verification_code, account.reset_password_code)
        await self.store.update(account.id, reset_password_code=code)
        await self.dispatcher.send_reset(account, code)
        return create_token(str(account.id), scope=RESET_SCOPE)

    async def confirm_reset(
        self,
        account_id: str,
        code: str,
        new_password: Optional[str],
    ) -> None:
        """
        Finish a reset for the account named by the reset token.

        The code must be the one issued to that same account.
        """
        ensure_valid(validate_new_password(new_password))

        account = await self.store.find_by_id(account_id)
        if account is None:
            raise AccountNotFound()

        owner = await self.store.find_by_reset_code(code) if code else None
        if owner is None or owner.id != account.id:
            raise InvalidCode("Invalid reset code")

        await self.store.update(
            account.id,
            password_hash=hash_password(new_password),
            reset_password_code=None,
        )
        logger.info("Password reset completed for account %s", account.id)
