"""
Tests for the account store (SQLite backed).
"""

import asyncio
import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError, ProgrammingError

from auth.errors import AccountNotFound, DuplicateEmail, StoreError
from auth.store import AccountStore


async def _create(store: AccountStore, email: str = "ann@x.com", code: str = "code-1"):
    return await store.create("Ann", email, "hash", code)


class TestAccountStore:
    @pytest.mark.asyncio
    async def test_create_normalizes_email(self, store):
        account = await _create(store, email="  Ann@X.com ")
        assert account.email == "ann@x.com"
        assert account.verified is False
        found = await store.find_by_email("ANN@x.com")
        assert found is not None and found.id == account.id

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected_by_constraint(self, store):
        await _create(store)
        with pytest.raises(DuplicateEmail):
            await _create(store, email="ANN@x.com", code="code-2")
        # the session is usable again after the failed insert
        assert await store.find_by_email("ann@x.com") is not None

    @pytest.mark.asyncio
    async def test_lookups_by_code_are_exact(self, store):
        account = await _create(store, code="AbC")
        assert (await store.find_by_verification_code("AbC")).id == account.id
        assert await store.find_by_verification_code("abc") is None

        await store.update(account.id, reset_password_code="Reset-1")
        assert (await store.find_by_reset_code("Reset-1")).id == account.id
        assert await store.find_by_reset_code("reset-1") is None

    @pytest.mark.asyncio
    async def test_find_by_id(self, store):
        account = await _create(store)
        assert (await store.find_by_id(str(account.id))).id == account.id
        assert await store.find_by_id("not-a-uuid") is None
        assert await store.find_by_id(uuid.uuid4()) is None

    @pytest.mark.asyncio
    async def test_update_partial(self, store):
        account = await _create(store)
        updated = await store.update(account.id, name="Dev")
        assert updated.name == "Dev"
        assert updated.email == "ann@x.com"
        assert updated.verification_code == "code-1"

    @pytest.mark.asyncio
    async def test_update_rejects_unknown_fields(self, store):
        account = await _create(store)
        with pytest.raises(ValueError):
            await store.update(account.id, email="other@x.com")

    @pytest.mark.asyncio
    async def test_update_and_delete_missing(self, store):
        with pytest.raises(AccountNotFound):
            await store.update(uuid.uuid4(), name="x")
        with pytest.raises(AccountNotFound):
            await store.delete(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_delete(self, store):
        account = await _create(store)
        await store.delete(account.id)
        assert await store.find_by_id(account.id) is None


class TestStoreFailures:
    def _store(self, execute, timeout: float = 1.0) -> AccountStore:
        session = MagicMock()
        session.execute = execute
        session.rollback = AsyncMock()
        return AccountStore(session, timeout=timeout)

    @pytest.mark.asyncio
    async def test_timeout_is_retryable(self):
        async def slow(*args, **kwargs):
            await asyncio.sleep(1)

        store = self._store(slow, timeout=0.01)
        with pytest.raises(StoreError) as info:
            await store.find_by_email("ann@x.com")
        assert info.value.retryable is True
        store.session.rollback.assert_awaited()

    @pytest.mark.asyncio
    async def test_operational_error_is_retryable(self):
        err = OperationalError("SELECT 1", {}, Exception("connection refused"))
        store = self._store(AsyncMock(side_effect=err))
        with pytest.raises(StoreError) as info:
            await store.find_by_id(uuid.uuid4())
        assert info.value.retryable is True

    @pytest.mark.asyncio
    async def test_other_database_errors_are_fatal(self):
        err = ProgrammingError("SELECT 1", {}, Exception("no such table"))
        store = self._store(AsyncMock(side_effect=err))
        with pytest.raises(StoreError) as info:
            await store.find_by_verification_code("code")
        assert info.value.retryable is False
        assert info.value.to_body() == {"message": "Internal server error"}
