"""Test fixtures: SQLite database, HTTP client and an account service."""

import os
import uuid
from pathlib import Path
from typing import List, Tuple

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_movienight.db")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from auth.dependencies import get_code_dispatcher  # noqa: E402
from auth.notifications import CodeDispatcher  # noqa: E402
from auth.service import AccountService  # noqa: E402
from auth.store import AccountStore  # noqa: E402
from database.models import Account, Base  # noqa: E402
from database.session import async_session_factory, engine  # noqa: E402
from main import app  # noqa: E402

test_db_path = Path("test_movienight.db")


class RecordingDispatcher(CodeDispatcher):
    """Keeps issued codes in memory instead of sending them anywhere."""

    def __init__(self) -> None:
        self.verifications: List[Tuple[str, str]] = []
        self.resets: List[Tuple[str, str]] = []

    async def send_verification(self, account, code: str) -> None:
        self.verifications.append((str(account.id), code))

    async def send_reset(self, account, code: str) -> None:
        self.resets.append((str(account.id), code))


@pytest.fixture(scope="session", autouse=True)
def remove_database_file():
    yield
    if test_db_path.exists():
        test_db_path.unlink()


@pytest_asyncio.fixture
async def database():
    """Create the schema before a test and drop it afterwards."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def session(database):
    async with async_session_factory() as session:
        yield session


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def store(session) -> AccountStore:
    return AccountStore(session)


@pytest.fixture
def service(store, dispatcher) -> AccountService:
    return AccountService(store, dispatcher)


@pytest_asyncio.fixture
async def client(database, dispatcher):
    """HTTP client against the app, with codes captured by ``dispatcher``."""
    app.dependency_overrides[get_code_dispatcher] = lambda: dispatcher
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client
    app.dependency_overrides.clear()


async def _load_account(account_id: str) -> Account:
    async with async_session_factory() as session:
        return await session.get(Account, uuid.UUID(account_id))


async def _delete_account(account_id: str) -> None:
    async with async_session_factory() as session:
        await AccountStore(session).delete(account_id)


@pytest.fixture
def load_account():
    """Read an account with a fresh session, the way an operator would."""
    return _load_account


@pytest.fixture
def delete_account():
    return _delete_account
