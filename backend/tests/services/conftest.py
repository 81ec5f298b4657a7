"""Service test fixtures — async DB, stores, and an authenticated FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - get_asset_store overridden to write into the test's tmp_path
    - client carries a valid bearer token; anon_client carries none

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - db_manager patched: readiness probe reads db_manager directly
    - StaticPool: one shared connection so every session sees the same :memory: database
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from employee_directory.api.deps import get_asset_store
from employee_directory.config import get_settings
from employee_directory.db.base import Base
from employee_directory.infrastructure.asset_store import LocalAssetStore
from employee_directory.infrastructure.database import get_db, DatabaseSessionManager
from employee_directory.infrastructure.employee_store import SqlEmployeeStore
from employee_directory.infrastructure.memory_store import InMemoryEmployeeStore
from employee_directory.infrastructure.security import create_access_token
import employee_directory.infrastructure.database as db_module
import employee_directory.models  # noqa: F401
from employee_directory.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def sql_store(test_db):
    return SqlEmployeeStore(test_db)


@pytest.fixture
def memory_store():
    return InMemoryEmployeeStore()


@pytest.fixture
def asset_store(tmp_path):
    return LocalAssetStore(
        str(tmp_path / "uploads"),
        max_bytes=1024,
        allowed_extensions=[".png", ".jpg"],
    )


@pytest.fixture
def auth_token():
    return create_access_token("tester", get_settings().secret_key)


@pytest.fixture
async def anon_client(test_engine, test_session_factory, asset_store):
    """FastAPI test client with DB and asset dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_asset_store] = lambda: asset_store

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def client(anon_client, auth_token):
    """Same client, with a bearer token on every request."""
    anon_client.headers["Authorization"] = f"Bearer {auth_token}"
    yield anon_client
    anon_client.headers.pop("Authorization", None)
