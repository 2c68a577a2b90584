"""API test fixtures — async DB + FastAPI test client over the sample media tree.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db and get_media_library dependencies overridden for the test
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - StaticPool keeps one connection: the in-memory DB lives as long as the engine
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

import melodyhub.infrastructure.database as db_module
import melodyhub.models  # noqa: F401
from melodyhub.api.dependencies import get_media_library
from melodyhub.db.base import Base
from melodyhub.infrastructure.database import DatabaseSessionManager, get_db
from melodyhub.infrastructure.media_library import MediaLibrary
from melodyhub.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
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
async def client(test_engine, test_session_factory, media_root):
    """FastAPI test client with DB and media library overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_library] = lambda: MediaLibrary(media_root)

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
async def queue_id(client):
    res = await client.post("/api/v1/queues", json={})
    assert res.status_code == 201
    return res.json()["id"]
