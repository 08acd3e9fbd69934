import os

os.environ.setdefault("HF_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("HF_ENVIRONMENT", "test")

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from hiring_funnel.api import deps
from hiring_funnel.main import create_app
from hiring_funnel.models import Base


def _memory_engine():
    return create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture()
async def async_engine():
    engine = _memory_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine):
    session_factory = async_sessionmaker(bind=async_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()


def _client_for(session: AsyncSession) -> httpx.AsyncClient:
    app = create_app()

    async def _session_override():
        yield session

    app.dependency_overrides[deps.get_db_session] = _session_override
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")


@pytest.fixture()
async def client(db_session):
    async with _client_for(db_session) as ac:
        yield ac


@pytest.fixture()
async def broken_client():
    # No tables: every query fails the way an unavailable store would.
    engine = _memory_engine()
    session_factory = async_sessionmaker(bind=engine, expire_on_commit=False)
    async with session_factory() as session:
        async with _client_for(session) as ac:
            yield ac
    await engine.dispose()
