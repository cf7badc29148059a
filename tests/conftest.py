"""Pytest configuration and fixtures."""

import httpx
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from solace.api import app
from solace.db import build_engine, get_session
from solace.models import Base
from solace.pipelines.seed import seed_advocates


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Temporary SQLite database with the advocates schema."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'advocates.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(session):
    """Seed the sample advocates; returns the inserted rows."""
    return await seed_advocates(session)


@pytest_asyncio.fixture
async def api_client(session_maker):
    """HTTP client bound to the ASGI app, with sessions from the test database."""

    async def override_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = override_session
    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
