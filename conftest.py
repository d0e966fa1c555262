"""Shared pytest fixtures: in-memory SQLite database and location helpers."""

import os

# Settings are read at import time; keep tests off any real PostgreSQL
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_FORMAT", "console")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from lineage.models import Base, Location


@pytest.fixture
async def db_engine():
    """Fresh in-memory database with the schema created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def add_locations(session_factory):
    """
    Insert raw rows, bypassing validation (used to build cycles and
    dangling references).

    Usage:
        await add_locations(("Paris", 2000000, "France"), ("France", 68000000, None))
    """

    async def _add(*rows):
        async with session_factory() as session:
            await session.execute(
                insert(Location),
                [{"name": name, "population": population, "parent": parent}
                 for name, population, parent in rows],
            )
            await session.commit()

    return _add
