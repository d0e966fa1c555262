"""
Database session utilities.

Centralized database connection management: URL resolution, engine and
session factory construction, and table creation.

Usage:
    from lineage.database import create_session_factory, get_database_url

    async_session, engine = create_session_factory(get_database_url())

    async with async_session() as session:
        ...

    await engine.dispose()
"""

from typing import AsyncGenerator, Tuple

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from lineage.config import settings
from lineage.models import Base
from lineage.observability import get_logger

logger = get_logger(__name__)


def get_database_url() -> str:
    """
    Resolve the async database URL from settings.

    DATABASE_URL_OVERRIDE wins when set; otherwise the URL is assembled from
    the POSTGRES_* settings. A plain postgresql:// URL is upgraded to the
    asyncpg driver.
    """
    url = settings.DATABASE_URL
    if url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def create_session_factory(
    database_url: str,
    pool_size: int = 5,
    max_overflow: int = 10,
    pool_timeout: int = 30,
    pool_recycle: int = 3600,
    pool_pre_ping: bool = True,
    echo: bool = False,
) -> Tuple[async_sessionmaker[AsyncSession], AsyncEngine]:
    """
    Create async engine and session factory with configurable pool settings.

    Args:
        database_url: Async connection URL
        pool_size: Number of connections to keep in pool (default: 5)
        max_overflow: Max connections above pool_size (default: 10)
        pool_timeout: Seconds to wait for a pooled connection (default: 30)
        pool_recycle: Connection recycle time in seconds (default: 3600)
        pool_pre_ping: Test connections before use (default: True)
        echo: Log all SQL statements (default: False)

    Returns:
        Tuple of (session factory, engine). Dispose the engine on shutdown.
    """
    engine_kwargs = {"pool_pre_ping": pool_pre_ping, "echo": echo}
    # SQLite (tests, local runs) uses a pool without sizing options
    if not database_url.startswith("sqlite"):
        engine_kwargs.update(
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_recycle=pool_recycle,
        )

    engine = create_async_engine(database_url, **engine_kwargs)

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    return session_factory, engine


async def init_models(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured", extra={"tables": sorted(Base.metadata.tables)})


# Default engine and session factory for the API process
AsyncSessionLocal, engine = create_session_factory(
    get_database_url(),
    pool_size=settings.POSTGRES_POOL_SIZE,
    max_overflow=settings.POSTGRES_MAX_OVERFLOW,
    pool_timeout=settings.POSTGRES_POOL_TIMEOUT,
    pool_recycle=settings.POSTGRES_POOL_RECYCLE,
    echo=settings.DEBUG,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Rolls back on error so a failed request never leaves a transaction open.

    Usage:
        @app.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
