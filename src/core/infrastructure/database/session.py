"""Database engine and sessions for the signup tables.

The engine is created on first use so the auth endpoints, which never touch
PostgreSQL, can serve requests without a reachable database.
"""

from collections.abc import AsyncGenerator

from loguru import logger
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine

from src.core.config import settings
from src.core.infrastructure.health import DatabaseHealthResult, HealthStatus

_engine: AsyncEngine | None = None


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        _engine = create_async_engine(
            settings.SQLALCHEMY_DATABASE_URI,
            pool_pre_ping=True,
            pool_size=5,
            max_overflow=5,
        )
    return _engine


async def dispose_engine() -> None:
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Session wrapped in a transaction; committed when the request succeeds."""
    async with AsyncSession(get_engine(), expire_on_commit=False) as session:
        async with session.begin():
            yield session


async def init_db() -> None:
    """Log whether the signup database is reachable at startup.

    A failure is not fatal: only the signup endpoints need the database.
    """
    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection established")
    except Exception as e:
        logger.error(f"Database unreachable, signup endpoints will fail: {e}")


async def check_db_health() -> DatabaseHealthResult:
    try:
        async with get_engine().connect() as conn:
            version = (await conn.execute(text("SELECT version()"))).scalar()
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        return DatabaseHealthResult(
            status=HealthStatus.ERROR,
            connected=False,
            error=str(e),
        )
    return DatabaseHealthResult(
        status=HealthStatus.OK,
        connected=True,
        version=version.split(",")[0] if version else "unknown",
    )
