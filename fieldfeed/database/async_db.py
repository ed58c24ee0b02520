import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator
from urllib.parse import quote_plus

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool, NullPool

from fieldfeed.config.settings import get_settings

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_async_database_url() -> str:
    """Build the asyncpg database URL"""
    settings = get_settings()
    host = settings.DB_HOST or "localhost"
    port = settings.DB_PORT or 5432
    user = settings.DB_USER or "postgres"
    database = settings.DB_NAME

    if not database:
        raise ValueError("Database name is required (DB_NAME)")

    encoded_user = quote_plus(user)
    if settings.DB_PASSWORD:
        encoded_password = quote_plus(settings.DB_PASSWORD)
        return f"postgresql+asyncpg://{encoded_user}:{encoded_password}@{host}:{port}/{database}"
    return f"postgresql+asyncpg://{encoded_user}@{host}:{port}/{database}"


def create_async_database_engine() -> AsyncEngine:
    """Create the async engine for the current environment"""
    settings = get_settings()
    try:
        base_config = {
            "echo": settings.DB_ECHO,
            "future": True,
            "pool_pre_ping": True,
        }

        if settings.is_development:
            logger.info("Creating async database engine for DEVELOPMENT (NullPool)")
            engine_config = {**base_config, "poolclass": NullPool}
        else:
            logger.info("Creating async database engine for PRODUCTION (AsyncAdaptedQueuePool)")
            engine_config = {
                **base_config,
                "poolclass": AsyncAdaptedQueuePool,
                "pool_size": settings.DB_POOL_SIZE,
                "max_overflow": settings.DB_MAX_OVERFLOW,
                "pool_recycle": settings.DB_POOL_RECYCLE,
                "pool_timeout": settings.DB_POOL_TIMEOUT,
            }

        return create_async_engine(get_async_database_url(), **engine_config)

    except Exception as e:
        logger.error(f"Failed to create async database engine: {e}")
        raise


def get_async_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        _engine = create_async_database_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_async_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _session_factory


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding a request-scoped session.

    Commits when the request handler returns, rolls back on error.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.error(f"Async database error: {e}")
            await session.rollback()
            raise


@asynccontextmanager
async def get_async_db_context():
    """
    Session context for work outside a request (scripts, background jobs)
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.error(f"Async database error: {e}")
            await session.rollback()
            raise


async def check_database_health() -> bool:
    """Run a trivial query; used by the health endpoint."""
    try:
        async with get_async_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        return False


async def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        logger.info("Database engine disposed")
    _engine = None
    _session_factory = None
