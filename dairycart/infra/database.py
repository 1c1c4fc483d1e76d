"""Async database configuration.

Provides:
- Async SQLAlchemy engine and session factory
- Scoped session acquisition with guaranteed release
- Execution of builder-produced ``Query`` objects
"""

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import Result
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from dairycart.config import settings
from dairycart.infra.logging import get_logger

if TYPE_CHECKING:
    from dairycart.core.query_builder import Query

logger = get_logger(__name__)

# Type alias for dependency injection
DatabaseSession = AsyncSession

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"

# Global engine (initialized on first use)
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Get or create the async database engine."""
    global _engine

    if _engine is None:
        logger.info(
            "Creating database engine",
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_pool_max_overflow,
        )

        _engine = create_async_engine(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_pool_max_overflow,
            pool_pre_ping=True,  # Verify connections before use
            pool_recycle=1800,  # Recycle connections after 30 min
            echo=settings.debug,  # Log SQL in debug mode
        )

    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the session factory."""
    global _session_factory

    if _session_factory is None:
        _session_factory = async_sessionmaker(
            bind=get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    return _session_factory


@asynccontextmanager
async def get_db_session(commit: bool = True) -> AsyncGenerator[AsyncSession, None]:
    """Get an async database session scoped to one unit of work.

    Rolls back on any exception and always returns the connection to the
    pool. With ``commit`` the block is committed when it exits cleanly;
    without it the caller owns every commit.

    Example:
        async with get_db_session() as session:
            exists = await ExistenceGate(session).exists("products", "sku", sku)
    """
    factory = get_session_factory()
    session = factory()

    try:
        yield session
        if commit:
            await session.commit()

    except Exception as e:
        await session.rollback()
        logger.warning("Database session rolled back", error=str(e), error_type=type(e).__name__)
        raise

    finally:
        await session.close()


def is_unique_violation(error: IntegrityError) -> bool:
    """True when ``error`` comes from a unique index rather than another constraint."""
    code = getattr(error.orig, "sqlstate", None) or getattr(error.orig, "pgcode", None)
    if code is not None:
        return code == UNIQUE_VIOLATION
    return "duplicate key" in str(error.orig)


async def execute_query(session: AsyncSession, query: "Query") -> Result:
    """Run a builder-produced query with its positional args bound."""
    return await session.execute(text(query.sql), query.params())


async def close_db_engine() -> None:
    """Close the database engine and all connections.

    Call this during application shutdown.
    """
    global _engine, _session_factory

    if _engine is not None:
        logger.info("Closing database engine")
        await _engine.dispose()
        _engine = None
        _session_factory = None


async def verify_db_connection() -> bool:
    """Verify database connectivity.

    Returns:
        True if connection successful, False otherwise
    """
    try:
        async with get_db_session() as session:
            await session.execute(text("SELECT 1"))
            logger.info("Database connection verified")
            return True
    except Exception as e:
        logger.error("Database connection failed", error=str(e))
        return False
