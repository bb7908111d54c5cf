"""
Database engine and session management.

One Database object owns an async engine and its session factory.
PostgreSQL (asyncpg) gets a connection pool; SQLite files (aiosqlite,
used locally and in tests) get NullPool and have foreign keys switched
on so cascading deletes must respect the same ordering as in production.

Responsibility: Engine lifecycle, sessions and the FastAPI session dependency
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker
)
from sqlalchemy.pool import NullPool
import logging

from ..config import settings

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def engine_options(connection_string: str) -> Dict[str, Any]:
    """
    Engine keyword arguments for a connection string.

    Args:
        connection_string: SQLAlchemy async URL

    Returns:
        Pool options for create_async_engine
    """
    if connection_string.startswith("sqlite"):
        return {"poolclass": NullPool}

    return {
        "pool_size": settings.db.pool_size,
        "max_overflow": settings.db.max_overflow,
        "pool_timeout": settings.db.pool_timeout,
        "pool_recycle": settings.db.pool_recycle,
        "pool_pre_ping": True,
    }


class Database:
    """
    Async database handle for the newsroom store.

    Example:
        database = Database("sqlite+aiosqlite:///newsdesk.db")
        await database.initialize()
        await database.create_tables()

        async with database.session() as session:
            coverages = await LiveCoverageRepository(session).list_coverages()

        await database.close()
    """

    def __init__(self, connection_string: Optional[str] = None):
        """
        Args:
            connection_string: Overrides settings.db.connection_string
        """
        self.connection_string = connection_string
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_initialized(self) -> bool:
        return self.session_factory is not None

    async def initialize(self) -> None:
        """Create the engine and session factory (no connection is opened yet)."""
        if self.is_initialized:
            logger.warning("Database already initialized")
            return

        url = self.connection_string or settings.db.connection_string
        backend = url.split("://")[0]
        options = engine_options(url)

        self.engine = create_async_engine(
            url,
            echo=settings.db.echo,
            echo_pool=settings.db.echo_pool,
            **options
        )

        if backend.startswith("sqlite"):
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
            logger.info(f"Database ready: {backend} (NullPool, foreign keys on)")
        else:
            logger.info(
                f"Database ready: {backend} "
                f"(pool_size={options['pool_size']}, max_overflow={options['max_overflow']})"
            )

        # Objects stay readable after commit; repositories flush explicitly
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Open a session; commits pending work on clean exit, rolls back on error.

        Services that manage their own unit of work commit inside the block;
        the final commit is then a no-op.
        """
        if not self.is_initialized:
            raise RuntimeError("Database not initialized. Call initialize() first.")

        session = self.session_factory()
        try:
            yield session
            if session.in_transaction():
                await session.commit()
        except Exception as e:
            logger.error(f"Session error, rolling back: {e}")
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """
        Create missing tables from the ORM metadata.

        Local and test databases only; deployed databases use Alembic.
        """
        if not self.engine:
            raise RuntimeError("Database not initialized")

        from .models import Base

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info(f"Ensured {len(Base.metadata.tables)} tables exist")

    async def close(self) -> None:
        """Dispose of the engine; safe to call when never initialized."""
        if self.engine:
            await self.engine.dispose()
            logger.info("Database connections closed")

        self.engine = None
        self.session_factory = None


# Process-wide database used by the API
db = Database()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding a session from the global database.

    Initializes the global database lazily so scripts and tests can
    mount routers without running the application lifespan.
    """
    if not db.is_initialized:
        await db.initialize()
    async with db.session() as session:
        yield session
