"""Database Session Manager — pooled async engine shared by all requests.

Invariants:
    - One engine per process; each request checks out its own session
    - Every session is rolled back on failure and closed on every exit path
    - SQLAlchemy and socket failures inside a session surface as DataAccessError
      carrying the driver's own message text
    - Engine creation failures surface as StoreConnectionError

Design Decisions:
    - The manager lives on app.state, built in the lifespan; no module-level singleton
    - pool_size/max_overflow skipped for SQLite URLs (its pools reject them)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import (
    DBAPIError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from fake_service_db.config import Settings
from fake_service_db.core.errors import DataAccessError, StoreConnectionError

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str | URL, pool_size: int = 20, max_overflow: int = 10,
    ):
        url = make_url(database_url)
        pool_kwargs = {}
        if url.get_backend_name() != "sqlite":
            pool_kwargs = {"pool_size": pool_size, "max_overflow": max_overflow}
        self.engine = create_async_engine(
            url,
            pool_pre_ping=True,
            pool_recycle=3600,
            **pool_kwargs,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise DataAccessError(_driver_message(e), "execute") from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise DataAccessError(_driver_message(e), "query") from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DataAccessError(str(e), "unknown") from e
        except OSError as e:
            await session.rollback()
            logger.error(f"DB connection error: {e}")
            raise DataAccessError(str(e), "connect") from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except DataAccessError as e:
            logger.error(f"DB health check failed: {e.message}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


def connect_store(settings: Settings) -> DatabaseSessionManager:
    """Build the pooled store handle; no connection is opened yet."""
    logger.info(
        "Attempting to connect to database",
        extra={"host": settings.database_host, "user": settings.database_user},
    )
    try:
        return DatabaseSessionManager(
            settings.sqlalchemy_url(),
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
    except (SQLAlchemyError, ImportError) as e:
        raise StoreConnectionError(f"Cannot connect to database: {e}") from e


def _driver_message(error: DBAPIError) -> str:
    """Driver text without SQLAlchemy's statement and background-link suffix."""
    if error.orig is not None:
        return str(error.orig)
    return str(error)
