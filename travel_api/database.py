"""
Travel API — Datastore Client
===============================

What:  Async SQLAlchemy engine, connection pool, and session helpers wrapped
       in a single injectable Datastore object.
Why:   One object owns the pool lifecycle; handlers receive it explicitly via
       FastAPI's dependency injection instead of importing a global engine.
How:   create_app() builds a Datastore and stores it on app.state; the
       get_datastore dependency hands it to route handlers.
When:  Engine is created with the app; connections are checked out per request.

Connection Pooling Strategy:
    pool_size=10:     Ceiling on concurrent MySQL connections
    max_overflow=0:   No temporary connections beyond the ceiling
    pool_timeout:     Callers beyond the ceiling queue until a connection frees up
    pool_pre_ping:    Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour (MySQL wait_timeout)
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncConnection,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from travel_api.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for the travel ORM models."""
    pass


class Datastore:
    """
    Bounded pool of MySQL connections plus session/connection helpers.

    Every helper is an async context manager, so a checked-out connection is
    returned to the pool exactly once, including when the query raises.
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_overflow: int = 0,
        pool_timeout: float = 30.0,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(
            url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_pre_ping=pool_pre_ping,
            pool_recycle=3600,
            echo=echo,
        )
        # expire_on_commit=False: generated ids stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Datastore":
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Yield an ORM session that commits on success and rolls back on error.

        Example:
            async with datastore.session() as session:
                session.add(ContactMessage(name="A", email="a@x.com", message="hi"))
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    @asynccontextmanager
    async def connect(self) -> AsyncGenerator[AsyncConnection, None]:
        """Yield a raw pooled connection for Core/text statements."""
        async with self.engine.connect() as conn:
            yield conn

    async def ping(self) -> Dict[str, Any]:
        """
        Round-trip a trivial query through the pool.

        Returns:
            {"test": 1} when the datastore is reachable.

        Raises:
            Whatever the driver raises when it cannot connect or execute.
        """
        async with self.connect() as conn:
            result = await conn.execute(text("SELECT 1 AS test"))
            return dict(result.mappings().one())

    async def dispose(self) -> None:
        """Close all pooled connections (application shutdown)."""
        await self.engine.dispose()


# ── Dependency ────────────────────────────────────────────────────────────
def get_datastore(request: Request) -> Datastore:
    """FastAPI dependency returning the Datastore attached to the running app."""
    return request.app.state.datastore
