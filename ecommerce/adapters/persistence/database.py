# ecommerce/adapters/persistence/database.py

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

import structlog
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ecommerce.adapters.persistence.tables import Base

logger = structlog.get_logger()


class Database:
    """
    Async engine + session factory.

        db = Database("sqlite+aiosqlite:///./ecommerce.db")
        await db.create_all()

        async with db.session() as session:
            ...
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        engine_kwargs: Dict[str, Any] = {}
        # An in-memory SQLite database only exists inside a single connection.
        if url.startswith("sqlite") and ":memory:" in url:
            engine_kwargs["poolclass"] = StaticPool

        self.engine = create_async_engine(url, echo=echo, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,
            class_=AsyncSession,
        )

    async def create_all(self) -> None:
        """Create any missing tables. No migrations are applied."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        One unit of work: commits when the block exits cleanly, rolls back
        and re-raises otherwise.
        """
        session = self._session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error("database_unreachable", error=str(e))
            return False


__all__ = ["Database"]
