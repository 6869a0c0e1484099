"""
Async SQLAlchemy store client.

A ``Database`` is built once by ``main.create_app`` and kept on
``app.state.database``; request handlers get sessions through the
``get_db_session`` dependency.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from config.settings import config
from database.models import Base
from utils.errors import StoreUnavailable

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> Dict[str, Any]:
    if url.startswith("postgresql"):
        return {
            "pool_size": 10,
            "max_overflow": 20,
            "pool_recycle": 3600,
            "pool_pre_ping": True,
            "connect_args": {
                "timeout": config.db_connect_timeout_seconds,
                "command_timeout": config.db_command_timeout_seconds,
            },
        }
    if url.startswith("sqlite"):
        return {"connect_args": {"timeout": config.db_command_timeout_seconds}}
    return {}


class Database:
    """Owns the engine and session factory for one process."""

    def __init__(self, url: str | None = None) -> None:
        self.url = url or config.database_url
        self.engine = create_async_engine(self.url, echo=False, **_engine_options(self.url))
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self.connected = False

    async def connect(self) -> None:
        """
        Verify the store is reachable and create missing tables.

        Raises ``StoreUnavailable`` if the database cannot be reached
        within ``db_connect_timeout_seconds``.
        """
        try:
            await asyncio.wait_for(self._create_schema(), config.db_connect_timeout_seconds)
        except Exception as exc:
            logger.error("Database connection failed (%s): %s", self.engine.url.render_as_string(), exc)
            raise StoreUnavailable("Database is unreachable") from exc
        self.connected = True
        logger.info("Connected to database %s", self.engine.url.render_as_string())

    async def _create_schema(self) -> None:
        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
        self.connected = False
        logger.info("Database connections closed")


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency function — use in FastAPI `Depends(get_db_session)`."""
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
