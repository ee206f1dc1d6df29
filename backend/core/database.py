from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

logger = logging.getLogger(__name__)

NOT_READY = "Database is not open yet; call init_database() on startup."


def _configure_sqlite(dbapi_connection, connection_record) -> None:  # pragma: no cover
    """Per-connection pragmas: enforce team/player/match foreign keys, WAL journal."""
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
        try:
            cursor.execute("PRAGMA journal_mode=WAL")
        except Exception:
            # :memory: and some read-only files keep their journal mode
            logger.debug("Kept default SQLite journal mode")
    finally:
        cursor.close()


class DatabaseManager:
    """Engine and session factory for the game store (teams, matches, predictions)."""

    def __init__(self, database_url: str) -> None:
        self._database_url = database_url
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_sqlite(self) -> bool:
        return make_url(self._database_url).get_backend_name() == "sqlite"

    async def init(self) -> None:
        """Open the engine once; later calls keep the existing one."""
        if self._engine is not None:
            return

        shown = make_url(self._database_url).render_as_string(hide_password=True)
        logger.info("Opening game database %s", shown)
        self._engine = create_async_engine(self._database_url, echo=False)
        if self.is_sqlite:
            event.listen(self._engine.sync_engine, "connect", _configure_sqlite)

        self._sessionmaker = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            # rows are read after commit to build redirects and form payloads
            expire_on_commit=False,
        )

    async def create_tables(self) -> None:
        """Create missing tables for every model; existing tables are left alone."""
        from models.base import Base
        import models  # noqa: F401

        async with self._require_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Game tables ready: %s", ", ".join(sorted(Base.metadata.tables)))

    async def dispose(self) -> None:
        if self._engine is None:
            return
        logger.info("Closing game database")
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """One unit of work: committed when the block exits cleanly, rolled back otherwise."""
        if self._sessionmaker is None:
            raise RuntimeError(NOT_READY)

        async with self._sessionmaker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            await session.commit()

    def _require_engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError(NOT_READY)
        return self._engine

    @property
    def engine(self) -> Optional[AsyncEngine]:
        return self._engine


_db_manager: Optional[DatabaseManager] = None


async def init_database(database_url: str, create_tables: bool = False) -> None:
    """Open the process-wide database; create_tables=True also creates the schema."""
    global _db_manager

    if _db_manager is None:
        _db_manager = DatabaseManager(database_url)
    await _db_manager.init()
    if create_tables:
        await _db_manager.create_tables()


async def dispose_database() -> None:
    global _db_manager

    if _db_manager is not None:
        await _db_manager.dispose()
        _db_manager = None


def get_database_manager() -> DatabaseManager:
    if _db_manager is None:
        raise RuntimeError(NOT_READY)
    return _db_manager
