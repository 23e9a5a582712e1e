"""
Database store and session management.

Owns the process-wide async SQLAlchemy engine bound to pokemaster.db in the
platform application-data directory. The store is opened lazily on first
acquisition and the schema is created before the store is handed out.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from platformdirs import user_data_dir
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from pokemaster.config import APP_DIR_NAME, Settings, settings
from pokemaster.models.db import Base
from pokemaster.models.errors import ConfigurationError, StoreError

logger = logging.getLogger(__name__)


def describe_error(exc: SQLAlchemyError) -> str:
    """Return the engine's own error text, without SQLAlchemy's statement echo."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def resolve_database_path(config: Settings = settings) -> Path:
    """
    Resolve the database file path, creating its directory if absent.

    Raises:
        ConfigurationError: If the data directory cannot be resolved or created
    """
    try:
        data_dir = config.data_dir or Path(user_data_dir(APP_DIR_NAME, appauthor=False))
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigurationError(f"Could not create app data directory: {e}") from e

    return data_dir / config.database_filename


def _install_sqlite_pragmas(engine: AsyncEngine, busy_timeout_ms: int) -> None:
    """Enable foreign keys and set the busy timeout on every new connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragmas(dbapi_connection: Any, _connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        # Cascading deletes of prices depend on this
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute(f"PRAGMA busy_timeout={int(busy_timeout_ms)}")
        cursor.close()


class Store:
    """An engine plus the session factory bound to it."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_schema(self) -> None:
        """
        Create all tables and indexes that do not exist yet.

        Safe to run against an existing database; existing objects are left alone.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Session that commits on success and rolls back on database errors."""
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError:
                await session.rollback()
                raise

    async def close(self) -> None:
        await self.engine.dispose()


async def open_store(
    database_url: str,
    *,
    echo: bool = False,
    busy_timeout_ms: int = 5000,
) -> Store:
    """
    Open a store for a database URL and create the schema.

    Raises:
        StoreError: If the database cannot be opened or the schema created
    """
    engine = create_async_engine(database_url, echo=echo, pool_pre_ping=True)
    _install_sqlite_pragmas(engine, busy_timeout_ms)

    store = Store(engine)
    try:
        await store.create_schema()
    except SQLAlchemyError as e:
        await engine.dispose()
        raise StoreError(describe_error(e)) from e

    return store


# Process-wide store, opened on first acquisition
_store: Store | None = None

# Guards _store; rebuilt whenever acquisition runs under a different event loop
_store_lock: asyncio.Lock | None = None
_store_lock_loop: asyncio.AbstractEventLoop | None = None


def _lock() -> asyncio.Lock:
    global _store_lock, _store_lock_loop
    loop = asyncio.get_running_loop()
    if _store_lock is None or _store_lock_loop is not loop:
        _store_lock = asyncio.Lock()
        _store_lock_loop = loop
    return _store_lock


async def acquire_store(config: Settings = settings) -> Store:
    """
    Return the process-wide store, opening it on first use.

    Raises:
        ConfigurationError: If the data directory cannot be created
        StoreError: If the database cannot be opened
    """
    global _store
    async with _lock():
        if _store is None:
            path = resolve_database_path(config)
            logger.info("Opening database at %s", path)
            _store = await open_store(
                f"sqlite+aiosqlite:///{path}",
                echo=config.debug,
                busy_timeout_ms=config.busy_timeout_ms,
            )
        return _store


async def close_store() -> None:
    """Dispose the process-wide store, if it was opened."""
    global _store
    async with _lock():
        if _store is not None:
            await _store.close()
            _store = None
            logger.info("Database closed")


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    Usage in FastAPI:
        @app.get("/cards")
        async def get_cards(session: AsyncSession = Depends(get_session)):
            ...
    """
    store = await acquire_store()
    async with store.session() as session:
        yield session
