"""Async engine and session lifecycle for the registry database.

The API opens one engine in its lifespan and hands out a session per
request. CLI commands open a short-lived engine through
:func:`registry_session`. Services commit at most once per call, so a session
closed without that commit discards everything the call wrote.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any
from weakref import WeakKeyDictionary

from sqlalchemy.engine import Engine, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from votesmart_api.core.config import Settings

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None
_write_locks: WeakKeyDictionary[Engine, asyncio.Lock] = WeakKeyDictionary()


def _engine_options(database_url: str, schema: str | None, options: dict[str, Any]) -> dict[str, Any]:
    """Apply backend-specific engine options.

    PostgreSQL gets a bounded connection pool and, for isolated environments,
    a ``search_path`` pointing at ``schema``. SQLite has no schemas and keeps
    SQLAlchemy's default pool.
    """
    if make_url(database_url).get_backend_name() == "sqlite":
        if schema is not None:
            msg = "database_schema is only supported on PostgreSQL"
            raise ValueError(msg)
        return options

    if schema is not None:
        connect_args = dict(options.pop("connect_args", {}))
        connect_args["server_settings"] = {"search_path": f"{schema},public"}
        options["connect_args"] = connect_args
    options.setdefault("pool_size", 10)
    options.setdefault("max_overflow", 5)
    options.setdefault("pool_pre_ping", True)
    return options


def init_engine(database_url: str, *, schema: str | None = None, **options: Any) -> AsyncEngine:
    """Create the process-wide engine and session factory.

    Args:
        database_url: ``postgresql+asyncpg`` or ``sqlite+aiosqlite`` URL.
        schema: PostgreSQL schema holding the registry tables.
        **options: Extra keyword arguments for ``create_async_engine``.

    Returns:
        The new engine.
    """
    global _engine, _session_factory  # noqa: PLW0603
    _engine = create_async_engine(database_url, **_engine_options(database_url, schema, options))
    _session_factory = async_sessionmaker(_engine, expire_on_commit=False)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the session factory created by :func:`init_engine`.

    Raises:
        RuntimeError: If no engine has been initialized.
    """
    if _session_factory is None:
        msg = "Registry database is not initialized; call init_engine() first"
        raise RuntimeError(msg)
    return _session_factory


async def dispose_engine() -> None:
    """Close all pooled connections and forget the engine."""
    global _engine, _session_factory  # noqa: PLW0603
    if _engine is None:
        return
    await _engine.dispose()
    _engine = None
    _session_factory = None


@asynccontextmanager
async def registry_session(settings: Settings) -> AsyncIterator[AsyncSession]:
    """Open an engine for one command, yield a session, then tear both down."""
    init_engine(settings.database_url, schema=settings.database_schema)
    try:
        async with get_session_factory()() as session:
            yield session
    finally:
        await dispose_engine()


def write_lock(session: AsyncSession) -> asyncio.Lock:
    """Return the lock that serializes registry writes on the session's engine.

    Holding it from the access check until commit keeps concurrent writers in
    this process from reading the same row count or a stale master account.
    """
    engine = session.get_bind().engine
    lock = _write_locks.get(engine)
    if lock is None:
        lock = _write_locks[engine] = asyncio.Lock()
    return lock
