"""Storage initialisation and engine management for the SQLite store."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from board.config.settings import DatabaseConfig

# Import models so they are attached to Base.metadata before table creation
from board.models import Base  # noqa: F401 - ensures metadata is registered
from board.models import message  # noqa: F401

logger = logging.getLogger(__name__)


def create_engine(config: DatabaseConfig) -> AsyncEngine:
    """Create an async engine for the configured SQLite file."""

    engine_options: dict[str, Any] = {
        "echo": config.echo,
        "pool_pre_ping": True,
    }
    return create_async_engine(config.url, **engine_options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return the session factory bound to ``engine``."""

    return async_sessionmaker(
        engine,
        expire_on_commit=False,
        class_=AsyncSession,
    )


def ensure_database_file(path: str | Path) -> bool:
    """Create the database file (and its directory) when missing.

    Returns ``True`` when the file was created by this call.
    """

    db_path = Path(path)
    if db_path.exists():
        return False

    db_path.parent.mkdir(parents=True, exist_ok=True)
    db_path.touch()
    logger.info("Created database file at %s", db_path.resolve())
    return True


async def init_storage(engine: AsyncEngine, path: str | Path) -> None:
    """Ensure the database file exists and the messages table is present."""

    try:
        ensure_database_file(path)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except Exception:
        logger.exception("Storage initialisation failed for %s", path)
        raise

    logger.info("Ensured database tables in %s.", path)


async def dispose_engine(engine: AsyncEngine) -> None:
    """Dispose of the engine and release pooled connections."""

    await engine.dispose()


__all__ = [
    "create_engine",
    "create_session_factory",
    "ensure_database_file",
    "init_storage",
    "dispose_engine",
]
