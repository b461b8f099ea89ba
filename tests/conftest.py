"""Shared fixtures: an app bound to a throwaway SQLite file."""

from __future__ import annotations

import asyncio
from pathlib import Path
import sys
from typing import Callable

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from board.config.settings import BoardConfig, DatabaseConfig, Settings  # noqa: E402
from board.database import (  # noqa: E402
    create_engine,
    create_session_factory,
    dispose_engine,
    init_storage,
)
from board.main import create_app  # noqa: E402
from board.services import MessageStore  # noqa: E402


@pytest.fixture
def make_settings(tmp_path: Path) -> Callable[..., Settings]:
    """Build settings pointing at files under ``tmp_path``."""

    def _make(**board_options) -> Settings:
        return Settings(
            log_file=str(tmp_path / "logs" / "app.log"),
            database=DatabaseConfig(path=str(tmp_path / "messages.db")),
            board=BoardConfig(**board_options),
        )

    return _make


@pytest.fixture
def make_client(make_settings):
    """Start an app (lifespan included) for the given board options."""

    clients: list[TestClient] = []

    def _make(**board_options) -> TestClient:
        app = create_app(make_settings(**board_options))
        client = TestClient(app, raise_server_exceptions=False)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()


@pytest.fixture
def seed_messages(make_settings) -> Callable[[int], None]:
    """Insert ``count`` messages named ``msg-<n>`` before the app starts."""

    def _seed(count: int) -> None:
        database = make_settings().database

        async def _run() -> None:
            engine = create_engine(database)
            try:
                await init_storage(engine, database.path)
                store = MessageStore(create_session_factory(engine))
                for index in range(count):
                    await store.insert_message(f"msg-{index}", f"content-{index}")
            finally:
                await dispose_engine(engine)

        asyncio.run(_run())

    return _seed
