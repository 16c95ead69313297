from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from itertools import count
from pathlib import Path
from typing import Generator

os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("DD_TRACE_ENABLED", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from message_board.core.config import Settings  # noqa: E402
from message_board.db.session import build_engine  # noqa: E402
from message_board.services.messages import MessageBoard  # noqa: E402
from message_board.store.memory import InMemoryOrderedMap  # noqa: E402
from message_board.store.sql import SqlMessageMap  # noqa: E402

EPOCH = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class TickingClock:
    """Returns a time one second later on every call."""

    def __init__(self, start: datetime = EPOCH) -> None:
        self._start = start
        self._ticks = count()

    def __call__(self) -> datetime:
        return self._start + timedelta(seconds=next(self._ticks))


class FrozenClock:
    def __init__(self, at: datetime = EPOCH) -> None:
        self.at = at

    def __call__(self) -> datetime:
        return self.at


@pytest.fixture
def board() -> MessageBoard:
    return MessageBoard(InMemoryOrderedMap(), clock=TickingClock())


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'messages.db'}"


@pytest.fixture
def sql_map(sqlite_url: str) -> SqlMessageMap:
    store = SqlMessageMap(build_engine(sqlite_url))
    store.create_schema()
    return store


@pytest.fixture
def client(sqlite_url: str) -> Generator[TestClient, None, None]:
    from message_board.main import create_app

    settings = Settings(store_backend="sql", database_url=sqlite_url)
    with TestClient(create_app(settings)) as test_client:
        yield test_client
