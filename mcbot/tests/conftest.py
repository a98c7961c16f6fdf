"""Shared pytest fixtures for mcbot tests."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from fakes import MemoryAddressStore
from mcbot.services.game_status import StatusSnapshot

_ENV_KEYS = (
    "CHANNEL_ACCESS_TOKEN",
    "CHANNEL_SECRET",
    "LINE_API_BASE",
    "REDIS_URL",
    "AUTH_KEY",
    "PORT",
    "MC_QUERY_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    dotenv = tmp_path / ".env"
    monkeypatch.setenv("DOTENV_PATH", str(dotenv))
    return dotenv


@pytest.fixture(autouse=True)
def _reset_singletons(_isolate_env: Path):
    from mcbot.util.singletons import reset_all_singletons

    reset_all_singletons()
    yield
    reset_all_singletons()


@pytest.fixture()
def dotenv_path(_isolate_env: Path) -> Path:
    return _isolate_env


@pytest.fixture()
def store() -> MemoryAddressStore:
    return MemoryAddressStore()


@pytest.fixture()
def snapshot() -> StatusSnapshot:
    return StatusSnapshot(
        host="example.com",
        port=25565,
        version="Paper 1.20.4",
        online_players=2,
        max_players=20,
        player_names=["alex", "steve"],
        description="A Minecraft Server",
    )


@pytest.fixture()
def status_client(snapshot: StatusSnapshot) -> AsyncMock:
    client = AsyncMock()
    client.query = AsyncMock(return_value=snapshot)
    return client


@pytest.fixture()
def line() -> AsyncMock:
    client = AsyncMock()
    client.reply_text = AsyncMock(return_value={"x-line-request-id": "req-1"})
    client.verify_signature = lambda body, signature: signature == "valid-signature"
    return client
