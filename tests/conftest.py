# savesync Test Fixtures
# Pytest fixtures for savesync tests

import asyncio
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Optional

import pytest
import yaml

from savesync.sync.gateway import RemoteOutcome
from savesync.sync.item import SavedItem, SyncStatus
from savesync.sync.store import YamlRecordStore


class FakeGateway:
    """In-memory remote gateway recording every call."""

    def __init__(self) -> None:
        self.outcomes: dict[str, RemoteOutcome] = {}
        self.calls: list[tuple[str, str]] = []
        self.on_call: Optional[Callable[[str, str], None]] = None
        self.gate: Optional[asyncio.Event] = None
        self.raises: Optional[Exception] = None

    def respond(self, action: str, outcome: RemoteOutcome) -> None:
        self.outcomes[action] = outcome

    async def _call(self, action: str, item_id: str) -> RemoteOutcome:
        self.calls.append((action, item_id))
        if self.on_call:
            self.on_call(action, item_id)
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
        if self.raises is not None:
            raise self.raises
        return self.outcomes.get(action, RemoteOutcome.ok())

    async def archive(self, item_id: str) -> RemoteOutcome:
        return await self._call("archive", item_id)

    async def unarchive(self, item_id: str) -> RemoteOutcome:
        return await self._call("unarchive", item_id)

    async def delete(self, item_id: str) -> RemoteOutcome:
        return await self._call("delete", item_id)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("SAVESYNC_CONFIG", raising=False)
    return home


@pytest.fixture
def store_path(temp_dir: Path) -> Path:
    """Path of the YAML record store."""
    return temp_dir / "data" / "items.yaml"


@pytest.fixture
def store(store_path: Path) -> YamlRecordStore:
    """Record store seeded with one synced, unarchived item."""
    record_store = YamlRecordStore(store_path)
    record_store.update(
        SavedItem(
            id="item-1",
            is_archived=False,
            server_sync_status=SyncStatus.SYNCED,
            payload={"title": "First article", "url": "https://example.com/1"},
        )
    )
    return record_store


@pytest.fixture
def gateway() -> FakeGateway:
    """Gateway confirming every call unless told otherwise."""
    return FakeGateway()


@pytest.fixture
def sample_config(temp_dir: Path, store_path: Path) -> dict:
    """Create sample configuration dict."""
    return {
        "store": {"path": str(store_path)},
        "remote": {
            "base_url": "https://api.example.com",
            "token_env": "SAVESYNC_TEST_TOKEN",
            "timeout": 5.0,
        },
        "engine": {"max_workers": 2, "remote_on_missing": False},
        "output": {"verbose": False, "colored": False, "log_level": "WARNING"},
    }


@pytest.fixture
def config_file(temp_dir: Path, sample_config: dict) -> Path:
    """Create a configuration file."""
    config_path = temp_dir / "config" / "config.yaml"
    config_path.parent.mkdir(parents=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config, f, default_flow_style=False)

    return config_path
