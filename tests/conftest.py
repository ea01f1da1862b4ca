# tests/conftest.py
import os

# Must be set before projectshelf is imported anywhere
os.environ.setdefault("PROJECTSHELF_SKIP_PLUGINS", "1")

import pytest

from projectshelf.config import loader
from projectshelf.core.backends import ProjectBackend
from projectshelf.core.errors import StoreError
from projectshelf.backends.memory import MemoryBackend

FIXED_NOW = "2025-06-01T12:00:00.000Z"

@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Points config and logs at a temp dir and forgets any cached config."""
    home = tmp_path / "home"
    monkeypatch.setenv("PROJECTSHELF_HOME", str(home))
    for var in list(os.environ):
        if var.startswith("PROJECTSHELF_") and var not in ("PROJECTSHELF_HOME", "PROJECTSHELF_SKIP_PLUGINS"):
            monkeypatch.delenv(var)
    loader.reset_config_cache()
    yield home
    loader.reset_config_cache()

@pytest.fixture
def fixed_now():
    return lambda: FIXED_NOW

@pytest.fixture
def sample_rows():
    return [
        {
            "id": "p-old", "user_id": "alice", "name": "Token", "type": "move_contract",
            "status": "draft", "created_at": "2025-01-01T10:00:00Z",
            "files": [{"id": "f1", "name": "sources/token.move", "type": "move", "content": "module token {}"}],
        },
        {
            "id": "p-new", "user_id": "alice", "name": "Vault", "status": "deployed",
            "created_at": "2025-03-05T08:30:00Z", "tx_hash": "0xabc", "contract_address": "0x1::vault",
            "files": {"a": {"name": "Move.toml", "content": "[package]"}, "b": "module vault {}"},
        },
        {
            "id": "p-mid", "user_id": "alice", "created_at": "2025-02-10T00:00:00Z", "files": None,
        },
        {
            "id": "p-bob", "user_id": "bob", "name": "Other", "created_at": "2025-04-01T00:00:00Z", "files": [],
        },
    ]

@pytest.fixture
def memory_backend(sample_rows):
    return MemoryBackend(rows=sample_rows)

class FailingBackend(ProjectBackend):
    """Backend whose every call fails, counting attempts."""
    name = "failing"

    def __init__(self):
        self.fetch_calls = 0
        self.delete_calls = 0

    async def fetch_rows(self, owner_id):
        self.fetch_calls += 1
        raise StoreError("connection refused")

    async def delete_row(self, project_id):
        self.delete_calls += 1
        raise StoreError("permission denied", status=403)

@pytest.fixture
def failing_backend():
    return FailingBackend()
