"""
Pytest fixtures for CMS tests.
"""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path
from typing import Generator, Optional

import pytest

# Add project root to path for cms imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Set test environment
os.environ["CMS_DATA_PATH"] = "/tmp/cms_test_data"
os.environ["CMS_LOG_FILE"] = ""

from cms.exceptions import StorageError, StorageUploadError  # noqa: E402
from cms.storage import Database, StorageClient, StorageEntry  # noqa: E402

TEST_JWT_SECRET = "test-secret-key-with-enough-length-for-hs256"


class FakeStorage(StorageClient):
    """
    In-memory object store recording every call.

    Failure injection:
        fail_list_at_offset: raise on the list page starting at this offset
        fail_remove_on_call: raise on the Nth remove() call (1-based)
        page_override: fixed per-offset entry names, bypassing stored objects
    """

    def __init__(self, paths: Optional[list[str]] = None):
        self.objects: dict[str, bytes] = {path: b"" for path in paths or []}
        self.list_calls: list[tuple[str, int, int]] = []
        self.remove_calls: list[list[str]] = []
        self.upload_calls: list[tuple[str, Optional[str]]] = []
        self.fail_list_at_offset: Optional[int] = None
        self.fail_remove_on_call: Optional[int] = None
        self.fail_upload = False
        self.page_override: Optional[dict[int, list[str]]] = None

    async def list(self, prefix: str, limit: int, offset: int) -> list[StorageEntry]:
        self.list_calls.append((prefix, limit, offset))
        if self.fail_list_at_offset == offset:
            raise StorageError("Storage returned HTTP 500", "list exploded")
        if self.page_override is not None:
            return [StorageEntry(name=name) for name in self.page_override.get(offset, [])]
        names = sorted(
            path[len(prefix) + 1:]
            for path in self.objects
            if path.startswith(prefix + "/")
        )
        return [StorageEntry(name=name) for name in names[offset:offset + limit]]

    async def remove(self, paths: list[str]) -> None:
        self.remove_calls.append(list(paths))
        if self.fail_remove_on_call == len(self.remove_calls):
            raise StorageError("Storage returned HTTP 500", "remove exploded")
        for path in paths:
            self.objects.pop(path, None)

    async def upload(self, path: str, data: bytes, content_type: Optional[str] = None) -> str:
        self.upload_calls.append((path, content_type))
        if self.fail_upload:
            raise StorageUploadError(path, "The resource already exists")
        self.objects[path] = data
        return path

    def get_public_url(self, path: str) -> Optional[str]:
        return f"https://cdn.example.test/{path}"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def temp_db(temp_dir: Path) -> Generator[Database, None, None]:
    """SQLite database in a temporary directory."""
    db = Database(temp_dir / "cms.sqlite3")
    yield db
    db.close()


@pytest.fixture
def test_config(temp_dir: Path) -> dict:
    from cms.configs import DEFAULT_CONFIG

    config = dict(DEFAULT_CONFIG)
    config.update({
        "database_path": str(temp_dir / "cms.sqlite3"),
        "jwt_secret": TEST_JWT_SECRET,
        "jwt_expire": "1h",
        "serialize_syncs": False,
    })
    return config


@pytest.fixture
def api_client(test_config, temp_db, fake_storage):
    """Test client with services pointed at a temp database and fake storage."""
    from fastapi.testclient import TestClient

    from cms.configs.services import reset_services, set_config, set_database, set_storage
    from cms.http import create_app

    reset_services()
    set_config(test_config)
    set_database(temp_db)
    set_storage(fake_storage)

    client = TestClient(create_app(allowed_origins=["http://localhost:3000"]))
    yield client

    # temp_db is closed by its own fixture; drop the reference first
    set_database(None)
    reset_services()
