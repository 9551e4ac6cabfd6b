import os
from pathlib import Path

import mongomock
import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.deps import get_blob_store, get_db, get_settings
from blob import BlobResult, BlobStore
from config import Config

ADMIN_TOKEN = "test-admin-token"

# Smoke tests under tests/manual/ need a running server
MANUAL_DIR = Path(__file__).parent / "manual"


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.getgroup("earnwale").addoption(
        "--manual",
        action="store_true",
        help="Also run the live-server smoke tests under tests/manual/.",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("manual") or os.environ.get("PYTEST_INCLUDE_MANUAL", "").lower() in {"1", "true", "yes"}:
        return

    skip_manual = pytest.mark.skip(reason="needs a running API; pass --manual or set PYTEST_INCLUDE_MANUAL=1")
    manual_root = MANUAL_DIR.resolve()
    for item in items:
        if manual_root in Path(str(item.fspath)).resolve().parents:
            item.add_marker(skip_manual)


class RecordingBlobStore(BlobStore):
    """In-memory blob store that records every put() instead of calling the network."""

    def __init__(self, fail: bool = False):
        super().__init__(token="test-blob-token")
        self.fail = fail
        self.puts: list[tuple[str, bytes, str | None]] = []

    def put(self, pathname: str, data: bytes, *, content_type: str | None = None) -> BlobResult:
        if self.fail:
            raise RuntimeError("blob store unavailable")
        self.puts.append((pathname, data, content_type))
        return BlobResult(url=f"https://blob.example.com/{pathname}", pathname=pathname, content_type=content_type)


@pytest.fixture
def settings() -> Config:
    return Config(
        MONGODB_URI="mongodb://localhost:27017/earnwale_test",
        ADMIN_TOKEN=ADMIN_TOKEN,
        BLOB_READ_WRITE_TOKEN="test-blob-token",
        _env_file=None,
    )


@pytest.fixture
def db():
    return mongomock.MongoClient()["earnwale_test"]


@pytest.fixture
def blob_store() -> RecordingBlobStore:
    return RecordingBlobStore()


@pytest.fixture
def app(settings, db, blob_store):
    """Create the app with store, blob and settings dependencies overridden."""
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}
