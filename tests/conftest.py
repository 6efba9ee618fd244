"""Shared test fixtures for the publisher test suite.

FakeBlobStore is an in-memory BlobStore: no network, no credentials.
Failures are injected by setting `upload_error` or `sign_error`.
"""

import logging
from datetime import datetime
from typing import BinaryIO, Optional
from urllib.parse import quote

import pytest
import structlog

TEST_ACCOUNT = "teststorage"


class FakeBlobStore:
    def __init__(self, account_name: str = TEST_ACCOUNT):
        self.account_name = account_name
        self.blobs: dict[tuple[str, str], bytes] = {}
        self.sas_requests: list[tuple[str, str, datetime]] = []
        self.upload_error: Optional[Exception] = None
        self.sign_error: Optional[Exception] = None

    def upload(self, container: str, blob_name: str, data: BinaryIO) -> None:
        if self.upload_error is not None:
            raise self.upload_error
        key = (container, blob_name)
        if key in self.blobs:
            raise FileExistsError(f"The specified blob already exists: {blob_name}")
        self.blobs[key] = data.read()

    def blob_url(self, container: str, blob_name: str) -> str:
        return f"https://{self.account_name}.blob.core.windows.net/{container}/{blob_name}"

    def generate_read_sas(self, container: str, blob_name: str, expires_on: datetime) -> str:
        if self.sign_error is not None:
            raise self.sign_error
        self.sas_requests.append((container, blob_name, expires_on))
        expiry = quote(expires_on.strftime("%Y-%m-%dT%H:%M:%SZ"), safe="")
        return f"se={expiry}&sp=r&sv=2023-11-03&sr=b&sig=fake"


@pytest.fixture
def fake_store() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture
def temp_root(tmp_path):
    """Isolated parent for staging dirs and archives, so leftovers are visible."""
    root = tmp_path / "tmp-root"
    root.mkdir()
    return root


@pytest.fixture
def inputs_dir(tmp_path):
    """A directory with a few artifact files of distinct content."""
    root = tmp_path / "inputs"
    root.mkdir()
    (root / "a.txt").write_text("alpha\n")
    (root / "b.txt").write_text("bravo\n")
    (root / "build").mkdir()
    (root / "build" / "app.log").write_text("log line\n")
    (root / "build" / "nested").mkdir()
    (root / "build" / "nested" / "deep.log").write_text("deep\n")
    return root


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop logging config bound to a test's captured streams."""
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
