"""BlobStore protocol.

The pipeline depends only on this capability surface, not on a provider
SDK. AzureBlobStore is the production implementation; tests use an
in-memory fake.
"""

from datetime import datetime
from typing import BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class BlobStore(Protocol):
    """An authenticated client for one storage account."""

    def upload(self, container: str, blob_name: str, data: BinaryIO) -> None:
        """Upload bytes as a new blob.

        Must fail rather than overwrite when the blob already exists.
        Transport and service errors propagate unchanged.
        """
        ...  # noqa: PLR6301

    def blob_url(self, container: str, blob_name: str) -> str:
        """Return the canonical URI of a blob, without any query string."""
        ...  # noqa: PLR6301

    def generate_read_sas(
        self,
        container: str,
        blob_name: str,
        expires_on: datetime,
    ) -> str:
        """Return a read-only SAS query string (no leading '?') for one blob."""
        ...  # noqa: PLR6301
